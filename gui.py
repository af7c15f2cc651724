import logging
import sys

import pygame

from cell import Cell
from errors import ConfigurationError
from game import DRAW, TicTacToe
from minimax_ai import MinimaxAI
from patterns import WINNING_LINES, winning_line
from scoreboard import Scoreboard
from settings import build_arg_parser, configure_logging, settings_from_args

logger = logging.getLogger(__name__)


class TicTacToeGUI:
    # Constants
    WIDTH, HEIGHT = 800, 800
    LINE_WIDTH = 15
    BOARD_ROWS, BOARD_COLS = 3, 3
    BOARD_LEFT, BOARD_TOP = 100, 200

    # Colors
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    RED = (220, 50, 50)
    BLUE = (50, 120, 220)
    LIGHT_BLUE = (100, 170, 255)
    LIGHT_RED = (255, 130, 130)
    GRAY = (200, 200, 200)
    DARK_GRAY = (80, 80, 80)
    BG_COLOR = (240, 240, 245)
    HIGHLIGHT = (170, 255, 170)

    # Search options shown in the menu, fastest first
    SEARCH_OPTIONS = {"Alpha-Beta": "alpha-beta", "Minimax": "minimax"}
    SEARCH_HINT = "Minimax as X: slow first move"

    def __init__(self, settings):
        pygame.init()

        self.screen = pygame.display.set_mode((self.WIDTH, self.HEIGHT))
        pygame.display.set_caption("Tic-Tac-Toe Minimax")
        self.font = pygame.font.Font(None, 36)
        self.title_font = pygame.font.Font(None, 60)

        self.settings = settings
        self.game = TicTacToe()
        self.player_marker = settings.human
        self.ai = MinimaxAI(player=settings.engine_marker, use_pruning=settings.use_pruning)

        self.animations = []
        self.win_animation = None

        self.scoreboard = Scoreboard(settings.data_dir)
        self.score_updated = False

    @property
    def cell_width(self):
        return (self.WIDTH - 200) // self.BOARD_COLS

    @property
    def cell_height(self):
        return (self.HEIGHT - 350) // self.BOARD_ROWS

    def cell_center(self, row, col):
        return (col * self.cell_width + self.BOARD_LEFT + self.cell_width // 2,
                row * self.cell_height + self.BOARD_TOP + self.cell_height // 2)

    def mark_size(self):
        return min(self.cell_width, self.cell_height) // 2 - 15

    def search_label(self):
        return "Alpha-Beta" if self.ai.use_pruning else "Minimax"

    def draw_scoreboard(self):
        board_width = 200
        board_height = 150
        x = self.WIDTH // 2 - board_width // 2
        y = 20

        pygame.draw.rect(self.screen, self.WHITE, (x, y, board_width, board_height), 0, border_radius=10)
        pygame.draw.rect(self.screen, self.DARK_GRAY, (x, y, board_width, board_height), 2, border_radius=10)

        title_text = self.font.render("SCOREBOARD", True, self.BLACK)
        self.screen.blit(title_text, (x + board_width // 2 - title_text.get_width() // 2, y + 15))

        scores = self.scoreboard.scores
        you_x = self.player_marker is Cell.CROSS
        rows = [
            (f"{'You' if you_x else 'AI'} (X): {scores['X']}", self.RED),
            (f"{'AI' if you_x else 'You'} (O): {scores['O']}", self.BLUE),
            (f"Draws: {scores['Draw']}", self.GRAY),
        ]
        for i, (text, color) in enumerate(rows):
            surf = self.font.render(text, True, color)
            self.screen.blit(surf, (x + 20, y + 50 + i * 30))

    def draw_button(self, text, x, y, width, height, default_color, hover_color):
        button_rect = pygame.Rect(x, y, width, height)
        hovered = button_rect.collidepoint(pygame.mouse.get_pos())

        pygame.draw.rect(self.screen, hover_color if hovered else default_color, button_rect, 0, border_radius=10)
        pygame.draw.rect(self.screen, self.DARK_GRAY if hovered else self.BLACK, button_rect, 2, border_radius=10)

        text_surf = self.font.render(text, True, self.BLACK)
        self.screen.blit(text_surf, text_surf.get_rect(center=button_rect.center))
        return button_rect

    def choose(self, title, options, colors, hint=None):
        """Show one button per option and return the clicked option, or None on quit."""
        while True:
            self.screen.fill(self.BG_COLOR)
            title_surf = self.title_font.render(title, True, self.BLACK)
            self.screen.blit(title_surf, (self.WIDTH // 2 - title_surf.get_width() // 2, 150))
            if hint:
                hint_surf = self.font.render(hint, True, self.DARK_GRAY)
                self.screen.blit(hint_surf, (self.WIDTH // 2 - hint_surf.get_width() // 2, 215))

            rects = []
            for i, option in enumerate(options):
                rects.append(self.draw_button(option, self.WIDTH // 2 - 150, 280 + i * 120, 300, 80,
                                              colors[i % len(colors)], self.HIGHLIGHT))
            pygame.display.update()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return None
                if event.type == pygame.MOUSEBUTTONDOWN:
                    for option, rect in zip(options, rects):
                        if rect.collidepoint(event.pos):
                            return option

    def main_menu(self):
        marker = self.choose("Choose Your Marker", ["Play as X", "Play as O"], [self.RED, self.BLUE])
        if marker is None:
            return False
        search = self.choose("Choose Search", list(self.SEARCH_OPTIONS), [self.LIGHT_BLUE, self.LIGHT_RED],
                             hint=self.SEARCH_HINT)
        if search is None:
            return False

        self.player_marker = Cell.CROSS if marker.endswith("X") else Cell.CIRCLE
        self.ai.use_pruning = self.SEARCH_OPTIONS[search] == "alpha-beta"
        self.ai.set_player(self.player_marker.opposite())
        self.reset_game()
        return True

    def draw_board(self):
        self.screen.fill(self.BG_COLOR)

        board_rect = pygame.Rect(self.BOARD_LEFT, self.BOARD_TOP, self.WIDTH - 200, self.HEIGHT - 350)
        pygame.draw.rect(self.screen, self.WHITE, board_rect, 0, border_radius=15)
        pygame.draw.rect(self.screen, self.DARK_GRAY, board_rect, 3, border_radius=15)

        for row in range(1, self.BOARD_ROWS):
            y_pos = row * self.cell_height + self.BOARD_TOP
            pygame.draw.line(self.screen, self.DARK_GRAY, (110, y_pos), (self.WIDTH - 110, y_pos), self.LINE_WIDTH // 2)
        for col in range(1, self.BOARD_COLS):
            x_pos = col * self.cell_width + self.BOARD_LEFT
            pygame.draw.line(self.screen, self.DARK_GRAY, (x_pos, 210), (x_pos, self.HEIGHT - 140), self.LINE_WIDTH // 2)

        status_surf = self.font.render(f"Search: {self.search_label()}", True, self.BLACK)
        self.screen.blit(status_surf, (100, self.HEIGHT - 120))

        if self.game.winner is None:
            current = self.game.current_player
            whose = "You" if current is self.player_marker else "AI"
            turn_surf = self.font.render(f"Current Turn: {current.value} ({whose})", True,
                                         self.RED if current is Cell.CROSS else self.BLUE)
            self.screen.blit(turn_surf, (self.WIDTH // 2 - turn_surf.get_width() // 2 + 100, self.HEIGHT - 120))

        undo_rect = self.draw_button("Undo", 100, self.HEIGHT - 70, 100, 40, self.LIGHT_RED, self.HIGHLIGHT)
        redo_rect = self.draw_button("Redo", self.WIDTH - 200, self.HEIGHT - 70, 100, 40, self.LIGHT_BLUE, self.HIGHLIGHT)
        new_game_rect = self.draw_button("New Game", self.WIDTH // 2 - 100, self.HEIGHT - 70, 200, 40,
                                         self.LIGHT_BLUE, self.HIGHLIGHT)
        return new_game_rect, undo_rect, redo_rect

    def draw_marks(self):
        self.animations = [anim for anim in self.animations if not anim.complete]
        animated_cells = {(anim.row, anim.col) for anim in self.animations}

        for row, cells in enumerate(self.game.board.cells):
            for col, cell in enumerate(cells):
                if cell is Cell.EMPTY or (row, col) in animated_cells:
                    continue
                center_x, center_y = self.cell_center(row, col)
                draw_mark(self.screen, cell, center_x, center_y, self.mark_size(), self.LINE_WIDTH,
                          self.RED, self.BLUE, self.DARK_GRAY)

        for anim in self.animations:
            anim.update()
            anim.draw(self.screen, self.LINE_WIDTH, self.RED, self.BLUE, self.DARK_GRAY)

        if self.win_animation:
            self.win_animation.update()
            self.win_animation.draw(self.screen, self.LINE_WIDTH)

    def animate_move(self, row, col):
        center_x, center_y = self.cell_center(row, col)
        self.animations.append(
            MarkAnimation(self.game.board.cells[row][col], row, col, center_x, center_y, self.mark_size())
        )

    def play_ai_move(self):
        move = self.ai.best_move(self.game.board)
        if move is None:
            return
        if self.game.make_move(move.row, move.col):
            self.animate_move(move.row, move.col)

    def handle_cell_click(self, mouse_pos):
        board_x = mouse_pos[0] - self.BOARD_LEFT
        board_y = mouse_pos[1] - self.BOARD_TOP

        if 0 <= board_x < self.WIDTH - 200 and 0 <= board_y < self.HEIGHT - 350:
            col = board_x // self.cell_width
            row = board_y // self.cell_height
            if 0 <= row < 3 and 0 <= col < 3 and self.game.make_move(row, col):
                self.animate_move(row, col)
                return row, col
        return None

    def display_winner(self):
        overlay = pygame.Surface((self.WIDTH, self.HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 128))
        self.screen.blit(overlay, (0, 0))

        if self.game.winner == DRAW:
            result_text, color = "Draw!", self.BLACK
        else:
            result_text = f"{self.game.winner.value} Wins!"
            color = self.RED if self.game.winner is Cell.CROSS else self.BLUE

        text_surf = self.title_font.render(result_text, True, color)
        bg_rect = text_surf.get_rect(center=(self.WIDTH // 2, self.HEIGHT // 2))
        bg_rect.inflate_ip(40, 40)
        pygame.draw.rect(self.screen, self.WHITE, bg_rect, 0, border_radius=15)
        pygame.draw.rect(self.screen, color, bg_rect, 3, border_radius=15)
        self.screen.blit(text_surf, text_surf.get_rect(center=(self.WIDTH // 2, self.HEIGHT // 2)))

    def check_win_line(self):
        if self.win_animation or self.game.winner in (None, DRAW):
            return
        index = winning_line(self.game.board)
        if index is None:
            return

        bits = [b for b in range(9) if WINNING_LINES[index] & (1 << b)]
        start = self.cell_center(bits[0] // 3, bits[0] % 3)
        end = self.cell_center(bits[-1] // 3, bits[-1] % 3)
        color = self.RED if self.game.winner is Cell.CROSS else self.BLUE
        self.win_animation = WinLineAnimation(start, end, color)

    def clear_effects(self):
        self.animations = []
        self.win_animation = None

    def update_scoreboard(self):
        """Record the finished game once; undo and redo never count it again."""
        if self.game.winner is not None and not self.score_updated:
            self.scoreboard.record(self.game.winner)
            self.score_updated = True

    def step_history(self, step):
        """Undo or redo until it is the player's turn again.

        The AI's reply and the player's move are taken back (or replayed)
        together. If history runs out on the AI's turn, the AI moves.
        """
        if not step():
            return
        while self.game.winner is None and self.game.current_player is not self.player_marker:
            if not step():
                self.play_ai_move()
                break
        self.clear_effects()

    def reset_game(self):
        self.game = TicTacToe()
        self.ai.reset()
        self.clear_effects()
        self.score_updated = False

        # If player chose 'O', let AI make the first move
        if self.player_marker is Cell.CIRCLE:
            if not self.ai.use_pruning:
                self.show_thinking()
            else:
                pygame.time.delay(500)
            self.play_ai_move()

    def show_thinking(self):
        self.draw_board()
        text_surf = self.font.render("Building game tree...", True, self.DARK_GRAY)
        self.screen.blit(text_surf, text_surf.get_rect(center=(self.WIDTH // 2, self.HEIGHT // 2)))
        pygame.display.update()

    def run_game(self):
        if not self.main_menu():
            pygame.quit()
            return

        running = True
        clock = pygame.time.Clock()
        while running:
            self.update_scoreboard()
            self.check_win_line()

            new_game_rect, undo_rect, redo_rect = self.draw_board()
            self.draw_marks()
            self.draw_scoreboard()
            if self.game.winner:
                self.display_winner()
            pygame.display.update()
            clock.tick(60)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if new_game_rect.collidepoint(event.pos):
                        self.reset_game()
                    elif undo_rect.collidepoint(event.pos):
                        self.step_history(self.game.undo)
                    elif redo_rect.collidepoint(event.pos):
                        self.step_history(self.game.redo)
                    elif self.game.winner is None and self.game.current_player is self.player_marker:
                        if self.handle_cell_click(event.pos) and self.game.winner is None:
                            pygame.time.delay(200)
                            self.play_ai_move()
        pygame.quit()


def draw_mark(screen, mark_type, center_x, center_y, size, line_width, red_color, blue_color, dark_gray):
    if size <= 0:
        return
    if mark_type is Cell.CROSS:
        for offset, color in ((5, dark_gray), (0, red_color)):
            pygame.draw.line(screen, color,
                             (center_x - size + offset, center_y - size + offset),
                             (center_x + size + offset, center_y + size + offset),
                             line_width)
            pygame.draw.line(screen, color,
                             (center_x + size + offset, center_y - size + offset),
                             (center_x - size + offset, center_y + size + offset),
                             line_width)
    else:
        pygame.draw.circle(screen, dark_gray, (center_x + 5, center_y + 5), size, line_width)
        pygame.draw.circle(screen, blue_color, (center_x, center_y), size, line_width)


class MarkAnimation:
    """Animation for X and O markers appearing on the board"""
    def __init__(self, mark_type, row, col, center_x, center_y, final_size):
        self.mark_type = mark_type
        self.row = row
        self.col = col
        self.center_x = center_x
        self.center_y = center_y
        self.final_size = final_size
        self.current_size = 0
        self.growth_speed = final_size / 8  # Takes 8 frames to reach full size
        self.complete = False

    def update(self):
        if self.current_size < self.final_size:
            self.current_size += self.growth_speed
        else:
            self.current_size = self.final_size
            self.complete = True

    def draw(self, screen, line_width, red_color, blue_color, dark_gray):
        draw_mark(screen, self.mark_type, self.center_x, self.center_y, int(self.current_size),
                  line_width, red_color, blue_color, dark_gray)


class WinLineAnimation:
    """Animation for the winning line"""
    def __init__(self, start_pos, end_pos, color):
        self.start_pos = start_pos
        self.end_pos = end_pos
        self.color = color
        self.current_length = 0
        self.total_length = ((end_pos[0] - start_pos[0]) ** 2 +
                             (end_pos[1] - start_pos[1]) ** 2) ** 0.5
        self.growth_speed = self.total_length / 15  # Takes 15 frames to complete

    def update(self):
        self.current_length = min(self.total_length, self.current_length + self.growth_speed)

    def draw(self, screen, line_width):
        progress = min(1.0, self.current_length / self.total_length)
        current_x = self.start_pos[0] + (self.end_pos[0] - self.start_pos[0]) * progress
        current_y = self.start_pos[1] + (self.end_pos[1] - self.start_pos[1]) * progress
        pygame.draw.line(screen, self.color, self.start_pos, (current_x, current_y), line_width)


def main(argv=None):
    parser = build_arg_parser("Tic-tac-toe against a minimax engine (pygame)")
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    configure_logging(settings)
    logger.info("Starting GUI with %s search", settings.search_mode)
    TicTacToeGUI(settings).run_game()
    return 0


if __name__ == "__main__":
    sys.exit(main())
