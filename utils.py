import os


def ensure_data_dir(data_dir="data"):
    """Create the data directory if it doesn't exist."""
    if not os.path.exists(data_dir):
        os.makedirs(data_dir, exist_ok=True)
    return data_dir


def get_data_path(filename, data_dir="data"):
    """Get standardized path for a file kept in the data directory."""
    directory = ensure_data_dir(data_dir)
    return os.path.join(directory, filename)


def get_scores_path(data_dir="data"):
    return get_data_path("scores.json", data_dir)
