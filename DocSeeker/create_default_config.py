import copy
import json
import os

CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

DEFAULT_CONFIG = {
    "indexing": {
        "follow_symlinks": False,
        "extensions": [],
        "output": "index.json"
    },
    "server": {
        "host": "127.0.0.1",
        "port": 6969,
        "static_dir": None
    },
    "search": {
        "top_k": 10
    }
}


def create_default_config(config_path=CONFIG_PATH):
    """Write the default configuration to config_path"""
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(DEFAULT_CONFIG, f, indent=2)
    print(f"Default configuration written to {config_path}")


def load_config(config_path=None):
    """
    Load configuration from file, falling back to defaults.

    Each section found in the file is merged over the default section,
    so a partial file only overrides the keys it names.

    Args:
        config_path: Path to a config.json (defaults to the one in the package)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = config_path or CONFIG_PATH

    if not os.path.exists(config_path):
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Warning: Could not load config: {e}, using default settings")
        return config

    if not isinstance(loaded, dict):
        print(f"Warning: {config_path} is not a JSON object, using default settings")
        return config

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


if __name__ == "__main__":
    create_default_config()
