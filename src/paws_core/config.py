"""
User configuration persistence.

Stores settings like the kennel directory and RNG seed in a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)


class Config(TypedDict, total=False):
    """User configuration."""
    kennels_dir: str  # Where JsonKennelStore keeps kennel files
    seed: int | None  # Fixed RNG seed for reproducible runs
    opponent_count: int  # Synthetic opponents per competition
    log_level: str  # DEBUG, INFO, WARNING, ...
    ailment_catalog: str | None  # YAML file replacing the built-in ailments


DEFAULT_CONFIG: Config = {
    "kennels_dir": "kennels",
    "seed": None,
    "opponent_count": 7,
    "log_level": "WARNING",
    "ailment_catalog": None,
}


def get_config_path(config_dir: Path | str = ".") -> Path:
    """Get path to config file."""
    return Path(config_dir) / ".paws_config.json"


def load_config(config_dir: Path | str = ".") -> Config:
    """Load config from file, or return defaults if not found."""
    path = get_config_path(config_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return DEFAULT_CONFIG.copy()

    if not isinstance(saved, dict):
        logger.warning(f"Ignoring config {path}: expected a JSON object")
        return DEFAULT_CONFIG.copy()

    # Merge with defaults to handle missing keys
    config = DEFAULT_CONFIG.copy()
    config.update(saved)
    return config


def save_config(config: Config, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)

    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        logger.warning(f"Could not save config {path}: {e}")
        return False


def set_seed(seed: int | None, config_dir: Path | str = ".") -> bool:
    """Save RNG seed preference. Returns True on success."""
    config = load_config(config_dir)
    config["seed"] = seed
    return save_config(config, config_dir)
