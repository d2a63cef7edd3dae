# utils.py
"""
Utility functions for the application framework.

This module provides helper functions, such as logging setup and
configuration loading, that are used across the application but do not
belong to a specific domain like motion or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary optionally containing a "logging" key with
#       "level", "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: the parsed configuration merged over DEFAULT_CONFIG.
#   - Raises: FileNotFoundError, json.JSONDecodeError (after logging).

DEFAULT_CONFIG: Dict[str, Any] = {
    "window": {
        "width": 1280,
        "height": 720,
        "fullscreen": False
    },
    "run_control": {
        "seed": None,
        "max_frames": None,
        "log_throttle_frames": 300,
        "profile": False
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(levelname)s - %(message)s",
        "log_file": "logs/background.log"
    }
}

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Routes the root logger to the console and to a rotating log file.
    """
    log_config = {**DEFAULT_CONFIG['logging'], **config.get('logging', {})}
    log_level = log_config['level'].upper()
    log_file_path = log_config['log_file']

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(log_level)
    # Reconfiguring replaces, never stacks, handlers.
    root.handlers.clear()

    handlers = [
        logging.StreamHandler(),
        logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        ),
    ]
    formatter = logging.Formatter(log_config['format'])
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info(f"Logging initialized at {log_level}, writing to {log_file_path}.")


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file, filling in defaults for missing keys."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    return _merge(DEFAULT_CONFIG, config)
