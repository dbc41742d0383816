# utils.py
"""
Utility functions for the application framework.

This module provides helper functions, such as logging setup and value
mapping, that are used across different parts of the application but do
not belong to a specific domain like physics or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Sequence, Tuple

import pygame

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# map_range(value, in_min, in_max, out_min, out_max) -> float:
#   - Linear (affine) mapping, not clamped. in_min must differ from in_max.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/tearfall.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Maps value from [in_min, in_max] onto [out_min, out_max] linearly."""
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)

def validate_range(name: str, bounds: Sequence[float]) -> Tuple[float, float]:
    """
    Returns bounds as a (low, high) float tuple.

    Raises:
        ValueError: If bounds is not a pair or low > high.
    """
    if len(bounds) != 2 or bounds[0] > bounds[1]:
        msg = f"Configuration error: '{name}' must be a [low, high] pair, got {list(bounds)}."
        logging.critical(msg)
        raise ValueError(msg)
    return float(bounds[0]), float(bounds[1])

def hue_to_rgb(hue: float) -> Tuple[int, int, int]:
    """Returns the fully saturated, full brightness RGB colour for a hue in degrees."""
    color = pygame.Color(0, 0, 0)
    color.hsva = (hue % 360, 100, 100, 100)
    return color.r, color.g, color.b
