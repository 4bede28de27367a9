"""
Configuration loader for the tracker.

Loads settings from a tracker.env file. Every key is optional.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import envparse

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tracker.env"
DEFAULT_DB_PATH = Path("data") / "db.json"
DEFAULT_LOG_LEVEL = "WARNING"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
CONFIG_KEYS = ("DB_PATH", "LOG_LEVEL", "LOG_FILE")


@dataclass
class TrackerConfig:
    """Settings from tracker.env"""
    db_path: Path
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None


def default_config(base_dir: Path) -> TrackerConfig:
    return TrackerConfig(db_path=base_dir / DEFAULT_DB_PATH)


def load_config(config_path: Path | None = None, cwd: Path | None = None) -> TrackerConfig:
    """Load tracker.env and return TrackerConfig.

    Args:
        config_path: Explicit env file. Must exist when given.
        cwd: Directory searched for tracker.env when config_path is None
             (defaults to the current directory).

    Relative DB_PATH and LOG_FILE values resolve against the directory of
    the env file.

    Raises:
        FileNotFoundError: config_path was given but does not exist
        ValueError: env file is malformed
    """
    if config_path is None:
        base_dir = cwd or Path.cwd()
        candidate = base_dir / CONFIG_FILENAME
        if not candidate.exists():
            logger.debug(f"No {CONFIG_FILENAME} in {base_dir}, using defaults")
            return default_config(base_dir)
        config_path = candidate

    config_path = Path(config_path)
    env = envparse.load_env(config_path, known_keys=CONFIG_KEYS)
    base_dir = config_path.parent

    log_level = env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{log_level}' in {config_path}, using {DEFAULT_LOG_LEVEL}")
        log_level = DEFAULT_LOG_LEVEL

    log_file = None
    if env.get("LOG_FILE"):
        log_file = base_dir / env["LOG_FILE"]

    return TrackerConfig(
        db_path=base_dir / env.get("DB_PATH", str(DEFAULT_DB_PATH)),
        log_level=log_level,
        log_file=log_file,
    )
