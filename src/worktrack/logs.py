import logging
import os
import sys
from pathlib import Path

DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "worktrack" / "logs"

def get_log_dir() -> Path:
    """Directory for the detailed log file, overridable with WORKTRACK_LOG_DIR."""
    override = os.getenv('WORKTRACK_LOG_DIR', '')
    return Path(override) if override else DEFAULT_LOG_DIR

def setup_logging():
    """Set up logging configuration for the worktrack package with environment-based levels."""
    # Determine log level from environment
    env_level = os.getenv('WORKTRACK_LOG_LEVEL', '').upper()
    is_debug = os.getenv('WORKTRACK_DEBUG', '').lower() in ('1', 'true', 'yes')

    if is_debug:
        level = logging.DEBUG
    elif env_level:
        level = getattr(logging, env_level, logging.WARNING)
    else:
        level = logging.WARNING  # Default: warnings and errors only

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    log_format = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    detailed_formatter = logging.Formatter(log_format, date_format)
    console_formatter = logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if is_debug
        else '%(levelname)s: %(message)s'
    )

    # File handler (always detailed)
    file_handler = logging.FileHandler(log_dir / "worktrack.log", encoding="utf-8")
    file_handler.setFormatter(detailed_formatter)
    file_handler.setLevel(logging.DEBUG)

    # Console handler (respects environment level)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger('worktrack')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'worktrack.{name}')
    return logging.getLogger('worktrack')
