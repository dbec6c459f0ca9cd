#!/usr/bin/env python3
"""
AudioQueue - Personal audiobook and podcast library tracker

Usage:
    python -m audioqueue          # Sample library, real audio
    python -m audioqueue --mock   # Simulated audio (no sound device needed)
    python -m audioqueue --empty  # Start with an empty library
"""
import os
import sys
import logging
import platform
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import (
    APP_NAME, AUDIO_DIR, COVERS_DIR, MOCK_MODE, EMPTY_LIBRARY,
    LOG_DIR, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUP_COUNT,
)
from .app import AudioQueue


LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'

# Libraries whose INFO chatter would drown out the app's own records
QUIET_LOGGERS = ('urllib3', 'requests', 'PIL')


def _console_handler(level: int) -> logging.Handler:
    # stderr, so log records never land inside the printed library page
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    handler.setLevel(level)
    return handler


def _file_handler() -> Optional[logging.Handler]:
    """Rotating DEBUG log under LOG_DIR, or None if it cannot be written."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
    except OSError as e:
        logging.getLogger(__name__).warning(f'Log file disabled: {e}')
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(level_name: Optional[str] = None) -> Optional[Path]:
    """
    Send WARNING and up to the terminal and everything to the log file.

    AUDIOQUEUE_LOG_LEVEL (or level_name) raises the terminal verbosity.
    Returns the log file path, or None when only the terminal is logging.
    """
    level_name = (level_name or os.environ.get('AUDIOQUEUE_LOG_LEVEL', 'WARNING')).upper()
    level = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(_console_handler(level))

    file_handler = _file_handler()
    if file_handler is not None:
        root.addHandler(file_handler)
        root.debug(f'Log file: {LOG_FILE}')

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return LOG_FILE if file_handler is not None else None


def log_system_info(logger: logging.Logger):
    """Log system information at startup."""
    logger.info('=' * 50)
    logger.info(f'{APP_NAME.upper()} STARTUP')
    logger.info('=' * 50)
    logger.info(f'Python: {sys.version.split()[0]}')
    logger.info(f'Platform: {platform.system()} {platform.release()}')
    logger.info(f'Audio dir: {AUDIO_DIR}')
    logger.info(f'Covers dir: {COVERS_DIR}')
    if MOCK_MODE:
        logger.info('Mode: MOCK (simulated audio)')
    if EMPTY_LIBRARY:
        logger.info('Library: empty')
    logger.info('=' * 50)


def main():
    """Entry point for AudioQueue."""
    setup_logging()

    logger = logging.getLogger(__name__)
    log_system_info(logger)

    app = AudioQueue()
    app.run()


if __name__ == '__main__':
    main()
