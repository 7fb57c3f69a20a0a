"""
Infrastructure layer - logging

Unified logging setup for the client and its pages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict


_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

_CONSOLE_FORMAT = '%(asctime)s [%(levelname)s] [%(name)s] %(message)s'
_FILE_FORMAT = '%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LoggerManager:
    """Unified logger manager"""

    _loggers: Dict[str, logging.Logger] = {}
    _configured: bool = False
    _log_file: Optional[Path] = None
    _level: str = 'INFO'

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a configured logger

        Args:
            name: logger name, usually __name__

        Returns:
            configured logger instance
        """
        if not cls._configured:
            cls._configure_logging()

        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)

        return cls._loggers[name]

    @classmethod
    def configure(cls, level: str = 'INFO', log_file: Optional[Path] = None) -> None:
        """Apply level and optional log file from settings (idempotent)."""
        cls._level = level.upper()
        if log_file is not None and log_file != cls._log_file:
            cls.set_log_file(log_file)
        if not cls._configured:
            cls._configure_logging()
        cls.set_level(cls._level)

    @classmethod
    def _configure_logging(cls):
        if cls._configured:
            return

        root_logger = logging.getLogger()
        root_logger.setLevel(_LEVELS.get(cls._level, logging.INFO))

        # Streamlit re-runs scripts; never stack handlers twice
        if root_logger.handlers:
            cls._configured = True
            return

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT))
        root_logger.addHandler(console_handler)

        if cls._log_file:
            cls._add_file_handler_internal(cls._log_file, root_logger)

        cls._configured = True

    @classmethod
    def _add_file_handler_internal(cls, log_file: Path, logger: logging.Logger) -> None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"File logging disabled: {e}")

    @classmethod
    def set_log_file(cls, log_file: Path) -> None:
        """Set the log file path"""
        cls._log_file = log_file
        if cls._configured:
            cls._add_file_handler_internal(log_file, logging.getLogger())

    @classmethod
    def set_level(cls, level: str) -> None:
        """Set the global log level"""
        if level.upper() in _LEVELS:
            cls._level = level.upper()
            logging.getLogger().setLevel(_LEVELS[level.upper()])

    @classmethod
    def reset(cls) -> None:
        """Reset logging state (tests)"""
        cls._loggers.clear()
        cls._configured = False
        cls._log_file = None
        cls._level = 'INFO'


def get_logger(name: str) -> logging.Logger:
    return LoggerManager.get_logger(name)
