"""
Infrastructure layer: configuration, logging and the exception hierarchy.
"""

from .config import Settings, load_settings, reset_settings
from .exceptions import (
    HREvalException,
    ConfigError,
    ValidationError,
    NetworkError,
    APIError,
    AuthenticationError,
    TokenRejectedError,
    AuthorizationError,
    SessionExpiredError,
    handle_errors,
    ErrorHandler,
)
from .logging import LoggerManager, get_logger

__all__ = [
    "Settings",
    "load_settings",
    "reset_settings",
    "HREvalException",
    "ConfigError",
    "ValidationError",
    "NetworkError",
    "APIError",
    "AuthenticationError",
    "TokenRejectedError",
    "AuthorizationError",
    "SessionExpiredError",
    "handle_errors",
    "ErrorHandler",
    "LoggerManager",
    "get_logger",
]
