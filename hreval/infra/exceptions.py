"""
Infrastructure layer - exceptions

Standard exception classes for the client and the screen-level error
handling built on them. `error_code` is the tag each screen switches on.
"""

from typing import Any, Dict, Optional
from functools import wraps


class HREvalException(Exception):
    """Base exception of the evaluation client"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigError(HREvalException):
    """Configuration error"""
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "CONFIG_ERROR", {"config_key": config_key, **kwargs})


class ValidationError(HREvalException):
    """Missing or malformed input, either caught locally or rejected by the backend"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, **kwargs) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field, "value": value, **kwargs})


class NetworkError(HREvalException):
    """Transport failure: backend unreachable, timeout, broken connection"""
    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, "NETWORK_ERROR", {"url": url, "status_code": status_code, **kwargs})


class APIError(HREvalException):
    """Backend answered with an error status"""
    def __init__(self, message: str, status_code: Optional[int] = None, path: Optional[str] = None,
                 response: Any = None, **kwargs) -> None:
        super().__init__(message, "API_ERROR", {"status_code": status_code, "path": path,
                                                "response": response, **kwargs})
        self.status_code = status_code


class AuthenticationError(HREvalException):
    """Bad credentials on login"""
    def __init__(self, message: str = "Authentication failed", **kwargs) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", kwargs)


class TokenRejectedError(AuthenticationError):
    """Backend still refuses the access token after a successful refresh"""
    def __init__(self, message: str = "Token rejected", **kwargs) -> None:
        HREvalException.__init__(self, message, "TOKEN_REJECTED", kwargs)


class AuthorizationError(HREvalException):
    """Backend refused the action for the signed-in user"""
    def __init__(self, message: str = "Forbidden", path: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, "AUTHORIZATION_ERROR", {"path": path, **kwargs})


class SessionExpiredError(HREvalException):
    """Refresh path exhausted; stored session has been cleared"""
    def __init__(self, message: str = "Session expired", **kwargs) -> None:
        super().__init__(message, "SESSION_EXPIRED", kwargs)


# Flat, user-facing strings per error tag
USER_MESSAGES: Dict[str, str] = {
    "AUTHENTICATION_ERROR": "メールアドレスまたはパスワードが正しくありません",
    "TOKEN_REJECTED": "認証に失敗しました。再度ログインしてください",
    "AUTHORIZATION_ERROR": "この操作を行う権限がありません",
    "VALIDATION_ERROR": "入力内容に誤りがあります",
    "NETWORK_ERROR": "サーバーに接続できませんでした",
    "SESSION_EXPIRED": "セッションの有効期限が切れました。再度ログインしてください",
    "CONFIG_ERROR": "設定の読み込みに失敗しました",
}
DEFAULT_USER_MESSAGE = "エラーが発生しました"


def handle_errors(logger=None):
    """
    Error-logging decorator

    Business exceptions are logged and re-raised as-is; anything else is
    wrapped into APIError so callers only ever see the HREvalException tree.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger
            if _logger is None:
                from .logging import get_logger
                _logger = get_logger(__name__)
            try:
                return func(*args, **kwargs)
            except HREvalException as e:
                _logger.error(f"[{e.error_code}] {func.__name__}: {e.message}")
                raise
            except Exception as e:
                _logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
                raise APIError(f"Unexpected error: {e}") from e
        return wrapper
    return decorator


class ErrorHandler:
    """Screen-level error helper"""

    def __init__(self, logger=None):
        if logger is None:
            from .logging import get_logger
            logger = get_logger(__name__)
        self.logger = logger

    def handle_and_log(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an error caught by a screen

        Args:
            error: the exception
            context: extra context (screen, action, record id)
        """
        context = context or {}

        if isinstance(error, HREvalException):
            self.logger.error(f"[{error.error_code}] {error.message} {context}".rstrip())
        else:
            self.logger.error(f"System error: {error} {context}".rstrip(), exc_info=True)

    @staticmethod
    def user_message(error: Exception, fallback: Optional[str] = None) -> str:
        """
        Flat localized message for an error

        Args:
            error: the exception
            fallback: message used when the error kind has no dedicated text

        Returns:
            message string shown on screen
        """
        if isinstance(error, HREvalException) and error.error_code in USER_MESSAGES:
            return USER_MESSAGES[error.error_code]
        return fallback or DEFAULT_USER_MESSAGE
