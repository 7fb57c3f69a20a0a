"""Backend access: session store, HTTP client, REST resource wrappers."""

from .session_store import SessionStore, SESSION_KEYS, is_valid_browser_id, new_browser_id
from .client import ApiClient
from .endpoints import AuthApi, GoalApi, EvaluationApi, NotificationApi, AdminApi, Backend

__all__ = [
    "SessionStore",
    "SESSION_KEYS",
    "is_valid_browser_id",
    "new_browser_id",
    "ApiClient",
    "AuthApi",
    "GoalApi",
    "EvaluationApi",
    "NotificationApi",
    "AdminApi",
    "Backend",
]
