from __future__ import annotations

from typing import Optional

import streamlit as st

from hreval.api import ApiClient, Backend, SessionStore
from hreval.domain.models import UserInfo
from hreval.infra.config import Settings, load_settings
from hreval.infra.exceptions import handle_errors
from hreval.infra.logging import LoggerManager, get_logger
from hreval.web.config import LOADING_TEXT

from .browser import BROWSER_ID_KEY, browser_id

logger = get_logger(__name__)

BACKEND_KEY = "_backend"
USER_KEY = "user"
RESTORED_KEY = "session_restored"


def get_settings() -> Settings:
    settings = load_settings()
    LoggerManager.configure(settings.log_level, settings.log_file)
    return settings


def get_backend() -> Backend:
    """Backend bound to this browser's session store, one per Streamlit session."""
    backend = st.session_state.get(BACKEND_KEY)
    if backend is None:
        settings = get_settings()
        store = SessionStore.for_browser(settings.session_dir, browser_id())
        backend = Backend(ApiClient(settings.api_base_url, store, timeout=settings.api_timeout))
        st.session_state[BACKEND_KEY] = backend
    return backend


def ensure_session() -> None:
    """Restore the stored session once, before any guard decides anything."""
    if st.session_state.get(RESTORED_KEY):
        return
    with st.spinner(LOADING_TEXT):
        user = get_backend().client.store.restore()
    st.session_state[USER_KEY] = user
    st.session_state[RESTORED_KEY] = True
    if user is not None:
        logger.info(f"Session restored for user {user.id}")


def current_user() -> Optional[UserInfo]:
    ensure_session()
    user = st.session_state.get(USER_KEY)
    return user if isinstance(user, UserInfo) else None


@handle_errors(logger)
def login(email: str, password: str) -> UserInfo:
    backend = get_backend()
    auth = backend.auth.login(email, password)
    backend.client.store.save_login(auth)
    st.session_state[USER_KEY] = auth.user
    st.session_state[RESTORED_KEY] = True
    logger.info(f"User {auth.user.id} signed in")
    return auth.user


def _drop_page_state() -> None:
    for key in list(st.session_state.keys()):
        if key not in (BACKEND_KEY, RESTORED_KEY, BROWSER_ID_KEY):
            del st.session_state[key]
    st.session_state[USER_KEY] = None


def logout() -> None:
    get_backend().client.store.clear()
    _drop_page_state()
    logger.info("User signed out")


def forget_expired_session() -> None:
    """The client already wiped the store; drop the in-memory profile too."""
    _drop_page_state()
