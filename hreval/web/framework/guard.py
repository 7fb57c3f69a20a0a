from __future__ import annotations

from typing import Optional, cast

import streamlit as st

from hreval.domain.models import UserInfo

from .routes import LOGIN_PATH, get_route, resolve_redirect
from .user_context import current_user, ensure_session, forget_expired_session


def go_to(path: str) -> None:
    """Switch to the page registered for `path`; stops the current script."""
    st.switch_page(get_route(path).script)


def require_route(path: str) -> Optional[UserInfo]:
    """Guard a page: restore the session, then render or redirect.

    Nothing of the page is drawn before restoration finished, so the wrong
    view never flashes.
    """
    ensure_session()
    user = current_user()
    target = resolve_redirect(get_route(path), user)
    if target is not None:
        go_to(target)
    return user


def require_user(path: str) -> UserInfo:
    """Guard a page that needs a signed-in user; the redirect stops the script otherwise."""
    return cast(UserInfo, require_route(path))


def require_guest() -> None:
    require_route(LOGIN_PATH)


def redirect_to_login() -> None:
    forget_expired_session()
    go_to(LOGIN_PATH)
