"""Per-browser identity.

Each browser carries a random id in a long-lived cookie; the server keeps
that browser's session file under the same name. Tokens never leave the
server and no two browsers share a session file.
"""
from __future__ import annotations

from datetime import datetime, timedelta

import extra_streamlit_components as stx
import streamlit as st

from hreval.api import is_valid_browser_id, new_browser_id
from hreval.infra.logging import get_logger

logger = get_logger(__name__)

BROWSER_COOKIE = "hreval_browser"
BROWSER_ID_KEY = "_browser_id"
COOKIE_LIFETIME = timedelta(days=30)


def _remember(browser_id: str) -> None:
    stx.CookieManager(key="hreval_cookie_writer").set(
        BROWSER_COOKIE,
        browser_id,
        expires_at=datetime.now() + COOKIE_LIFETIME,
        key="hreval_cookie_set",
    )


def browser_id() -> str:
    """Id of the browser behind this Streamlit session, issued on first visit."""
    cached = st.session_state.get(BROWSER_ID_KEY)
    if cached:
        return cached

    # request cookies are readable on the very first run, unlike component values
    value = st.context.cookies.get(BROWSER_COOKIE)
    if not is_valid_browser_id(value):
        value = new_browser_id()
        _remember(value)
        logger.info("Issued a new browser id")
    st.session_state[BROWSER_ID_KEY] = value
    return value
