from __future__ import annotations

import streamlit as st

from hreval.domain.models import UserInfo
from hreval.web.config import APP_TITLE

from .actions import load
from .guard import go_to
from .routes import LOGIN_PATH, visible_routes
from .user_context import get_backend, logout


def render_sidebar(user: UserInfo) -> None:
    """User card, permission-filtered navigation and logout."""
    unread = load(get_backend().notifications.unread_count, 0)

    with st.sidebar:
        st.markdown(f"### {APP_TITLE}")
        st.markdown(f"**{user.name}**")
        st.caption(f"{user.department_name or '-'} / {user.position_name or '-'}")
        st.divider()

        for route in visible_routes(user):
            label = route.title
            if route.path == "/notifications" and unread:
                label = f"{label} ({unread})"
            st.page_link(route.script, label=label, icon=route.icon)

        st.divider()
        if st.button("ログアウト", icon="🚪", use_container_width=True):
            logout()
            go_to(LOGIN_PATH)
