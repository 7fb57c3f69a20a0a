from __future__ import annotations

from datetime import datetime
from typing import Optional

import streamlit as st

from hreval.domain.models import Notification
from hreval.web.components.widgets import empty_state
from hreval.web.framework.actions import load
from hreval.web.framework.guard import go_to, require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.routes import route_for_link
from hreval.web.framework.user_context import get_backend


def format_notified_at(value: str) -> str:
    """``M/D H:MM`` for ISO timestamps; anything else is shown as-is."""
    try:
        d = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return value or ""
    return f"{d.month}/{d.day} {d.hour}:{d.minute:02d}"


def _open(notification: Notification) -> Optional[str]:
    """Mark unread notifications read; returns the path to navigate to."""
    if not notification.is_read:
        load(
            lambda: get_backend().notifications.mark_read(notification.id),
            None,
            context={"screen": "notifications", "notification_id": notification.id},
        )
    if notification.link:
        return route_for_link(notification.link).path
    return None


def render() -> None:
    user = require_user("/notifications")
    render_sidebar(user)

    st.title("通知")
    st.caption("お知らせを確認します")

    notifications = load(get_backend().notifications.list, [], context={"screen": "notifications"})
    if not notifications:
        empty_state("通知はありません")
        return

    for n in notifications:
        with st.container(border=True):
            cols = st.columns([1, 8, 2])
            with cols[0]:
                st.markdown("✔️" if n.is_read else "🔔")
            with cols[1]:
                title = n.title if n.is_read else f"**{n.title}**"
                if st.button(title, key=f"notification_{n.id}", type="tertiary"):
                    target = _open(n)
                    if target is not None:
                        go_to(target)
                    st.rerun()
                if n.message:
                    st.caption(n.message)
            with cols[2]:
                st.caption(format_notified_at(n.created_at))
