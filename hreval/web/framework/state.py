from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

FLASH_KEY = "_flash"


def ensure_defaults(defaults: Dict[str, Any]) -> None:
    """Ensure session_state has default values for keys."""
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def reset_keys(*keys: str) -> None:
    for k in keys:
        st.session_state.pop(k, None)


def set_flash(message: str, level: str = "success") -> None:
    """Queue a message that survives the rerun following an action."""
    st.session_state[FLASH_KEY] = (level, message)


def pop_flash() -> Optional[tuple]:
    return st.session_state.pop(FLASH_KEY, None)


def render_flash() -> None:
    flash = pop_flash()
    if not flash:
        return
    level, message = flash
    {"success": st.success, "error": st.error, "warning": st.warning, "info": st.info}.get(level, st.info)(message)
