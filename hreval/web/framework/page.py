from __future__ import annotations

from dataclasses import dataclass
import streamlit as st

from hreval.web.config import PAGE_TITLE_PREFIX


@dataclass(frozen=True)
class PageSpec:
    title: str
    icon: str
    layout: str = "wide"
    sidebar_state: str = "expanded"


def init_page(spec: PageSpec, *, apply_style: bool = True) -> None:
    """Initialize a Streamlit page in a consistent way.

    NOTE: This must be called before any other Streamlit command on a page.
    """
    st.set_page_config(
        page_title=f"{PAGE_TITLE_PREFIX}{spec.title}",
        page_icon=spec.icon,
        layout=spec.layout,
        initial_sidebar_state=spec.sidebar_state,
    )

    if apply_style:
        from hreval.web.styles import load_app_style

        load_app_style()


__all__ = ["PageSpec", "init_page"]
