"""Shared pieces of the approval-chain screens: the pending queue and the reject form."""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import streamlit as st

from hreval.domain.models import Evaluation
from hreval.web.framework.actions import run_action
from hreval.web.framework.state import reset_keys
from hreval.web.framework.user_context import get_backend

from .widgets import empty_state, grade_badge_html

Column = Tuple[str, Callable[[Evaluation], str]]

BASE_COLUMNS: Sequence[Column] = (
    ("対象者", lambda e: e.user_name or "-"),
    ("所属", lambda e: e.department_name or "-"),
    ("年度・期間", lambda e: e.period_label),
)


def grade_cell(grade: Optional[str]) -> str:
    return grade_badge_html(grade)


def selected_evaluation(evaluations: Sequence[Evaluation], key: str) -> Optional[Evaluation]:
    """The record picked from the queue, if it is still pending."""
    selected_id = st.session_state.get(key)
    if selected_id is None:
        return None
    for e in evaluations:
        if e.id == selected_id:
            return e
    reset_keys(key)
    return None


def pending_queue(
    evaluations: Sequence[Evaluation],
    *,
    key: str,
    empty_message: str,
    extra_columns: Sequence[Column] = (),
    action_label: str = "評価する",
) -> None:
    """Table of pending records with one open button per row."""
    if not evaluations:
        empty_state(empty_message)
        return

    columns = list(BASE_COLUMNS) + list(extra_columns)
    widths = [3] * len(columns) + [2]
    with st.container(border=True):
        header = st.columns(widths)
        for col, (title, _) in zip(header, columns):
            col.caption(title)
        for e in evaluations:
            row = st.columns(widths, vertical_alignment="center")
            for col, (_, cell) in zip(row, columns):
                col.markdown(cell(e), unsafe_allow_html=True)
            if row[-1].button(action_label, key=f"{key}_open_{e.id}", type="tertiary"):
                st.session_state[key] = e.id
                st.rerun()


def confirm_box(text: str, key: str) -> bool:
    return st.checkbox(text, key=key)


def reject_form(evaluation: Evaluation, *, key: str, placeholder: str, confirm_text: str) -> None:
    """Send the record one stage back with a reason; returns to the queue on success."""
    with st.expander("差し戻し"):
        reason = st.text_area("差し戻し理由", key=f"{key}_reason_{evaluation.id}", placeholder=placeholder)
        confirmed = confirm_box(confirm_text, key=f"{key}_reject_confirm_{evaluation.id}")
        if st.button(
            "差し戻す",
            key=f"{key}_reject_{evaluation.id}",
            disabled=not (confirmed and reason.strip()),
            use_container_width=True,
        ):
            ok = run_action(
                lambda: get_backend().evaluations.reject(evaluation.id, reason.strip()),
                success="評価を差し戻しました。",
                failure="差し戻しに失敗しました。",
                context={"screen": key, "evaluation_id": evaluation.id},
            )
            if ok:
                reset_keys(key)
                st.rerun()
