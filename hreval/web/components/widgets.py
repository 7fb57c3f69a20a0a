from __future__ import annotations

from html import escape
from typing import List, Optional, Sequence

import streamlit as st

from hreval.domain.models import GRADES, Evaluation, EvaluationStatus, FiscalYear
from hreval.web.styles import STATUS_COLORS


def status_badge_html(status: EvaluationStatus) -> str:
    bg, fg = STATUS_COLORS.get(status.value, ("#f3f4f6", "#1f2937"))
    return f'<span class="hr-badge" style="background-color:{bg};color:{fg}">{escape(status.label)}</span>'


def grade_badge_html(grade: Optional[str], *, final: bool = False) -> str:
    if not grade:
        return '<span class="hr-grade empty">-</span>'
    css = "hr-grade final" if final else "hr-grade"
    return f'<span class="{css}">{escape(grade)}</span>'


def status_badge(status: EvaluationStatus) -> None:
    st.markdown(status_badge_html(status), unsafe_allow_html=True)


def grade_badge(grade: Optional[str], *, final: bool = False) -> None:
    st.markdown(grade_badge_html(grade, final=final), unsafe_allow_html=True)


def grade_selector(label: str, *, key: str, current: Optional[str] = None) -> Optional[str]:
    """Horizontal radio over the grade domain; None until one is picked."""
    index = GRADES.index(current) if current in GRADES else None
    return st.radio(label, GRADES, index=index, key=key, horizontal=True)


def empty_state(message: str) -> None:
    with st.container(border=True):
        st.markdown(
            f'<div style="text-align:center;color:#6b7280;padding:2rem 0">{escape(message)}</div>',
            unsafe_allow_html=True,
        )


def fiscal_year_selector(
    years: Sequence[FiscalYear],
    *,
    key: str,
    include_all: bool = False,
    default_id: Optional[int] = None,
) -> Optional[int]:
    """Select box over fiscal years, preselecting `default_id`."""
    options: List[Optional[int]] = [fy.id for fy in years]
    labels = {fy.id: fy.label for fy in years}
    if include_all:
        options.insert(0, None)
        labels[None] = "全年度"
    if not options:
        return None
    index = options.index(default_id) if default_id in options else 0
    return st.selectbox(
        "年度",
        options,
        index=index,
        format_func=lambda v: labels.get(v, "-"),
        key=key,
        label_visibility="collapsed",
    )


def subject_card(evaluation: Evaluation, *, show_evaluator: bool = False) -> None:
    """Who is being evaluated, and for which period."""
    with st.container(border=True):
        cols = st.columns(2)
        with cols[0]:
            st.caption("対象者")
            st.markdown(f"**{evaluation.user_name or '-'}**")
            st.caption("評価期間")
            st.markdown(f"**{evaluation.period_label}**")
        with cols[1]:
            st.caption("所属")
            st.markdown(f"**{evaluation.department_name or '-'} / {evaluation.position_name or '-'}**")
            if show_evaluator:
                st.caption("評価者")
                st.markdown(f"**{evaluation.evaluator_name or '-'}**")


def stage_grade(label: str, grade: Optional[str], comment: Optional[str], *, final: bool = False) -> None:
    """One stage's grade with its comment."""
    with st.container(border=True):
        st.markdown(f"{escape(label)}&nbsp;&nbsp;{grade_badge_html(grade, final=final)}", unsafe_allow_html=True)
        if comment:
            st.caption(comment)


def back_button(key: str) -> bool:
    return st.button("← 一覧に戻る", key=key)
