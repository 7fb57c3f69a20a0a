from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import streamlit as st

from hreval.domain.models import Evaluation, EvaluationPeriod
from hreval.domain.rules import current_fiscal_year, filter_evaluations, grade_distribution
from hreval.web.components.widgets import empty_state, fiscal_year_selector, grade_badge_html
from hreval.web.framework.actions import load
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.user_context import get_backend

RESULT_COLUMNS = ["氏名", "部署", "期間", "ステータス", "評価者", "管理者", "最終"]


def results_frame(evaluations: Sequence[Evaluation]) -> pd.DataFrame:
    """One row per evaluation with each stage's grade; missing grades show as '-'."""
    rows = [
        {
            "氏名": e.user_name or "-",
            "部署": e.department_name or "-",
            "期間": e.period_label,
            "ステータス": e.status.label,
            "評価者": e.evaluator_grade or "-",
            "管理者": e.manager_grade or "-",
            "最終": e.director_grade or "-",
        }
        for e in evaluations
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def _render_distribution(evaluations: Sequence[Evaluation]) -> None:
    distribution = grade_distribution(evaluations)
    if not distribution:
        return
    with st.container(border=True):
        st.markdown("**評価グレード分布**")
        cols = st.columns(len(distribution))
        for col, (grade, count) in zip(cols, distribution.items()):
            with col:
                st.markdown(grade_badge_html(grade), unsafe_allow_html=True)
                st.caption(f"{count}人")


def render() -> None:
    user = require_user("/results")
    render_sidebar(user)
    backend = get_backend()

    st.title("評価結果一覧")
    st.caption("全職員の評価結果を閲覧します")

    years = load(backend.admin.fiscal_years, [], context={"screen": "results"})
    # no organisation-wide listing exists on the backend; this reads the caller's own records
    evaluations = load(backend.evaluations.mine, [], context={"screen": "results"})

    current = current_fiscal_year(years)
    cols = st.columns(2)
    with cols[0]:
        fy_id = fiscal_year_selector(years, key="results_year", include_all=True,
                                     default_id=current.id if current else None)
    with cols[1]:
        period: Optional[EvaluationPeriod] = st.selectbox(
            "期間",
            [None, *EvaluationPeriod],
            format_func=lambda p: "全期間" if p is None else p.label,
            key="results_period",
            label_visibility="collapsed",
        )

    filtered = filter_evaluations(evaluations, fiscal_year_id=fy_id, period=period)
    _render_distribution(filtered)

    if not filtered:
        empty_state("該当する評価結果はありません")
        return
    st.dataframe(results_frame(filtered), hide_index=True, use_container_width=True)
