from __future__ import annotations

import streamlit as st

from hreval.domain.models import Evaluation, EvaluationStatus
from hreval.web.components.widgets import empty_state, stage_grade, status_badge
from hreval.web.framework.actions import load
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.user_context import get_backend


def _render_card(evaluation: Evaluation) -> None:
    with st.container(border=True):
        head = st.columns([4, 1])
        with head[0]:
            st.markdown(f"**{evaluation.period_label}**")
            st.caption(f"{evaluation.department_name or '-'} / {evaluation.position_name or '-'}")
        with head[1]:
            status_badge(evaluation.status)

        # grades only exist once the self-assessment went in
        if evaluation.status is EvaluationStatus.NOT_STARTED:
            return
        cols = st.columns(3)
        with cols[0]:
            stage_grade(f"評価者 {evaluation.evaluator_name or '-'}",
                        evaluation.evaluator_grade, evaluation.evaluator_comment)
        with cols[1]:
            stage_grade(f"管理者 {evaluation.manager_name or '-'}",
                        evaluation.manager_grade, evaluation.manager_comment)
        with cols[2]:
            stage_grade("役員（最終）", evaluation.director_grade, evaluation.director_comment, final=True)


def render() -> None:
    user = require_user("/my-evaluations")
    render_sidebar(user)

    st.title("評価履歴")
    st.caption("過去の評価結果を確認します")

    evaluations = load(get_backend().evaluations.mine, [], context={"screen": "my_evaluations"})
    if not evaluations:
        empty_state("評価履歴はありません")
        return
    for evaluation in evaluations:
        _render_card(evaluation)
