from __future__ import annotations

import streamlit as st

from hreval.domain.models import Evaluation
from hreval.web.components.review import (
    confirm_box,
    grade_cell,
    pending_queue,
    reject_form,
    selected_evaluation,
)
from hreval.web.components.widgets import back_button, grade_badge, stage_grade, subject_card
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import render_flash, reset_keys
from hreval.web.framework.user_context import get_backend

SELECTED_KEY = "finalize_selected"


def _render_stages(evaluation: Evaluation) -> None:
    cols = st.columns(3)
    with cols[0]:
        stage_grade("評価者", evaluation.evaluator_grade, evaluation.evaluator_comment)
    with cols[1]:
        stage_grade("管理者", evaluation.manager_grade, evaluation.manager_comment)
    with cols[2]:
        stage_grade("役員（最終）", evaluation.director_grade, evaluation.director_comment, final=True)


def _render_form(evaluation: Evaluation) -> None:
    with st.container(border=True):
        st.subheader("最終確認")
        st.caption("確定される評価")
        grade_badge(evaluation.director_grade, final=True)
        confirmed = confirm_box("評価を確定しますか？本人に通知されます。", key=f"finalize_confirm_{evaluation.id}")
        if st.button("確定する", type="primary", use_container_width=True,
                     disabled=not confirmed, key=f"finalize_submit_{evaluation.id}"):
            done = run_action(
                lambda: get_backend().evaluations.finalize(evaluation.id),
                success="評価を確定しました。",
                failure="確定に失敗しました。",
                context={"screen": "director_finalize", "evaluation_id": evaluation.id},
            )
            if done:
                reset_keys(SELECTED_KEY)
                st.rerun()

    reject_form(evaluation, key=SELECTED_KEY, placeholder="差し戻し理由を入力", confirm_text="差し戻しますか？")


def render() -> None:
    user = require_user("/director/finalize")
    render_sidebar(user)

    st.title("最終確認")
    st.caption("役員評価の最終確認・確定を行います")
    render_flash()

    pending = load(get_backend().evaluations.finalize_pending, [], context={"screen": "director_finalize"})
    evaluation = selected_evaluation(pending, SELECTED_KEY)
    if evaluation is None:
        pending_queue(
            pending,
            key=SELECTED_KEY,
            empty_message="確認待ちの評価はありません",
            extra_columns=[("役員評価", lambda e: grade_cell(e.director_grade))],
            action_label="確認する",
        )
        return

    if back_button("finalize_back"):
        reset_keys(SELECTED_KEY)
        st.rerun()
    subject_card(evaluation)
    _render_stages(evaluation)
    _render_form(evaluation)
