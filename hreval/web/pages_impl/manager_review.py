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
from hreval.web.components.widgets import back_button, grade_selector, stage_grade, subject_card
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import render_flash, reset_keys
from hreval.web.framework.user_context import get_backend

SELECTED_KEY = "manager_selected"


def _render_form(evaluation: Evaluation) -> None:
    with st.container(border=True):
        st.subheader("管理者確認")
        # the evaluator's grade stands unless the manager changes it
        grade = grade_selector("評価ランク（変更する場合）", key=f"manager_grade_{evaluation.id}",
                               current=evaluation.manager_grade or evaluation.evaluator_grade)
        comment = st.text_area("管理者コメント", key=f"manager_comment_{evaluation.id}",
                               height=100, placeholder="コメントを追加")
        confirmed = confirm_box("承認しますか？", key=f"manager_confirm_{evaluation.id}")
        if st.button("承認する", type="primary", use_container_width=True,
                     disabled=not confirmed, key=f"manager_approve_{evaluation.id}"):
            approved = run_action(
                lambda: get_backend().evaluations.approve(evaluation.id, grade, comment),
                success="評価を承認しました。",
                failure="送信に失敗しました。",
                context={"screen": "manager_review", "evaluation_id": evaluation.id},
            )
            if approved:
                reset_keys(SELECTED_KEY)
                st.rerun()

    reject_form(evaluation, key=SELECTED_KEY, placeholder="評価者への差し戻し理由を入力",
                confirm_text="評価者に差し戻しますか？")


def render() -> None:
    user = require_user("/manager/review")
    render_sidebar(user)

    st.title("評価確認・修正")
    st.caption("評価者の評価を確認・修正します")
    render_flash()

    pending = load(get_backend().evaluations.manager_pending, [], context={"screen": "manager_review"})
    evaluation = selected_evaluation(pending, SELECTED_KEY)
    if evaluation is None:
        pending_queue(
            pending,
            key=SELECTED_KEY,
            empty_message="確認待ちの評価はありません",
            extra_columns=[
                ("評価者", lambda e: e.evaluator_name or "-"),
                ("評価", lambda e: grade_cell(e.evaluator_grade)),
            ],
            action_label="確認する",
        )
        return

    if back_button("manager_back"):
        reset_keys(SELECTED_KEY)
        st.rerun()
    subject_card(evaluation, show_evaluator=True)
    stage_grade("評価者の評価", evaluation.evaluator_grade, evaluation.evaluator_comment)
    _render_form(evaluation)
