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

SELECTED_KEY = "director_selected"


def _render_prior_stages(evaluation: Evaluation) -> None:
    cols = st.columns(2)
    with cols[0]:
        stage_grade(f"評価者 {evaluation.evaluator_name or '-'}",
                    evaluation.evaluator_grade, evaluation.evaluator_comment)
    with cols[1]:
        stage_grade(f"管理者 {evaluation.manager_name or '-'}",
                    evaluation.manager_grade, evaluation.manager_comment)


def _render_form(evaluation: Evaluation) -> None:
    with st.container(border=True):
        st.subheader("役員評価")
        grade = grade_selector("評価ランク *", key=f"director_grade_{evaluation.id}",
                               current=evaluation.director_grade or evaluation.manager_grade)
        comment = st.text_area("役員コメント", key=f"director_comment_{evaluation.id}",
                               height=100, placeholder="コメントを入力")
        confirmed = confirm_box("役員評価を送信しますか？", key=f"director_confirm_{evaluation.id}")
        if st.button("評価を送信", type="primary", use_container_width=True,
                     disabled=not confirmed, key=f"director_submit_{evaluation.id}"):
            sent = run_action(
                lambda: get_backend().evaluations.director_evaluate(evaluation.id, grade, comment),
                success="評価を送信しました。",
                failure="送信に失敗しました。",
                context={"screen": "director_evaluate", "evaluation_id": evaluation.id},
            )
            if sent:
                reset_keys(SELECTED_KEY)
                st.rerun()

    reject_form(evaluation, key=SELECTED_KEY, placeholder="管理者への差し戻し理由を入力",
                confirm_text="管理者に差し戻しますか？")


def render() -> None:
    user = require_user("/director/evaluate")
    render_sidebar(user)

    st.title("役員評価入力")
    st.caption("管理者承認済みの評価を入力します")
    render_flash()

    pending = load(get_backend().evaluations.director_pending, [], context={"screen": "director_evaluate"})
    evaluation = selected_evaluation(pending, SELECTED_KEY)
    if evaluation is None:
        pending_queue(
            pending,
            key=SELECTED_KEY,
            empty_message="評価待ちの案件はありません",
            extra_columns=[("管理者評価", lambda e: grade_cell(e.manager_grade))],
        )
        return

    if back_button("director_back"):
        reset_keys(SELECTED_KEY)
        st.rerun()
    subject_card(evaluation, show_evaluator=True)
    _render_prior_stages(evaluation)
    _render_form(evaluation)
