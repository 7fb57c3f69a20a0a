from __future__ import annotations

from typing import Optional, Sequence

import streamlit as st

from hreval.domain.models import Evaluation, FiscalYear
from hreval.domain.rules import find_fiscal_year, is_evaluation_open
from hreval.web.components.review import confirm_box, pending_queue, selected_evaluation
from hreval.web.components.widgets import back_button, grade_selector, subject_card
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import ensure_defaults, render_flash, reset_keys, set_flash
from hreval.web.framework.user_context import get_backend

SELECTED_KEY = "evaluator_selected"
DRAFTS_KEY = "evaluator_drafts"


def closed_window_notice(years: Sequence[FiscalYear], evaluation: Evaluation) -> Optional[str]:
    """Warning for a record whose evaluation window is closed; None while open or unknown."""
    fy = find_fiscal_year(years, evaluation.fiscal_year_id)
    if fy is None or is_evaluation_open(fy, evaluation.period):
        return None
    return f"現在、{fy.label} {evaluation.period.label}の評価入力受付期間外です。"


def _render_form(evaluation: Evaluation) -> None:
    draft = st.session_state[DRAFTS_KEY].get(evaluation.id, {})
    grade_key = f"evaluator_grade_{evaluation.id}"
    comment_key = f"evaluator_comment_{evaluation.id}"
    if comment_key not in st.session_state:
        st.session_state[comment_key] = draft.get("comment", evaluation.evaluator_comment or "")

    with st.container(border=True):
        st.subheader("評価入力")
        grade = grade_selector("評価ランク *", key=grade_key,
                               current=draft.get("grade", evaluation.evaluator_grade))
        comment = st.text_area("コメント", key=comment_key, height=120, placeholder="評価コメントを入力")

        confirmed = confirm_box("評価を送信しますか？", key=f"evaluator_confirm_{evaluation.id}")
        cols = st.columns(2)
        with cols[0]:
            if st.button("一時保存", use_container_width=True, key=f"evaluator_draft_{evaluation.id}"):
                st.session_state[DRAFTS_KEY][evaluation.id] = {"grade": grade, "comment": comment}
                set_flash("一時保存しました。")
                st.rerun()
        with cols[1]:
            if st.button("評価を送信", type="primary", use_container_width=True,
                         disabled=not confirmed, key=f"evaluator_submit_{evaluation.id}"):
                sent = run_action(
                    lambda: get_backend().evaluations.evaluate(evaluation.id, grade, comment),
                    success="評価を送信しました。",
                    failure="送信に失敗しました。",
                    context={"screen": "evaluator", "evaluation_id": evaluation.id},
                )
                if sent:
                    st.session_state[DRAFTS_KEY].pop(evaluation.id, None)
                    reset_keys(SELECTED_KEY, grade_key, comment_key)
                    st.rerun()


def render() -> None:
    user = require_user("/evaluator")
    render_sidebar(user)
    ensure_defaults({DRAFTS_KEY: {}})

    st.title("評価入力")
    st.caption("依頼された評価を入力します")
    render_flash()

    pending = load(get_backend().evaluations.pending, [], context={"screen": "evaluator"})
    evaluation = selected_evaluation(pending, SELECTED_KEY)
    if evaluation is None:
        pending_queue(pending, key=SELECTED_KEY, empty_message="評価待ちの案件はありません")
        return

    if back_button("evaluator_back"):
        reset_keys(SELECTED_KEY)
        st.rerun()
    subject_card(evaluation)
    years = load(get_backend().admin.fiscal_years, [], context={"screen": "evaluator"})
    notice = closed_window_notice(years, evaluation)
    if notice:
        st.warning(notice)
    _render_form(evaluation)
