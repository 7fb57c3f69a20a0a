from __future__ import annotations

from typing import Dict, Optional, Sequence

import streamlit as st

from hreval.domain.models import Evaluation, EvaluationPeriod, FiscalYear, Goal
from hreval.domain.rules import (
    assessment_target_period,
    can_edit_self_assessment,
    current_fiscal_year,
    find_fiscal_year,
    find_own_evaluation,
    goal_year_for_assessment,
    is_self_assessment_open,
)
from hreval.web.components.widgets import fiscal_year_selector
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import ensure_defaults, render_flash, set_flash
from hreval.web.framework.user_context import get_backend

# drafts outlive widget state, which streamlit drops when the page is left
DRAFTS_KEY = "self_eval_drafts"


def _draft_scope(fy: FiscalYear, period: EvaluationPeriod) -> str:
    return f"{fy.id}:{period.value}"


def _widget_key(scope: str, goal_id: int) -> str:
    return f"self_eval_{scope}_{goal_id}"


def _initial_text(goal: Goal, period: EvaluationPeriod, draft: Dict[int, str]) -> str:
    if goal.id in draft:
        return draft[goal.id]
    return goal.self_assessment(period) or ""


def _collect(scope: str, goals: Sequence[Goal]) -> Dict[int, str]:
    return {g.id: st.session_state.get(_widget_key(scope, g.id), "") for g in goals}


def _render_goal(goal: Goal, index: int, *, editable: bool, scope: str, text: str) -> None:
    with st.container(border=True):
        st.caption(f"目標 {index + 1}")
        st.markdown(f"**{goal.goal_text}**")
        if editable:
            key = _widget_key(scope, goal.id)
            if key not in st.session_state:
                st.session_state[key] = text
            st.text_area(
                "自己評価",
                key=key,
                height=120,
                placeholder="この目標に対する振り返りを入力してください",
            )
        else:
            st.caption("自己評価")
            st.write(text or "未入力")


def _render_actions(evaluation: Evaluation, scope: str, goals: Sequence[Goal]) -> None:
    st.divider()
    confirmed = st.checkbox("提出後は編集できなくなります。よろしいですか？", key=f"self_eval_confirm_{scope}")
    cols = st.columns(2)
    with cols[0]:
        if st.button("一時保存", use_container_width=True, key=f"self_eval_draft_{scope}"):
            st.session_state[DRAFTS_KEY][scope] = _collect(scope, goals)
            set_flash("一時保存しました。")
            st.rerun()
    with cols[1]:
        if st.button(
            "提出する",
            type="primary",
            use_container_width=True,
            disabled=not confirmed,
            key=f"self_eval_submit_{scope}",
        ):
            submitted = run_action(
                lambda: get_backend().evaluations.submit_self(evaluation.id),
                success="自己評価を提出しました。",
                failure="保存に失敗しました。",
                context={"screen": "self_evaluation", "evaluation_id": evaluation.id},
            )
            if submitted:
                st.session_state[DRAFTS_KEY].pop(scope, None)
                st.rerun()


def render() -> None:
    user = require_user("/self-evaluation")
    render_sidebar(user)
    backend = get_backend()
    ensure_defaults({DRAFTS_KEY: {}})

    st.title("自己評価入力")
    st.caption("各目標に対する自己評価を入力します")

    years = load(backend.admin.fiscal_years, [], context={"screen": "self_evaluation"})
    current = current_fiscal_year(years)
    cols = st.columns(2)
    with cols[0]:
        fy_id = fiscal_year_selector(years, key="self_eval_year", default_id=current.id if current else None)
    with cols[1]:
        period: EvaluationPeriod = st.selectbox(
            "期間",
            list(EvaluationPeriod),
            format_func=lambda p: p.label,
            key="self_eval_period",
            label_visibility="collapsed",
        )

    render_flash()
    fy: Optional[FiscalYear] = find_fiscal_year(years, fy_id)
    if fy is None:
        return

    goal_year_id = goal_year_for_assessment(years, fy, period)
    goals = load(lambda: backend.goals.list(goal_year_id), [], context={"screen": "self_evaluation"})
    mine = load(backend.evaluations.mine, [], context={"screen": "self_evaluation"})
    evaluation = find_own_evaluation(mine, fy.id, period)

    is_open = is_self_assessment_open(fy, period)
    can_edit = can_edit_self_assessment(evaluation)
    if not is_open:
        st.warning(f"現在、{period.label}の自己評価受付期間外です。")
    elif not can_edit:
        st.info("自己評価は提出済みです。評価完了までお待ちください。")
    if not goals:
        st.warning("目標が設定されていません。先に目標設定を行ってください。")
        return

    scope = _draft_scope(fy, period)
    draft = st.session_state[DRAFTS_KEY].get(scope, {})
    editable = is_open and can_edit

    with st.container(border=True):
        st.subheader(f"{fy.label} {period.label}")
        st.caption(f"対象期間: {assessment_target_period(fy, period)}")
        for i, goal in enumerate(goals):
            _render_goal(goal, i, editable=editable, scope=scope, text=_initial_text(goal, period, draft))
        if editable and evaluation is not None:
            _render_actions(evaluation, scope, goals)
