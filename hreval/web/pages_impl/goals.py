from __future__ import annotations

from typing import List, Sequence

import streamlit as st

from hreval.domain.models import FiscalYear, Goal
from hreval.domain.rules import (
    MAX_GOALS,
    can_add_goal,
    current_fiscal_year,
    find_fiscal_year,
    goal_target_period,
    is_goal_setting_open,
)
from hreval.web.components.widgets import empty_state, fiscal_year_selector
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import render_flash, reset_keys
from hreval.web.framework.user_context import get_backend


def _list_key(fy_id: int) -> str:
    return f"goal_texts_{fy_id}"


def _widget_key(fy_id: int, index: int) -> str:
    return f"goal_{fy_id}_{index}"


def _current_texts(fy_id: int) -> List[str]:
    count = len(st.session_state.get(_list_key(fy_id), []))
    return [st.session_state.get(_widget_key(fy_id, i), "") for i in range(count)]


def _store_texts(fy_id: int, texts: List[str]) -> None:
    old_count = len(st.session_state.get(_list_key(fy_id), []))
    st.session_state[_list_key(fy_id)] = list(texts)
    for i, text in enumerate(texts):
        st.session_state[_widget_key(fy_id, i)] = text
    reset_keys(*[_widget_key(fy_id, i) for i in range(len(texts), old_count)])


def _add_goal(fy_id: int) -> None:
    texts = _current_texts(fy_id)
    if can_add_goal(len(texts)):
        _store_texts(fy_id, texts + [""])


def _remove_goal(fy_id: int, index: int) -> None:
    texts = _current_texts(fy_id)
    if 0 <= index < len(texts):
        texts.pop(index)
    _store_texts(fy_id, texts or [""])


def _render_editor(fy: FiscalYear, goals: Sequence[Goal]) -> None:
    if _list_key(fy.id) not in st.session_state:
        _store_texts(fy.id, [g.goal_text for g in goals][:MAX_GOALS] or [""])

    count = len(st.session_state[_list_key(fy.id)])
    for i in range(count):
        with st.container(border=True):
            head = st.columns([6, 1])
            with head[0]:
                st.markdown(f"**目標 {i + 1}**")
            with head[1]:
                if i > 0:
                    st.button("🗑", key=f"remove_goal_{fy.id}_{i}", on_click=_remove_goal, args=(fy.id, i))
            st.text_area(
                f"目標 {i + 1}",
                key=_widget_key(fy.id, i),
                height=90,
                placeholder="目標を入力してください",
                label_visibility="collapsed",
            )

    if can_add_goal(count):
        st.button("＋ 目標を追加", key=f"add_goal_{fy.id}", on_click=_add_goal, args=(fy.id,))

    st.divider()
    if st.button("保存する", type="primary", use_container_width=True, key=f"save_goals_{fy.id}"):
        texts = _current_texts(fy.id)
        saved = run_action(
            lambda: get_backend().goals.save(fy.id, texts),
            success="目標を保存しました。",
            failure="保存に失敗しました。",
            context={"screen": "goals", "fiscal_year_id": fy.id},
        )
        if saved:
            reset_keys(_list_key(fy.id))
            st.rerun()


def _render_readonly(goals: Sequence[Goal]) -> None:
    if not goals:
        st.caption("目標が設定されていません")
        return
    for i, goal in enumerate(goals):
        with st.container(border=True):
            st.caption(f"目標 {i + 1}")
            st.write(goal.goal_text)


def render() -> None:
    user = require_user("/goals")
    render_sidebar(user)
    backend = get_backend()

    st.title("目標設定")
    st.caption(f"年度ごとに目標を設定します（最大{MAX_GOALS}つ）")

    years = load(backend.admin.fiscal_years, [], context={"screen": "goals"})
    current = current_fiscal_year(years)
    fy = find_fiscal_year(
        years, fiscal_year_selector(years, key="goals_year", default_id=current.id if current else None)
    )

    render_flash()
    if fy is None:
        empty_state("年度が登録されていません")
        return

    goals = load(lambda: backend.goals.list(fy.id), [], context={"screen": "goals", "fiscal_year_id": fy.id})
    is_open = is_goal_setting_open(fy)
    if not is_open:
        st.warning("現在、目標設定の受付期間外です。")

    with st.container(border=True):
        st.subheader(f"{fy.label}の目標")
        st.caption(f"対象期間: {goal_target_period(fy)}")
        if is_open:
            _render_editor(fy, goals)
        else:
            _render_readonly(goals)
