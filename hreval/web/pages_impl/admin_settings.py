from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Sequence

import streamlit as st

from hreval.domain.models import WINDOW_FIELDS, WINDOW_LABELS, Department, FiscalYear, Position
from hreval.web.components.widgets import empty_state
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import render_flash, reset_keys
from hreval.web.framework.user_context import get_backend

PERMISSION_LABELS = {
    "can_evaluate": "評価",
    "can_view_all": "全件閲覧",
    "can_final_approve": "最終承認",
}


def _window_key(fy: FiscalYear, attr: str) -> str:
    return f"window_{fy.id}_{attr}"


def _render_fiscal_year(fy: FiscalYear) -> None:
    with st.container(border=True):
        head = st.columns([4, 1])
        head[0].subheader(fy.label)
        if fy.is_current:
            head[1].markdown("**現在の年度**")

        cols = st.columns(len(WINDOW_FIELDS))
        for col, attr in zip(cols, WINDOW_FIELDS):
            key = _window_key(fy, attr)
            with col:
                wanted = st.toggle(WINDOW_LABELS[attr], value=getattr(fy, attr), key=key)
            if wanted == getattr(fy, attr):
                continue
            state = "受付中" if wanted else "締切"
            saved = run_action(
                lambda: get_backend().admin.update_fiscal_year(replace(fy, **{attr: wanted})),
                success=f"{fy.label} {WINDOW_LABELS[attr]}を{state}にしました。",
                failure="設定の更新に失敗しました。",
                context={"screen": "admin_settings", "fiscal_year_id": fy.id, "window": attr},
            )
            # the toggle re-reads the server value on the next run either way
            reset_keys(key)
            if saved:
                st.rerun()
            return


def _render_new_fiscal_year(years: Sequence[FiscalYear]) -> None:
    next_year = max((fy.year for fy in years), default=date.today().year - 1) + 1
    with st.form("new_fiscal_year"):
        year = st.number_input("年度", min_value=2000, max_value=2100, value=next_year, step=1)
        if st.form_submit_button("年度を追加"):
            if run_action(
                lambda: get_backend().admin.create_fiscal_year(int(year)),
                success=f"{int(year)}年度を追加しました。",
                failure="年度の追加に失敗しました。",
                context={"screen": "admin_settings"},
            ):
                st.rerun()


def _render_departments(departments: Sequence[Department]) -> None:
    if not departments:
        empty_state("部署が登録されていません")
    for d in departments:
        row = st.columns([4, 1], vertical_alignment="center")
        row[0].write(d.name)
        active = row[1].toggle("有効", value=d.is_active, key=f"department_active_{d.id}")
        if active != d.is_active:
            if run_action(
                lambda: get_backend().admin.update_department(replace(d, is_active=active)),
                success="部署を更新しました。",
                failure="保存に失敗しました。",
                context={"screen": "admin_settings", "department_id": d.id},
            ):
                st.rerun()
            reset_keys(f"department_active_{d.id}")

    with st.form("new_department", clear_on_submit=True):
        name = st.text_input("部署名")
        if st.form_submit_button("部署を追加"):
            if not name.strip():
                st.error("部署名を入力してください")
            elif run_action(
                lambda: get_backend().admin.create_department(name.strip()),
                success="部署を追加しました。",
                failure="保存に失敗しました。",
                context={"screen": "admin_settings"},
            ):
                st.rerun()


def _render_positions(positions: Sequence[Position]) -> None:
    if not positions:
        empty_state("役職が登録されていません")
    for p in sorted(positions, key=lambda p: p.sort_order):
        with st.form(f"position_{p.id}"):
            row = st.columns([3] + [2] * len(PERMISSION_LABELS) + [2], vertical_alignment="center")
            row[0].markdown(f"**{p.name}** ({p.code})")
            flags = {
                attr: col.checkbox(label, value=getattr(p, attr))
                for col, (attr, label) in zip(row[1:], PERMISSION_LABELS.items())
            }
            if row[-1].form_submit_button("保存"):
                if run_action(
                    lambda: get_backend().admin.update_position(replace(p, **flags)),
                    success="役職を更新しました。",
                    failure="保存に失敗しました。",
                    context={"screen": "admin_settings", "position_id": p.id},
                ):
                    st.rerun()

    with st.form("new_position", clear_on_submit=True):
        cols = st.columns(3)
        name = cols[0].text_input("役職名")
        code = cols[1].number_input("コード", min_value=0, step=1)
        sort_order = cols[2].number_input("表示順", min_value=0, step=1)
        flags = {attr: st.checkbox(label) for attr, label in PERMISSION_LABELS.items()}
        if st.form_submit_button("役職を追加"):
            payload = Position(id=0, code=int(code), name=name.strip(), sort_order=int(sort_order), **flags).to_dict()
            payload.pop("id")
            if not name.strip():
                st.error("役職名を入力してください")
            elif run_action(
                lambda: get_backend().admin.create_position(payload),
                success="役職を追加しました。",
                failure="保存に失敗しました。",
                context={"screen": "admin_settings"},
            ):
                st.rerun()


def render() -> None:
    user = require_user("/admin/settings")
    render_sidebar(user)
    admin = get_backend().admin

    st.title("評価期間管理")
    st.caption("目標設定・自己評価・評価の受付を切り替えます")
    render_flash()

    tab_years, tab_departments, tab_positions = st.tabs(["評価期間", "部署", "役職"])
    with tab_years:
        years = load(admin.fiscal_years, [], context={"screen": "admin_settings"})
        if not years:
            empty_state("年度が登録されていません")
        for fy in sorted(years, key=lambda fy: fy.year, reverse=True):
            _render_fiscal_year(fy)
        _render_new_fiscal_year(years)
    with tab_departments:
        _render_departments(load(admin.departments, [], context={"screen": "admin_settings"}))
    with tab_positions:
        _render_positions(load(admin.positions, [], context={"screen": "admin_settings"}))
