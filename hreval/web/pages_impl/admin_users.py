from __future__ import annotations

from typing import Optional, Sequence

import streamlit as st

from hreval.domain.models import Department, Position, User, UserForm
from hreval.web.components.widgets import empty_state
from hreval.web.framework.actions import load, run_action
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.state import render_flash, reset_keys
from hreval.web.framework.user_context import get_backend

EDITING_KEY = "admin_user_editing"
NEW_USER = 0
DEFAULT_PASSWORD = "changeme123"


def _option_index(options: Sequence[Optional[int]], value: Optional[int]) -> int:
    return options.index(value) if value in options else 0


def _render_form(
    editing: Optional[User],
    departments: Sequence[Department],
    positions: Sequence[Position],
) -> None:
    dept_ids = [None] + [d.id for d in departments]
    dept_names = {d.id: d.name for d in departments}
    pos_ids = [None] + [p.id for p in positions]
    pos_names = {p.id: p.name for p in positions}
    form_key = f"admin_user_form_{editing.id if editing else NEW_USER}"

    with st.form(form_key):
        st.subheader("ユーザー編集" if editing else "新規ユーザー")
        cols = st.columns(2)
        with cols[0]:
            name = st.text_input("氏名 *", value=editing.name if editing else "")
            email = st.text_input("メール *", value=editing.email if editing else "")
            department_id = st.selectbox(
                "部署",
                dept_ids,
                index=_option_index(dept_ids, editing.department.id if editing and editing.department else None),
                format_func=lambda v: "-- 選択 --" if v is None else dept_names.get(v, "-"),
            )
        with cols[1]:
            name_kana = st.text_input("フリガナ", value=(editing.name_kana or "") if editing else "")
            password = st.text_input(
                "パスワード（変更する場合）" if editing else "パスワード",
                type="password",
                placeholder="変更しない場合は空欄" if editing else "初期パスワード",
            )
            position_id = st.selectbox(
                "役職",
                pos_ids,
                index=_option_index(pos_ids, editing.position.id if editing and editing.position else None),
                format_func=lambda v: "-- 選択 --" if v is None else pos_names.get(v, "-"),
            )
        can_evaluate = st.checkbox("評価者権限を付与", value=editing.can_evaluate if editing else False)

        buttons = st.columns(2)
        cancelled = buttons[0].form_submit_button("キャンセル", use_container_width=True)
        submitted = buttons[1].form_submit_button("更新" if editing else "作成", type="primary",
                                                  use_container_width=True)

    if cancelled:
        reset_keys(EDITING_KEY)
        st.rerun()
    if not submitted:
        return
    if not name.strip() or not email.strip():
        st.error("氏名とメールアドレスを入力してください")
        return

    form = UserForm(
        name=name.strip(),
        email=email.strip(),
        name_kana=name_kana.strip(),
        password=password,
        department_id=department_id,
        position_id=position_id,
        can_evaluate=can_evaluate,
    )
    admin = get_backend().admin
    if editing:
        ok = run_action(lambda: admin.update_user(editing.id, form), success="ユーザーを更新しました。",
                        failure="保存に失敗しました。", context={"screen": "admin_users", "user_id": editing.id})
    else:
        form.password = form.password or DEFAULT_PASSWORD
        ok = run_action(lambda: admin.create_user(form), success="ユーザーを作成しました。",
                        failure="保存に失敗しました。", context={"screen": "admin_users"})
    if ok:
        reset_keys(EDITING_KEY)
        st.rerun()


def _render_table(users: Sequence[User]) -> None:
    if not users:
        empty_state("ユーザーが登録されていません")
        return
    widths = [3, 4, 3, 3, 2, 2]
    with st.container(border=True):
        header = st.columns(widths)
        for col, title in zip(header, ["氏名", "メール", "部署", "役職", "状態", ""]):
            col.caption(title)
        for u in users:
            row = st.columns(widths, vertical_alignment="center")
            row[0].markdown(f"**{u.name}**")
            row[1].write(u.email)
            row[2].write(u.department.name if u.department else "-")
            row[3].write(u.position.name if u.position else "-")
            row[4].write("有効" if u.is_active else "無効")
            if row[5].button("編集", key=f"admin_user_edit_{u.id}", type="tertiary"):
                st.session_state[EDITING_KEY] = u.id
                st.rerun()


def render() -> None:
    user = require_user("/admin/users")
    render_sidebar(user)
    admin = get_backend().admin

    head = st.columns([4, 1])
    with head[0]:
        st.title("ユーザー管理")
        st.caption("ユーザーの追加・編集を行います")
    with head[1]:
        if st.button("＋ 新規追加", key="admin_user_new", use_container_width=True):
            st.session_state[EDITING_KEY] = NEW_USER
            st.rerun()
    render_flash()

    users = load(admin.users, [], context={"screen": "admin_users"})
    departments = load(admin.departments, [], context={"screen": "admin_users"})
    positions = load(admin.positions, [], context={"screen": "admin_users"})

    editing_id = st.session_state.get(EDITING_KEY)
    if editing_id is not None:
        editing = next((u for u in users if u.id == editing_id), None)
        if editing_id == NEW_USER or editing is not None:
            with st.container(border=True):
                _render_form(editing, departments, positions)

    _render_table(users)
