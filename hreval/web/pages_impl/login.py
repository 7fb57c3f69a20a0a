from __future__ import annotations

import streamlit as st

from hreval.infra.exceptions import ErrorHandler, HREvalException
from hreval.web.config import APP_SUBTITLE, APP_TITLE
from hreval.web.framework.guard import go_to, require_guest
from hreval.web.framework.routes import HOME_PATH
from hreval.web.framework.user_context import login

DEMO_ACCOUNTS = [
    ("管理者", "admin@demo.example.com"),
    ("部門長", "manager@demo.example.com"),
    ("評価者", "evaluator@demo.example.com"),
    ("一般職員", "staff@demo.example.com"),
]
DEMO_PASSWORD = "demo1234"

_errors = ErrorHandler()


def _fill_demo(email: str) -> None:
    st.session_state["login_email"] = email
    st.session_state["login_password"] = DEMO_PASSWORD


def render() -> None:
    require_guest()

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown(f"<h1 style='text-align:center'>{APP_TITLE}</h1>", unsafe_allow_html=True)
        st.markdown(f"<p style='text-align:center;color:#6b7280'>{APP_SUBTITLE}</p>", unsafe_allow_html=True)

        with st.form("login"):
            email = st.text_input("メールアドレス", key="login_email", placeholder="email@example.com")
            password = st.text_input("パスワード", key="login_password", type="password", placeholder="パスワード")
            submitted = st.form_submit_button("ログイン", type="primary", use_container_width=True)

        if submitted:
            if not email.strip() or not password:
                st.error("メールアドレスとパスワードを入力してください")
            else:
                signed_in = False
                try:
                    with st.spinner("ログイン中..."):
                        login(email.strip(), password)
                    signed_in = True
                except HREvalException as e:
                    _errors.handle_and_log(e, {"screen": "login"})
                    st.error(ErrorHandler.user_message(e, "メールアドレスまたはパスワードが正しくありません"))
                if signed_in:
                    go_to(HOME_PATH)

        with st.container(border=True):
            st.caption("デモアカウント")
            for role, account in DEMO_ACCOUNTS:
                st.button(
                    f"{role}: {account}",
                    key=f"demo_{account}",
                    on_click=_fill_demo,
                    args=(account,),
                    type="tertiary",
                )
