from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import streamlit as st

from hreval.domain.models import DashboardCounts, UserInfo
from hreval.web.framework.actions import load
from hreval.web.framework.guard import require_user
from hreval.web.framework.layout import render_sidebar
from hreval.web.framework.routes import HOME_PATH, get_route
from hreval.web.framework.user_context import get_backend


@dataclass(frozen=True)
class DashCard:
    path: str
    title: str
    description: str
    show: bool
    badge: Optional[int] = None


def dashboard_cards(user: UserInfo, counts: DashboardCounts) -> List[DashCard]:
    """Cards for the signed-in user; directors get the director cards instead of manager review."""
    cards = [
        DashCard("/goals", "目標設定", "今年度の目標を設定します", True),
        DashCard("/self-evaluation", "自己評価入力", "夏/冬の自己評価を入力します", True),
        DashCard("/my-evaluations", "評価履歴", "過去の評価結果を確認します", True),
        DashCard("/notifications", "通知", "お知らせを確認します", True),
        DashCard("/evaluator", "評価入力", "依頼された評価を入力します",
                 user.can_evaluate, counts.pending_evaluations),
        DashCard("/manager/review", "評価確認・修正", "評価者の評価を確認・修正します",
                 user.can_view_all and not user.can_final_approve, counts.manager_pending),
        DashCard("/director/evaluate", "役員評価入力", "管理者承認済みの評価を入力します",
                 user.can_final_approve, counts.director_pending),
        DashCard("/director/finalize", "最終確認", "役員評価の最終確認・確定",
                 user.can_final_approve, counts.finalize_pending),
        DashCard("/results", "評価結果一覧", "全職員の評価結果を閲覧", user.can_view_all),
        DashCard("/admin/users", "ユーザー管理", "ユーザーの追加・編集", user.can_final_approve),
        DashCard("/admin/settings", "期間管理", "評価期間の開閉を管理", user.can_final_approve),
    ]
    return [c for c in cards if c.show]


def render() -> None:
    user = require_user(HOME_PATH)
    render_sidebar(user)

    counts = load(get_backend().evaluations.counts, DashboardCounts(), context={"screen": "dashboard"})

    st.title(f"ようこそ、{user.name}さん")
    st.caption(f"{user.department_name or '-'} / {user.position_name or '-'}")

    cards = dashboard_cards(user, counts)
    for row_start in range(0, len(cards), 3):
        cols = st.columns(3)
        for col, card in zip(cols, cards[row_start:row_start + 3]):
            route = get_route(card.path)
            with col:
                with st.container(border=True):
                    head = st.columns([3, 2])
                    with head[0]:
                        st.markdown(f"### {route.icon}")
                    with head[1]:
                        if card.badge:
                            st.markdown(f"**{card.badge}件待ち**")
                    st.markdown(f"**{card.title}**")
                    st.caption(card.description)
                    st.page_link(route.script, label="開く →")
