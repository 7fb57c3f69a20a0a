"""Route table and guard decisions.

Kept free of Streamlit imports: `guard.py` turns the decisions made here
into `st.switch_page` calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from hreval.domain.models import UserInfo

LOGIN_PATH = "/login"
HOME_PATH = "/"

# permission flags, by their wire names on the user profile
CAN_EVALUATE = "canEvaluate"
CAN_VIEW_ALL = "canViewAll"
CAN_FINAL_APPROVE = "canFinalApprove"


@dataclass(frozen=True)
class Route:
    path: str
    script: str
    title: str
    icon: str
    permission: Optional[str] = None
    guest_only: bool = False

    def allows(self, user: Optional[UserInfo]) -> bool:
        if self.guest_only:
            return user is None
        if user is None:
            return False
        return self.permission is None or user.has_permission(self.permission)


ROUTES: List[Route] = [
    Route(LOGIN_PATH, "pages/0_Login.py", "ログイン", "🔑", guest_only=True),
    Route(HOME_PATH, "app.py", "ダッシュボード", "🏠"),
    Route("/goals", "pages/1_Goals.py", "目標設定", "🎯"),
    Route("/self-evaluation", "pages/2_Self_Evaluation.py", "自己評価", "📝"),
    Route("/my-evaluations", "pages/3_My_Evaluations.py", "評価履歴", "📄"),
    Route("/notifications", "pages/4_Notifications.py", "通知", "🔔"),
    Route("/evaluator", "pages/5_Evaluator.py", "評価入力", "✍️", permission=CAN_EVALUATE),
    Route("/manager/review", "pages/6_Manager_Review.py", "評価確認", "🛡️", permission=CAN_VIEW_ALL),
    Route("/director/evaluate", "pages/7_Director_Evaluate.py", "役員評価入力", "🏅", permission=CAN_FINAL_APPROVE),
    Route("/director/finalize", "pages/8_Director_Finalize.py", "最終確認", "✅", permission=CAN_FINAL_APPROVE),
    Route("/results", "pages/9_Results.py", "評価結果一覧", "📊", permission=CAN_VIEW_ALL),
    Route("/admin/users", "pages/10_Admin_Users.py", "ユーザー管理", "👥", permission=CAN_FINAL_APPROVE),
    Route("/admin/settings", "pages/11_Admin_Settings.py", "期間管理", "⚙️", permission=CAN_FINAL_APPROVE),
]

_BY_PATH = {r.path: r for r in ROUTES}


def get_route(path: str) -> Route:
    """Route registered for a path; KeyError for unknown paths."""
    return _BY_PATH[path]


def resolve_redirect(route: Route, user: Optional[UserInfo]) -> Optional[str]:
    """Where the guard sends the user instead of `route`, or None to render it.

    - guest-only route with a signed-in user -> home
    - protected route without a profile -> login
    - route whose permission flag the user lacks -> home
    """
    if route.guest_only:
        return HOME_PATH if user is not None else None
    if user is None:
        return LOGIN_PATH
    if route.permission and not user.has_permission(route.permission):
        return HOME_PATH
    return None


def visible_routes(user: Optional[UserInfo]) -> List[Route]:
    """Sidebar entries: every non-guest route the user may open."""
    if user is None:
        return []
    return [r for r in ROUTES if not r.guest_only and r.allows(user)]


def route_for_link(link: Optional[str]) -> Route:
    """Map a notification link to a route; unknown links go to the dashboard."""
    if not link:
        return _BY_PATH[HOME_PATH]
    path = link.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    route = _BY_PATH.get(path)
    if route is None or route.guest_only:
        return _BY_PATH[HOME_PATH]
    return route


__all__ = [
    "LOGIN_PATH",
    "HOME_PATH",
    "CAN_EVALUATE",
    "CAN_VIEW_ALL",
    "CAN_FINAL_APPROVE",
    "Route",
    "ROUTES",
    "get_route",
    "resolve_redirect",
    "visible_routes",
    "route_for_link",
]
