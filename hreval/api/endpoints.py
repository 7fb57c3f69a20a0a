"""
REST resources consumed by the screens, one class per resource group.

Every method is a single call through ApiClient and returns domain records.
Mutations answered with an empty body (204) return None; a body that does
not parse into the expected record raises ValidationError tagged with the
request path.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypeVar

from hreval.domain.models import (
    AuthResponse,
    DashboardCounts,
    Department,
    Evaluation,
    FiscalYear,
    Goal,
    Notification,
    Position,
    User,
    UserForm,
)
from hreval.domain.rules import normalize_goal_texts, require_grade
from hreval.infra.exceptions import ValidationError

from .client import LOGIN_PATH, ApiClient

R = TypeVar("R")


def _as_list(data: Any) -> List[Dict[str, Any]]:
    return [d for d in data if isinstance(d, dict)] if isinstance(data, list) else []


def _parse(parser: Callable[[Dict[str, Any]], R], data: Dict[str, Any], path: str) -> R:
    try:
        return parser(data)
    except ValidationError as e:
        raise ValidationError(f"Malformed response from {path}: {e.message}", path=path, response=data) from e
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed response from {path}: {e!r}", path=path, response=data) from e


def _record(parser: Callable[[Dict[str, Any]], R], data: Any, path: str) -> Optional[R]:
    """One record from a mutation response; None when the body is empty."""
    if not isinstance(data, dict):
        return None
    return _parse(parser, data, path)


def _records(parser: Callable[[Dict[str, Any]], R], data: Any, path: str) -> List[R]:
    return [_parse(parser, d, path) for d in _as_list(data)]


class AuthApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, email: str, password: str) -> AuthResponse:
        data = self.client.call("POST", LOGIN_PATH, json_body={"email": email, "password": password})
        return _parse(AuthResponse.from_dict, data if isinstance(data, dict) else {}, LOGIN_PATH)


class GoalApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, fiscal_year_id: int) -> List[Goal]:
        data = self.client.call("GET", "/goals", params={"fiscalYearId": fiscal_year_id})
        return _records(Goal.from_dict, data, "/goals")

    def save(self, fiscal_year_id: int, goal_texts: List[str]) -> List[Goal]:
        """Replace the year's goals; blanks are dropped and the list capped at five."""
        payload = {"fiscalYearId": fiscal_year_id, "goals": normalize_goal_texts(goal_texts)}
        data = self.client.call("POST", "/goals", json_body=payload)
        return _records(Goal.from_dict, data, "/goals")


class EvaluationApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def _list(self, path: str) -> List[Evaluation]:
        return _records(Evaluation.from_dict, self.client.call("GET", path), path)

    def _post(self, evaluation_id: int, action: str, body: Optional[Dict[str, Any]] = None) -> Optional[Evaluation]:
        path = f"/evaluations/{evaluation_id}/{action}"
        return _record(Evaluation.from_dict, self.client.call("POST", path, json_body=body), path)

    # lists
    def mine(self) -> List[Evaluation]:
        return self._list("/evaluations/mine")

    def pending(self) -> List[Evaluation]:
        return self._list("/evaluations/pending")

    def manager_pending(self) -> List[Evaluation]:
        return self._list("/evaluations/manager-pending")

    def director_pending(self) -> List[Evaluation]:
        return self._list("/evaluations/director-pending")

    def finalize_pending(self) -> List[Evaluation]:
        return self._list("/evaluations/finalize-pending")

    def counts(self) -> DashboardCounts:
        data = self.client.call("GET", "/evaluations/counts")
        return DashboardCounts.from_dict(data if isinstance(data, dict) else {})

    # actions
    def submit_self(self, evaluation_id: int) -> Optional[Evaluation]:
        return self._post(evaluation_id, "self-evaluate")

    def evaluate(self, evaluation_id: int, grade: str, comment: str = "") -> Optional[Evaluation]:
        return self._post(evaluation_id, "evaluate", {"grade": require_grade(grade), "comment": comment})

    def approve(self, evaluation_id: int, grade: str, comment: str = "") -> Optional[Evaluation]:
        return self._post(evaluation_id, "approve", {"grade": require_grade(grade), "comment": comment})

    def reject(self, evaluation_id: int, reason: str) -> Optional[Evaluation]:
        return self._post(evaluation_id, "reject", {"reason": reason})

    def director_evaluate(self, evaluation_id: int, grade: str, comment: str = "") -> Optional[Evaluation]:
        return self._post(evaluation_id, "director-evaluate", {"grade": require_grade(grade), "comment": comment})

    def finalize(self, evaluation_id: int) -> Optional[Evaluation]:
        return self._post(evaluation_id, "finalize")


class NotificationApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self) -> List[Notification]:
        return _records(Notification.from_dict, self.client.call("GET", "/notifications"), "/notifications")

    def mark_read(self, notification_id: int) -> None:
        self.client.call("PUT", f"/notifications/{notification_id}/read")

    def unread_count(self) -> int:
        data = self.client.call("GET", "/notifications/unread-count")
        try:
            return int(data or 0)
        except (TypeError, ValueError):
            return 0


class AdminApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def _get(self, parser: Callable[[Dict[str, Any]], R], path: str) -> List[R]:
        return _records(parser, self.client.call("GET", path), path)

    def _send(
        self, parser: Callable[[Dict[str, Any]], R], method: str, path: str, body: Dict[str, Any]
    ) -> Optional[R]:
        return _record(parser, self.client.call(method, path, json_body=body), path)

    # users
    def users(self) -> List[User]:
        return self._get(User.from_dict, "/admin/users")

    def create_user(self, form: UserForm) -> Optional[User]:
        return self._send(User.from_dict, "POST", "/admin/users", form.to_payload())

    def update_user(self, user_id: int, form: UserForm) -> Optional[User]:
        return self._send(User.from_dict, "PUT", f"/admin/users/{user_id}", form.to_payload())

    # departments
    def departments(self) -> List[Department]:
        return self._get(Department.from_dict, "/admin/departments")

    def create_department(self, name: str) -> Optional[Department]:
        return self._send(Department.from_dict, "POST", "/admin/departments", {"name": name, "isActive": True})

    def update_department(self, department: Department) -> Optional[Department]:
        return self._send(Department.from_dict, "PUT", f"/admin/departments/{department.id}", department.to_dict())

    # positions
    def positions(self) -> List[Position]:
        return self._get(Position.from_dict, "/admin/positions")

    def create_position(self, payload: Dict[str, Any]) -> Optional[Position]:
        return self._send(Position.from_dict, "POST", "/admin/positions", payload)

    def update_position(self, position: Position) -> Optional[Position]:
        return self._send(Position.from_dict, "PUT", f"/admin/positions/{position.id}", position.to_dict())

    # fiscal years
    def fiscal_years(self) -> List[FiscalYear]:
        return self._get(FiscalYear.from_dict, "/admin/fiscal-years")

    def create_fiscal_year(self, year: int) -> Optional[FiscalYear]:
        return self._send(FiscalYear.from_dict, "POST", "/admin/fiscal-years", {"year": year})

    def update_fiscal_year(self, fiscal_year: FiscalYear) -> Optional[FiscalYear]:
        return self._send(
            FiscalYear.from_dict, "PUT", f"/admin/fiscal-years/{fiscal_year.id}", fiscal_year.to_dict()
        )


class Backend:
    """All resource groups bound to one client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthApi(client)
        self.goals = GoalApi(client)
        self.evaluations = EvaluationApi(client)
        self.notifications = NotificationApi(client)
        self.admin = AdminApi(client)
