"""
Domain models: plain records mirrored from the backend, no IO.

The backend speaks camelCase JSON; `from_dict` / `to_dict` translate at the
edge so the rest of the client works with snake_case attributes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from hreval.infra.exceptions import ValidationError


# =============================================================================
# Enums
# =============================================================================


class EvaluationStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    SELF_SUBMITTED = "SELF_SUBMITTED"
    EVALUATOR_SUBMITTED = "EVALUATOR_SUBMITTED"
    MANAGER_APPROVED = "MANAGER_APPROVED"
    DIRECTOR_EVALUATED = "DIRECTOR_EVALUATED"
    FINALIZED = "FINALIZED"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class EvaluationPeriod(str, Enum):
    SUMMER = "SUMMER"
    WINTER = "WINTER"

    @property
    def label(self) -> str:
        return PERIOD_LABELS[self]


class Grade(str, Enum):
    """Grade domain, best first."""
    SS = "SS"
    S = "S"
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def values(cls) -> List[str]:
        return [g.value for g in cls]

    @classmethod
    def rank(cls, value: str) -> int:
        """Position in the grade order; unknown labels sort last."""
        try:
            return cls.values().index(value)
        except ValueError:
            return len(cls.values())


STATUS_LABELS: Dict[EvaluationStatus, str] = {
    EvaluationStatus.NOT_STARTED: "未開始",
    EvaluationStatus.SELF_SUBMITTED: "自己評価提出済",
    EvaluationStatus.EVALUATOR_SUBMITTED: "評価者評価済",
    EvaluationStatus.MANAGER_APPROVED: "管理者確認済",
    EvaluationStatus.DIRECTOR_EVALUATED: "役員評価済",
    EvaluationStatus.FINALIZED: "最終確定",
}

PERIOD_LABELS: Dict[EvaluationPeriod, str] = {
    EvaluationPeriod.SUMMER: "夏評価",
    EvaluationPeriod.WINTER: "冬評価",
}

GRADES: List[str] = Grade.values()


def _parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(f"Unknown {field_name}: {value!r}", field=field_name, value=value) from e


def _opt_str(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _opt_int(v: Any) -> Optional[int]:
    return None if v is None or v == "" else int(v)


# =============================================================================
# Organisation
# =============================================================================


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    is_active: bool = True

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Department":
        return cls(id=int(d["id"]), name=str(d.get("name") or ""), is_active=bool(d.get("isActive", True)))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "isActive": self.is_active}


@dataclass(frozen=True)
class Position:
    id: int
    code: int
    name: str
    sort_order: int = 0
    can_view_all: bool = False
    can_evaluate: bool = False
    can_final_approve: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Position":
        return cls(
            id=int(d["id"]),
            code=int(d.get("code") or 0),
            name=str(d.get("name") or ""),
            sort_order=int(d.get("sortOrder") or 0),
            can_view_all=bool(d.get("canViewAll", False)),
            can_evaluate=bool(d.get("canEvaluate", False)),
            can_final_approve=bool(d.get("canFinalApprove", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "sortOrder": self.sort_order,
            "canViewAll": self.can_view_all,
            "canEvaluate": self.can_evaluate,
            "canFinalApprove": self.can_final_approve,
        }


# =============================================================================
# Users
# =============================================================================


@dataclass(frozen=True)
class UserInfo:
    """Signed-in user's profile as cached in the session store."""
    id: int
    name: str
    email: str
    position_name: Optional[str] = None
    department_name: Optional[str] = None
    can_evaluate: bool = False
    can_view_all: bool = False
    can_final_approve: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "UserInfo":
        return cls(
            id=int(d["id"]),
            name=str(d.get("name") or ""),
            email=str(d.get("email") or ""),
            position_name=_opt_str(d.get("positionName")),
            department_name=_opt_str(d.get("departmentName")),
            can_evaluate=bool(d.get("canEvaluate", False)),
            can_view_all=bool(d.get("canViewAll", False)),
            can_final_approve=bool(d.get("canFinalApprove", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "positionName": self.position_name,
            "departmentName": self.department_name,
            "canEvaluate": self.can_evaluate,
            "canViewAll": self.can_view_all,
            "canFinalApprove": self.can_final_approve,
        }

    def has_permission(self, flag: str) -> bool:
        """Look up a permission flag by its wire name (e.g. ``canEvaluate``)."""
        return bool(self.to_dict().get(flag, False))


@dataclass(frozen=True)
class User:
    """User record as listed by the admin endpoints."""
    id: int
    name: str
    email: str
    name_kana: Optional[str] = None
    department: Optional[Department] = None
    position: Optional[Position] = None
    is_active: bool = True
    can_evaluate: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "User":
        dept = d.get("department")
        pos = d.get("position")
        return cls(
            id=int(d["id"]),
            name=str(d.get("name") or ""),
            email=str(d.get("email") or ""),
            name_kana=_opt_str(d.get("nameKana")),
            department=Department.from_dict(dept) if isinstance(dept, dict) else None,
            position=Position.from_dict(pos) if isinstance(pos, dict) else None,
            is_active=bool(d.get("isActive", True)),
            can_evaluate=bool(d.get("canEvaluate", False)),
        )


@dataclass
class UserForm:
    """Payload for creating or updating a user from the admin screen."""
    name: str
    email: str
    name_kana: str = ""
    password: str = ""
    department_id: Optional[int] = None
    position_id: Optional[int] = None
    can_evaluate: bool = False

    def to_payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "nameKana": self.name_kana,
            "email": self.email,
            "departmentId": self.department_id,
            "positionId": self.position_id,
            "canEvaluate": self.can_evaluate,
        }
        if self.password:
            data["password"] = self.password
        return data


# =============================================================================
# Fiscal years & goals
# =============================================================================


WINDOW_FIELDS: Dict[str, str] = {
    "goal_setting_open": "goalSettingOpen",
    "summer_self_open": "summerSelfOpen",
    "summer_eval_open": "summerEvalOpen",
    "winter_self_open": "winterSelfOpen",
    "winter_eval_open": "winterEvalOpen",
}

WINDOW_LABELS: Dict[str, str] = {
    "goal_setting_open": "目標設定",
    "summer_self_open": "夏・自己評価",
    "summer_eval_open": "夏・評価入力",
    "winter_self_open": "冬・自己評価",
    "winter_eval_open": "冬・評価入力",
}


@dataclass(frozen=True)
class FiscalYear:
    id: int
    year: int
    is_current: bool = False
    goal_setting_open: bool = False
    summer_self_open: bool = False
    summer_eval_open: bool = False
    winter_self_open: bool = False
    winter_eval_open: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FiscalYear":
        return cls(
            id=int(d["id"]),
            year=int(d["year"]),
            is_current=bool(d.get("isCurrent", False)),
            **{attr: bool(d.get(wire, False)) for attr, wire in WINDOW_FIELDS.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "year": self.year, "isCurrent": self.is_current}
        for attr, wire in WINDOW_FIELDS.items():
            data[wire] = getattr(self, attr)
        return data

    @property
    def label(self) -> str:
        return f"{self.year}年度"


@dataclass(frozen=True)
class Goal:
    id: int
    user_id: int
    fiscal_year_id: int
    goal_text: str
    summer_self_assessment: Optional[str] = None
    winter_self_assessment: Optional[str] = None
    sort_order: int = 0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Goal":
        return cls(
            id=int(d["id"]),
            user_id=int(d.get("userId") or 0),
            fiscal_year_id=int(d.get("fiscalYearId") or 0),
            goal_text=str(d.get("goalText") or ""),
            summer_self_assessment=_opt_str(d.get("summerSelfAssessment")),
            winter_self_assessment=_opt_str(d.get("winterSelfAssessment")),
            sort_order=int(d.get("sortOrder") or 0),
        )

    def self_assessment(self, period: EvaluationPeriod) -> Optional[str]:
        if period is EvaluationPeriod.SUMMER:
            return self.summer_self_assessment
        return self.winter_self_assessment


# =============================================================================
# Evaluations
# =============================================================================


@dataclass(frozen=True)
class Evaluation:
    """One row per user / fiscal year / period, carrying every stage's grade."""
    id: int
    user_id: int
    fiscal_year_id: int
    period: EvaluationPeriod
    status: EvaluationStatus
    user_name: Optional[str] = None
    fiscal_year: Optional[int] = None
    department_name: Optional[str] = None
    position_name: Optional[str] = None
    evaluator_id: Optional[int] = None
    evaluator_name: Optional[str] = None
    evaluator_grade: Optional[str] = None
    evaluator_comment: Optional[str] = None
    evaluated_at: Optional[str] = None
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    manager_grade: Optional[str] = None
    manager_comment: Optional[str] = None
    manager_approved_at: Optional[str] = None
    director_id: Optional[int] = None
    director_grade: Optional[str] = None
    director_comment: Optional[str] = None
    director_evaluated_at: Optional[str] = None
    finalized_at: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Evaluation":
        return cls(
            id=int(d["id"]),
            user_id=int(d.get("userId") or 0),
            fiscal_year_id=int(d.get("fiscalYearId") or 0),
            period=_parse_enum(EvaluationPeriod, d.get("period"), "period"),
            status=_parse_enum(EvaluationStatus, d.get("status"), "status"),
            user_name=_opt_str(d.get("userName")),
            fiscal_year=_opt_int(d.get("fiscalYear")),
            department_name=_opt_str(d.get("departmentName")),
            position_name=_opt_str(d.get("positionName")),
            evaluator_id=_opt_int(d.get("evaluatorId")),
            evaluator_name=_opt_str(d.get("evaluatorName")),
            evaluator_grade=_opt_str(d.get("evaluatorGrade")),
            evaluator_comment=_opt_str(d.get("evaluatorComment")),
            evaluated_at=_opt_str(d.get("evaluatedAt")),
            manager_id=_opt_int(d.get("managerId")),
            manager_name=_opt_str(d.get("managerName")),
            manager_grade=_opt_str(d.get("managerGrade")),
            manager_comment=_opt_str(d.get("managerComment")),
            manager_approved_at=_opt_str(d.get("managerApprovedAt")),
            director_id=_opt_int(d.get("directorId")),
            director_grade=_opt_str(d.get("directorGrade")),
            director_comment=_opt_str(d.get("directorComment")),
            director_evaluated_at=_opt_str(d.get("directorEvaluatedAt")),
            finalized_at=_opt_str(d.get("finalizedAt")),
        )

    @property
    def period_label(self) -> str:
        year = f"{self.fiscal_year}年度 " if self.fiscal_year is not None else ""
        return f"{year}{self.period.label}"


@dataclass(frozen=True)
class DashboardCounts:
    pending_evaluations: int = 0
    manager_pending: int = 0
    director_pending: int = 0
    finalize_pending: int = 0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DashboardCounts":
        return cls(
            pending_evaluations=int(d.get("pendingEvaluations") or 0),
            manager_pending=int(d.get("managerPending") or 0),
            director_pending=int(d.get("directorPending") or 0),
            finalize_pending=int(d.get("finalizePending") or 0),
        )


# =============================================================================
# Notifications & auth
# =============================================================================


@dataclass(frozen=True)
class Notification:
    id: int
    title: str
    type: str = ""
    message: str = ""
    link: str = ""
    is_read: bool = False
    created_at: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Notification":
        return cls(
            id=int(d["id"]),
            title=str(d.get("title") or ""),
            type=str(d.get("type") or ""),
            message=str(d.get("message") or ""),
            link=str(d.get("link") or ""),
            is_read=bool(d.get("isRead", False)),
            created_at=str(d.get("createdAt") or ""),
        )


@dataclass(frozen=True)
class AuthResponse:
    access_token: str
    refresh_token: str
    user: UserInfo

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AuthResponse":
        if not d.get("accessToken") or not isinstance(d.get("user"), dict):
            raise ValidationError("Malformed login response", field="accessToken")
        return cls(
            access_token=str(d["accessToken"]),
            refresh_token=str(d.get("refreshToken") or ""),
            user=UserInfo.from_dict(d["user"]),
        )


__all__ = [
    "EvaluationStatus",
    "EvaluationPeriod",
    "Grade",
    "GRADES",
    "STATUS_LABELS",
    "PERIOD_LABELS",
    "WINDOW_FIELDS",
    "WINDOW_LABELS",
    "Department",
    "Position",
    "UserInfo",
    "User",
    "UserForm",
    "FiscalYear",
    "Goal",
    "Evaluation",
    "DashboardCounts",
    "Notification",
    "AuthResponse",
]
