"""
Domain rules: pure functions, no IO.

The only invariant the client enforces itself is the five-goal cap; the
window checks below merely decide which affordances a screen shows. Status
transitions are never computed here.
"""
from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from hreval.infra.exceptions import ValidationError

from .models import (
    Evaluation,
    EvaluationPeriod,
    EvaluationStatus,
    FiscalYear,
    Grade,
)


# =============================================================================
# Goals
# =============================================================================

MAX_GOALS = 5


def can_add_goal(current_count: int) -> bool:
    return current_count < MAX_GOALS


def normalize_goal_texts(texts: Iterable[Optional[str]]) -> List[str]:
    """Strip entries, drop blanks and cap at MAX_GOALS, keeping input order."""
    cleaned = [t.strip() for t in texts if t is not None and t.strip()]
    return cleaned[:MAX_GOALS]


# =============================================================================
# Fiscal-year windows
# =============================================================================


def current_fiscal_year(years: Sequence[FiscalYear]) -> Optional[FiscalYear]:
    for fy in years:
        if fy.is_current:
            return fy
    return None


def find_fiscal_year(years: Sequence[FiscalYear], fiscal_year_id: Optional[int]) -> Optional[FiscalYear]:
    if fiscal_year_id is None:
        return None
    for fy in years:
        if fy.id == fiscal_year_id:
            return fy
    return None


def is_goal_setting_open(fy: Optional[FiscalYear]) -> bool:
    return bool(fy and fy.goal_setting_open)


def is_self_assessment_open(fy: Optional[FiscalYear], period: EvaluationPeriod) -> bool:
    if fy is None:
        return False
    return fy.summer_self_open if period is EvaluationPeriod.SUMMER else fy.winter_self_open


def is_evaluation_open(fy: Optional[FiscalYear], period: EvaluationPeriod) -> bool:
    if fy is None:
        return False
    return fy.summer_eval_open if period is EvaluationPeriod.SUMMER else fy.winter_eval_open


def goal_year_for_assessment(
    years: Sequence[FiscalYear], selected: FiscalYear, period: EvaluationPeriod
) -> int:
    """Fiscal-year id whose goals a self-assessment reviews.

    Summer looks back at the previous year's goals; when that year is not
    known the selected year is used.
    """
    if period is EvaluationPeriod.WINTER:
        return selected.id
    for fy in years:
        if fy.year == selected.year - 1:
            return fy.id
    return selected.id


def goal_target_period(fy: FiscalYear) -> str:
    return f"{fy.year}年4月〜{fy.year + 1}年3月"


def assessment_target_period(fy: FiscalYear, period: EvaluationPeriod) -> str:
    if period is EvaluationPeriod.SUMMER:
        return f"{fy.year - 1}年10月〜{fy.year}年3月"
    return f"{fy.year}年4月〜{fy.year}年9月"


# =============================================================================
# Evaluations
# =============================================================================


def find_own_evaluation(
    evaluations: Iterable[Evaluation], fiscal_year_id: int, period: EvaluationPeriod
) -> Optional[Evaluation]:
    for e in evaluations:
        if e.fiscal_year_id == fiscal_year_id and e.period is period:
            return e
    return None


def can_edit_self_assessment(evaluation: Optional[Evaluation]) -> bool:
    return evaluation is not None and evaluation.status is EvaluationStatus.NOT_STARTED


def require_grade(grade: Optional[str]) -> str:
    """Return the grade or raise ValidationError when missing/unknown."""
    if not grade:
        raise ValidationError("評価ランクを選択してください", field="grade", value=grade)
    if grade not in Grade.values():
        raise ValidationError(f"Unknown grade: {grade}", field="grade", value=grade)
    return grade


def filter_evaluations(
    evaluations: Iterable[Evaluation],
    fiscal_year_id: Optional[int] = None,
    period: Optional[EvaluationPeriod] = None,
) -> List[Evaluation]:
    result = []
    for e in evaluations:
        if fiscal_year_id is not None and e.fiscal_year_id != fiscal_year_id:
            continue
        if period is not None and e.period is not period:
            continue
        result.append(e)
    return result


def grade_distribution(evaluations: Iterable[Evaluation]) -> Dict[str, int]:
    """Count final (director) grades, ordered best grade first."""
    counts: Dict[str, int] = {}
    for e in evaluations:
        if e.director_grade:
            counts[e.director_grade] = counts.get(e.director_grade, 0) + 1
    return OrderedDict(sorted(counts.items(), key=lambda kv: (Grade.rank(kv[0]), kv[0])))


__all__ = [
    "MAX_GOALS",
    "can_add_goal",
    "normalize_goal_texts",
    "current_fiscal_year",
    "find_fiscal_year",
    "is_goal_setting_open",
    "is_self_assessment_open",
    "is_evaluation_open",
    "goal_year_for_assessment",
    "goal_target_period",
    "assessment_target_period",
    "find_own_evaluation",
    "can_edit_self_assessment",
    "require_grade",
    "filter_evaluations",
    "grade_distribution",
]
