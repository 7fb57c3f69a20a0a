"""
Domain rules: goal cap, fiscal-year windows, period text, grade handling.
"""

import pytest

from hreval.domain.models import Evaluation, EvaluationPeriod, EvaluationStatus, FiscalYear
from hreval.domain.rules import (
    MAX_GOALS,
    assessment_target_period,
    can_add_goal,
    can_edit_self_assessment,
    current_fiscal_year,
    filter_evaluations,
    find_fiscal_year,
    find_own_evaluation,
    goal_target_period,
    goal_year_for_assessment,
    grade_distribution,
    is_evaluation_open,
    is_goal_setting_open,
    is_self_assessment_open,
    normalize_goal_texts,
    require_grade,
)
from hreval.infra.exceptions import ValidationError

FY2024 = FiscalYear(id=1, year=2024)
FY2025 = FiscalYear(id=2, year=2025, is_current=True, goal_setting_open=True, summer_self_open=True,
                    winter_eval_open=True)
YEARS = [FY2024, FY2025]


def _evaluation(id_, fy_id=2, period=EvaluationPeriod.SUMMER, status=EvaluationStatus.NOT_STARTED, **kw):
    return Evaluation(id=id_, user_id=7, fiscal_year_id=fy_id, period=period, status=status, **kw)


class TestGoals:
    def test_cap(self):
        assert can_add_goal(MAX_GOALS - 1)
        assert not can_add_goal(MAX_GOALS)

    def test_normalize_strips_and_drops_blanks(self):
        assert normalize_goal_texts(["  売上 ", "", "   ", None, "顧客満足"]) == ["売上", "顧客満足"]

    def test_normalize_caps_at_five(self):
        texts = [f"goal {i}" for i in range(8)]
        assert normalize_goal_texts(texts) == texts[:MAX_GOALS]

    def test_blanks_do_not_count_against_cap(self):
        texts = ["", "a", "", "b", "c", "d", "e", "f"]
        assert normalize_goal_texts(texts) == ["a", "b", "c", "d", "e"]


class TestFiscalYears:
    def test_current(self):
        assert current_fiscal_year(YEARS) is FY2025
        assert current_fiscal_year([FY2024]) is None

    def test_find(self):
        assert find_fiscal_year(YEARS, 1) is FY2024
        assert find_fiscal_year(YEARS, 99) is None
        assert find_fiscal_year(YEARS, None) is None

    def test_windows(self):
        assert is_goal_setting_open(FY2025)
        assert not is_goal_setting_open(FY2024)
        assert not is_goal_setting_open(None)
        assert is_self_assessment_open(FY2025, EvaluationPeriod.SUMMER)
        assert not is_self_assessment_open(FY2025, EvaluationPeriod.WINTER)
        assert is_evaluation_open(FY2025, EvaluationPeriod.WINTER)
        assert not is_evaluation_open(FY2025, EvaluationPeriod.SUMMER)

    def test_summer_reviews_previous_year_goals(self):
        assert goal_year_for_assessment(YEARS, FY2025, EvaluationPeriod.SUMMER) == FY2024.id

    def test_summer_falls_back_to_selected_year(self):
        assert goal_year_for_assessment(YEARS, FY2024, EvaluationPeriod.SUMMER) == FY2024.id

    def test_winter_reviews_same_year(self):
        assert goal_year_for_assessment(YEARS, FY2025, EvaluationPeriod.WINTER) == FY2025.id

    def test_period_text(self):
        assert goal_target_period(FY2025) == "2025年4月〜2026年3月"
        assert assessment_target_period(FY2025, EvaluationPeriod.SUMMER) == "2024年10月〜2025年3月"
        assert assessment_target_period(FY2025, EvaluationPeriod.WINTER) == "2025年4月〜2025年9月"


class TestEvaluations:
    def test_find_own(self):
        summer = _evaluation(1)
        winter = _evaluation(2, period=EvaluationPeriod.WINTER)
        assert find_own_evaluation([summer, winter], 2, EvaluationPeriod.WINTER) is winter
        assert find_own_evaluation([summer, winter], 1, EvaluationPeriod.SUMMER) is None

    def test_self_assessment_editable_only_before_submission(self):
        assert can_edit_self_assessment(_evaluation(1))
        assert not can_edit_self_assessment(_evaluation(1, status=EvaluationStatus.SELF_SUBMITTED))
        assert not can_edit_self_assessment(None)

    @pytest.mark.parametrize("grade", ["SS", "A+", "D"])
    def test_require_grade_accepts(self, grade):
        assert require_grade(grade) == grade

    @pytest.mark.parametrize("grade", [None, "", "E", "a"])
    def test_require_grade_rejects(self, grade):
        with pytest.raises(ValidationError) as exc_info:
            require_grade(grade)
        assert exc_info.value.details["field"] == "grade"

    def test_missing_grade_message(self):
        with pytest.raises(ValidationError, match="評価ランクを選択してください"):
            require_grade(None)

    def test_filter(self):
        rows = [
            _evaluation(1, fy_id=1),
            _evaluation(2, fy_id=2),
            _evaluation(3, fy_id=2, period=EvaluationPeriod.WINTER),
        ]
        assert [e.id for e in filter_evaluations(rows)] == [1, 2, 3]
        assert [e.id for e in filter_evaluations(rows, fiscal_year_id=2)] == [2, 3]
        assert [e.id for e in filter_evaluations(rows, period=EvaluationPeriod.WINTER)] == [3]
        assert filter_evaluations(rows, fiscal_year_id=1, period=EvaluationPeriod.WINTER) == []

    def test_grade_distribution_counts_final_grades_best_first(self):
        rows = [
            _evaluation(1, director_grade="B"),
            _evaluation(2, director_grade="A+"),
            _evaluation(3, director_grade="B"),
            _evaluation(4, director_grade="SS"),
            _evaluation(5, manager_grade="S"),
        ]
        assert list(grade_distribution(rows).items()) == [("SS", 1), ("A+", 1), ("B", 2)]
