"""
Screen helpers that do not need a running Streamlit session.
"""

from hreval.domain.models import DashboardCounts, Evaluation, EvaluationPeriod, EvaluationStatus, FiscalYear
from hreval.web.pages_impl.dashboard import dashboard_cards
from hreval.web.pages_impl.evaluator import closed_window_notice
from hreval.web.pages_impl.notifications import format_notified_at
from hreval.web.pages_impl.results import RESULT_COLUMNS, results_frame

from conftest import make_user


def _card_paths(user, counts=DashboardCounts()):
    return [c.path for c in dashboard_cards(user, counts)]


class TestDashboardCards:
    def test_plain_employee(self):
        assert _card_paths(make_user()) == ["/goals", "/self-evaluation", "/my-evaluations", "/notifications"]

    def test_evaluator_badge(self):
        cards = dashboard_cards(make_user(canEvaluate=True), DashboardCounts(pending_evaluations=2))
        evaluator = next(c for c in cards if c.path == "/evaluator")
        assert evaluator.badge == 2

    def test_manager_gets_review_not_director_cards(self):
        paths = _card_paths(make_user(canEvaluate=True, canViewAll=True))
        assert "/manager/review" in paths
        assert "/results" in paths
        assert "/director/evaluate" not in paths

    def test_director_replaces_manager_review(self):
        paths = _card_paths(make_user(canEvaluate=True, canViewAll=True, canFinalApprove=True))
        assert "/manager/review" not in paths
        for path in ("/director/evaluate", "/director/finalize", "/admin/users", "/admin/settings"):
            assert path in paths


class TestResultsFrame:
    def test_rows(self):
        rows = [
            Evaluation(id=1, user_id=1, fiscal_year_id=2, fiscal_year=2025, period=EvaluationPeriod.SUMMER,
                       status=EvaluationStatus.FINALIZED, user_name="山田", evaluator_grade="A",
                       manager_grade="A", director_grade="S"),
            Evaluation(id=2, user_id=2, fiscal_year_id=2, period=EvaluationPeriod.WINTER,
                       status=EvaluationStatus.SELF_SUBMITTED),
        ]
        frame = results_frame(rows)

        assert list(frame.columns) == RESULT_COLUMNS
        assert frame.iloc[0]["最終"] == "S"
        assert frame.iloc[0]["期間"] == "2025年度 夏評価"
        assert frame.iloc[1]["氏名"] == "-"
        assert frame.iloc[1]["ステータス"] == "自己評価提出済"

    def test_empty(self):
        frame = results_frame([])
        assert frame.empty
        assert list(frame.columns) == RESULT_COLUMNS


class TestNotifiedAt:
    def test_iso(self):
        assert format_notified_at("2025-04-03T09:05:00") == "4/3 9:05"

    def test_passthrough(self):
        assert format_notified_at("yesterday") == "yesterday"
        assert format_notified_at("") == ""


class TestEvaluationWindowNotice:
    def setup_method(self):
        self.years = [FiscalYear(id=2, year=2025, winter_eval_open=True)]

    def _evaluation(self, period, fiscal_year_id=2):
        return Evaluation(id=1, user_id=1, fiscal_year_id=fiscal_year_id, period=period,
                          status=EvaluationStatus.SELF_SUBMITTED)

    def test_open_window(self):
        assert closed_window_notice(self.years, self._evaluation(EvaluationPeriod.WINTER)) is None

    def test_closed_window(self):
        notice = closed_window_notice(self.years, self._evaluation(EvaluationPeriod.SUMMER))
        assert notice == "現在、2025年度 夏評価の評価入力受付期間外です。"

    def test_unknown_year_shows_nothing(self):
        assert closed_window_notice(self.years, self._evaluation(EvaluationPeriod.SUMMER, 99)) is None
        assert closed_window_notice([], self._evaluation(EvaluationPeriod.SUMMER)) is None
