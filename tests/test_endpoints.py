"""
Resource classes: paths, verbs and payloads sent through the client.
"""

import pytest

from hreval.api.endpoints import Backend
from hreval.domain.models import Department, FiscalYear, Position, UserForm
from hreval.infra.exceptions import ValidationError


class FakeClient:
    """Stands in for ApiClient; replies are queued per (method, path)."""

    def __init__(self, replies=None):
        self.replies = replies or {}
        self.calls = []

    def call(self, method, path, *, params=None, json_body=None):
        self.calls.append((method, path, params, json_body))
        return self.replies.get((method, path))


EVALUATION = {"id": 10, "userId": 7, "fiscalYearId": 2, "period": "WINTER", "status": "SELF_SUBMITTED"}


class TestGoalApi:
    def setup_method(self):
        self.client = FakeClient({("GET", "/goals"): [{"id": 1, "fiscalYearId": 2, "goalText": "a"}]})
        self.backend = Backend(self.client)

    def test_list_by_fiscal_year(self):
        goals = self.backend.goals.list(2)
        assert self.client.calls == [("GET", "/goals", {"fiscalYearId": 2}, None)]
        assert goals[0].goal_text == "a"

    def test_save_normalizes(self):
        self.backend.goals.save(2, [" a ", "", "b", "c", "d", "e", "f"])
        method, path, _, body = self.client.calls[0]
        assert (method, path) == ("POST", "/goals")
        assert body == {"fiscalYearId": 2, "goals": ["a", "b", "c", "d", "e"]}


class TestEvaluationApi:
    def setup_method(self):
        self.client = FakeClient({
            ("GET", "/evaluations/mine"): [EVALUATION, "garbage"],
            ("GET", "/evaluations/counts"): {"pendingEvaluations": 3},
            ("POST", "/evaluations/10/evaluate"): EVALUATION,
        })
        self.evaluations = Backend(self.client).evaluations

    def test_lists(self):
        assert [e.id for e in self.evaluations.mine()] == [10]
        assert self.evaluations.pending() == []
        self.evaluations.manager_pending()
        self.evaluations.director_pending()
        self.evaluations.finalize_pending()
        assert [c[1] for c in self.client.calls] == [
            "/evaluations/mine",
            "/evaluations/pending",
            "/evaluations/manager-pending",
            "/evaluations/director-pending",
            "/evaluations/finalize-pending",
        ]

    def test_counts(self):
        assert self.evaluations.counts().pending_evaluations == 3

    def test_actions(self):
        assert self.evaluations.evaluate(10, "A", "good").id == 10
        self.evaluations.approve(10, "S")
        self.evaluations.director_evaluate(10, "SS", "great")
        self.evaluations.reject(10, "再確認してください")
        self.evaluations.submit_self(10)
        self.evaluations.finalize(10)
        assert [(c[1], c[3]) for c in self.client.calls] == [
            ("/evaluations/10/evaluate", {"grade": "A", "comment": "good"}),
            ("/evaluations/10/approve", {"grade": "S", "comment": ""}),
            ("/evaluations/10/director-evaluate", {"grade": "SS", "comment": "great"}),
            ("/evaluations/10/reject", {"reason": "再確認してください"}),
            ("/evaluations/10/self-evaluate", None),
            ("/evaluations/10/finalize", None),
        ]
        assert all(c[0] == "POST" for c in self.client.calls)

    @pytest.mark.parametrize("grade", [None, "", "X"])
    def test_grade_checked_before_sending(self, grade):
        with pytest.raises(ValidationError):
            self.evaluations.evaluate(10, grade)
        assert self.client.calls == []


class TestNotificationApi:
    def test_mark_read_and_unread_count(self):
        client = FakeClient({("GET", "/notifications/unread-count"): 4})
        notifications = Backend(client).notifications

        notifications.mark_read(5)
        assert notifications.unread_count() == 4
        assert client.calls[0][:2] == ("PUT", "/notifications/5/read")

    def test_unread_count_tolerates_garbage(self):
        client = FakeClient({("GET", "/notifications/unread-count"): "n/a"})
        assert Backend(client).notifications.unread_count() == 0


class TestAdminApi:
    def setup_method(self):
        self.client = FakeClient({
            ("POST", "/admin/users"): {"id": 9, "name": "n", "email": "n@x"},
            ("PUT", "/admin/fiscal-years/2"): {"id": 2, "year": 2025, "goalSettingOpen": True},
            ("POST", "/admin/fiscal-years"): {"id": 3, "year": 2026},
        })
        self.admin = Backend(self.client).admin

    def test_create_user(self):
        user = self.admin.create_user(UserForm(name="n", email="n@x", password="changeme123"))
        assert user.id == 9
        assert self.client.calls[0][3]["password"] == "changeme123"

    def test_update_user_without_password(self):
        self.admin.update_user(9, UserForm(name="n", email="n@x"))
        method, path, _, body = self.client.calls[0]
        assert (method, path) == ("PUT", "/admin/users/9")
        assert "password" not in body

    def test_update_fiscal_year_sends_all_windows(self):
        fy = self.admin.update_fiscal_year(FiscalYear(id=2, year=2025, goal_setting_open=True))
        body = self.client.calls[0][3]
        assert body["goalSettingOpen"] is True
        assert body["winterEvalOpen"] is False
        assert fy.goal_setting_open

    def test_create_fiscal_year(self):
        assert self.admin.create_fiscal_year(2026).year == 2026
        assert self.client.calls[0][3] == {"year": 2026}

    def test_create_department(self):
        self.client.replies[("POST", "/admin/departments")] = {"id": 1, "name": "総務部"}
        assert self.admin.create_department("総務部").name == "総務部"


class TestAuthApi:
    def test_login(self):
        client = FakeClient({("POST", "/auth/login"): {
            "accessToken": "a", "refreshToken": "r", "user": {"id": 1, "name": "n", "email": "n@x"},
        }})
        auth = Backend(client).auth.login("n@x", "pw")
        assert (auth.access_token, auth.refresh_token, auth.user.id) == ("a", "r", 1)
        assert client.calls[0][3] == {"email": "n@x", "password": "pw"}

    def test_login_with_unparseable_body(self):
        client = FakeClient({("POST", "/auth/login"): {"accessToken": "a"}})
        with pytest.raises(ValidationError) as exc_info:
            Backend(client).auth.login("n@x", "pw")
        assert exc_info.value.details["path"] == "/auth/login"


class TestMutationResponses:
    """No-content and malformed bodies from mutating endpoints."""

    def setup_method(self):
        self.client = FakeClient()
        self.backend = Backend(self.client)

    def test_empty_bodies_give_none(self):
        admin = self.backend.admin
        form = UserForm(name="n", email="n@x")
        assert admin.create_user(form) is None
        assert admin.update_user(9, form) is None
        assert admin.create_department("総務部") is None
        assert admin.update_department(Department(id=1, name="総務部")) is None
        assert admin.create_position({"name": "課長"}) is None
        assert admin.update_position(Position(id=4, code=2, name="課長")) is None
        assert admin.create_fiscal_year(2026) is None
        assert admin.update_fiscal_year(FiscalYear(id=2, year=2025)) is None
        assert self.backend.evaluations.finalize(10) is None
        assert len(self.client.calls) == 9

    def test_text_body_gives_none(self):
        self.client.replies[("PUT", "/admin/users/9")] = "updated"
        assert self.backend.admin.update_user(9, UserForm(name="n", email="n@x")) is None

    def test_record_without_id_is_a_validation_error(self):
        self.client.replies[("PUT", "/admin/users/9")] = {"name": "n"}
        with pytest.raises(ValidationError) as exc_info:
            self.backend.admin.update_user(9, UserForm(name="n", email="n@x"))
        assert exc_info.value.details["path"] == "/admin/users/9"
        assert exc_info.value.details["response"] == {"name": "n"}

    def test_bad_field_type_is_a_validation_error(self):
        self.client.replies[("PUT", "/admin/fiscal-years/2")] = {"id": 2, "year": "next"}
        with pytest.raises(ValidationError) as exc_info:
            self.backend.admin.update_fiscal_year(FiscalYear(id=2, year=2025))
        assert exc_info.value.details["path"] == "/admin/fiscal-years/2"

    def test_unknown_status_is_tagged_with_path(self):
        self.client.replies[("POST", "/evaluations/10/finalize")] = dict(EVALUATION, status="ARCHIVED")
        with pytest.raises(ValidationError) as exc_info:
            self.backend.evaluations.finalize(10)
        assert exc_info.value.details["path"] == "/evaluations/10/finalize"

    def test_malformed_list_entry_is_a_validation_error(self):
        self.client.replies[("GET", "/admin/departments")] = [{"name": "no id"}]
        with pytest.raises(ValidationError):
            self.backend.admin.departments()
