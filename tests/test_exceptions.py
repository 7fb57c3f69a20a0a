"""
Exception tree, the error decorator and user-facing messages.
"""

import logging

import pytest

from hreval.infra.exceptions import (
    DEFAULT_USER_MESSAGE,
    APIError,
    AuthenticationError,
    ErrorHandler,
    HREvalException,
    NetworkError,
    SessionExpiredError,
    TokenRejectedError,
    ValidationError,
    handle_errors,
)


class TestExceptions:
    def test_codes(self):
        assert AuthenticationError().error_code == "AUTHENTICATION_ERROR"
        assert SessionExpiredError().error_code == "SESSION_EXPIRED"
        assert NetworkError("down", url="http://x").details["url"] == "http://x"

    def test_rejected_token_code(self):
        e = TokenRejectedError(path="/goals")
        assert isinstance(e, AuthenticationError)
        assert e.error_code == "TOKEN_REJECTED"
        assert e.details == {"path": "/goals"}

    def test_to_dict(self):
        e = APIError("boom", status_code=502, path="/goals")
        assert e.to_dict() == {
            "error_code": "API_ERROR",
            "message": "boom",
            "details": {"status_code": 502, "path": "/goals", "response": None},
        }
        assert e.status_code == 502


class TestHandleErrors:
    def setup_method(self):
        self.logger = logging.getLogger("test.handle_errors")

    def test_business_errors_pass_through(self):
        @handle_errors(self.logger)
        def fail():
            raise ValidationError("bad", field="grade")

        with pytest.raises(ValidationError):
            fail()

    def test_other_errors_are_wrapped(self):
        @handle_errors(self.logger)
        def fail():
            raise RuntimeError("kaboom")

        with pytest.raises(APIError) as exc_info:
            fail()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_return_value(self):
        @handle_errors(self.logger)
        def ok():
            return 42

        assert ok() == 42


class TestErrorHandler:
    def test_known_codes_have_messages(self):
        assert ErrorHandler.user_message(AuthenticationError()) == "メールアドレスまたはパスワードが正しくありません"
        assert ErrorHandler.user_message(NetworkError("x")) == "サーバーに接続できませんでした"

    def test_rejected_token_message_differs_from_login_failure(self):
        message = ErrorHandler.user_message(TokenRejectedError(), "送信に失敗しました。")
        assert message == "認証に失敗しました。再度ログインしてください"
        assert message != ErrorHandler.user_message(AuthenticationError())

    def test_fallback(self):
        assert ErrorHandler.user_message(APIError("x"), "確定に失敗しました。") == "確定に失敗しました。"
        assert ErrorHandler.user_message(RuntimeError("x")) == DEFAULT_USER_MESSAGE

    def test_handle_and_log(self, caplog):
        handler = ErrorHandler(logging.getLogger("test.error_handler"))
        with caplog.at_level(logging.ERROR, logger="test.error_handler"):
            handler.handle_and_log(HREvalException("oops", "X_ERROR"), {"screen": "goals"})
        assert "[X_ERROR] oops" in caplog.text
        assert "goals" in caplog.text
