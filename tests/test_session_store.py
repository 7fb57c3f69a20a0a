"""
SessionStore: the three persisted keys and restoration at startup.
"""

import json

import pytest

from hreval.api.session_store import SESSION_KEYS, SessionStore, is_valid_browser_id, new_browser_id
from hreval.domain.models import AuthResponse

from conftest import make_user


class TestRawKeys:
    def test_empty_store(self, store):
        assert store.get_item("accessToken") is None
        assert store.restore() is None

    def test_set_and_remove(self, store):
        store.set_item("accessToken", "abc")
        assert store.access_token == "abc"

        store.remove_item("accessToken")
        assert store.access_token is None

    def test_unknown_key_rejected(self, store):
        with pytest.raises(KeyError):
            store.set_item("theme", "dark")

    def test_file_holds_only_session_keys(self, signed_in_store):
        data = json.loads(signed_in_store.path.read_text(encoding="utf-8"))
        assert set(data) == set(SESSION_KEYS)
        # profile is stored serialized
        assert isinstance(data["user"], str)
        assert json.loads(data["user"])["email"] == "yamada@example.com"

    def test_unreadable_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        assert SessionStore(path).get_item("accessToken") is None


class TestRestore:
    def test_restores_profile_after_login(self, signed_in_store):
        user = signed_in_store.restore()
        assert user == make_user()

    def test_survives_new_store_instance(self, signed_in_store):
        """Same file, new process: the session is still there."""
        assert SessionStore(signed_in_store.path).restore() == make_user()

    def test_profile_without_token_restores_nothing(self, store):
        store.set_item("user", json.dumps(make_user().to_dict()))
        assert store.restore() is None

    def test_corrupt_profile_clears_everything(self, store):
        store.set_item("accessToken", "abc")
        store.set_item("refreshToken", "r")
        store.set_item("user", "{broken")

        assert store.restore() is None
        assert store.access_token is None
        assert store.refresh_token is None
        assert not store.path.exists()

    def test_set_access_token_keeps_other_keys(self, signed_in_store):
        signed_in_store.set_access_token("new-token")
        assert signed_in_store.access_token == "new-token"
        assert signed_in_store.refresh_token == "refresh-1"
        assert signed_in_store.restore() == make_user()

    def test_clear(self, signed_in_store):
        signed_in_store.clear()
        for key in SESSION_KEYS:
            assert signed_in_store.get_item(key) is None
        # clearing twice is harmless
        signed_in_store.clear()


class TestPerBrowser:
    """Each browser id gets its own session file in the shared directory."""

    def setup_method(self):
        self.first = new_browser_id()
        self.second = new_browser_id()

    def test_login_is_not_shared_between_browsers(self, tmp_path):
        a = SessionStore.for_browser(tmp_path, self.first)
        b = SessionStore.for_browser(tmp_path, self.second)

        a.save_login(AuthResponse(access_token="token-a", refresh_token="refresh-a", user=make_user()))

        assert a.restore() == make_user()
        assert b.restore() is None
        assert b.access_token is None
        assert a.path != b.path
        assert a.path.parent == tmp_path

    def test_same_browser_restores_after_restart(self, tmp_path):
        SessionStore.for_browser(tmp_path, self.first).save_login(
            AuthResponse(access_token="token-a", refresh_token="refresh-a", user=make_user())
        )

        assert SessionStore.for_browser(tmp_path, self.first).restore() == make_user()

    def test_logout_leaves_other_browser_signed_in(self, tmp_path):
        a = SessionStore.for_browser(tmp_path, self.first)
        b = SessionStore.for_browser(tmp_path, self.second)
        a.save_login(AuthResponse(access_token="token-a", refresh_token="refresh-a", user=make_user()))
        b.save_login(AuthResponse(access_token="token-b", refresh_token="refresh-b", user=make_user(id=8)))

        a.clear()

        assert a.restore() is None
        assert b.restore().id == 8
        assert b.access_token == "token-b"

    def test_ids_are_fresh_and_well_formed(self):
        assert self.first != self.second
        assert is_valid_browser_id(self.first)

    @pytest.mark.parametrize("bad", ["", "../session", "A" * 32, "0" * 31, "0" * 32 + "\n", None])
    def test_rejects_foreign_ids(self, tmp_path, bad):
        assert not is_valid_browser_id(bad)
        with pytest.raises(ValueError):
            SessionStore.for_browser(tmp_path, bad)
