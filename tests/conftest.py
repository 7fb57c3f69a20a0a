import sys
from pathlib import Path

import pytest

# project root on sys.path so `hreval` imports without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from hreval.api.session_store import SessionStore  # noqa: E402
from hreval.domain.models import AuthResponse, UserInfo  # noqa: E402


def make_user(**overrides) -> UserInfo:
    data = {
        "id": 7,
        "name": "山田 太郎",
        "email": "yamada@example.com",
        "positionName": "主任",
        "departmentName": "営業部",
        "canEvaluate": False,
        "canViewAll": False,
        "canFinalApprove": False,
    }
    data.update(overrides)
    return UserInfo.from_dict(data)


@pytest.fixture
def store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def signed_in_store(store) -> SessionStore:
    store.save_login(AuthResponse(access_token="old-token", refresh_token="refresh-1", user=make_user()))
    return store
