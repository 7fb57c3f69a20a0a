from __future__ import annotations

import json
import re
import secrets
from pathlib import Path
from typing import Any, Dict, Optional

from hreval.domain.models import AuthResponse, UserInfo
from hreval.infra.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY)

_BROWSER_ID_RE = re.compile(r"[0-9a-f]{32}")


def new_browser_id() -> str:
    return secrets.token_hex(16)


def is_valid_browser_id(value: Optional[str]) -> bool:
    return isinstance(value, str) and _BROWSER_ID_RE.fullmatch(value) is not None


class SessionStore:
    """Persistent session record: access token, refresh token, user profile.

    Backed by a small JSON file holding exactly the three keys above, one
    file per browser (see `for_browser`). The profile is kept serialized (as
    the backend sent it) and parsed on restore. Only login, logout and token
    refresh write to it.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def for_browser(cls, directory: Path, browser_id: str) -> "SessionStore":
        """Store of one browser; the id names the file, so it must be a generated one."""
        if not is_valid_browser_id(browser_id):
            raise ValueError(f"Invalid browser id: {browser_id!r}")
        return cls(Path(directory) / f"{browser_id}.json")

    # ---- raw storage -------------------------------------------------------

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Session file unreadable, ignoring: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: data[k] for k in SESSION_KEYS if k in data}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {k: data[k] for k in SESSION_KEYS if data.get(k) is not None}
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        if key not in SESSION_KEYS:
            raise KeyError(key)
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            data.pop(key)
            self._write(data)

    # ---- session operations ------------------------------------------------

    @property
    def access_token(self) -> Optional[str]:
        return self.get_item(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.get_item(REFRESH_TOKEN_KEY)

    def restore(self) -> Optional[UserInfo]:
        """Profile saved by the last login, if a session is still stored.

        A profile without an access token restores nothing; a profile that
        no longer parses wipes the whole record.
        """
        data = self._read()
        stored = data.get(USER_KEY)
        token = data.get(ACCESS_TOKEN_KEY)
        if not stored or not token:
            return None
        try:
            raw = json.loads(stored) if isinstance(stored, str) else stored
            return UserInfo.from_dict(raw)
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Stored profile is corrupt, clearing session: {e}")
            self.clear()
            return None

    def save_login(self, auth: AuthResponse) -> None:
        self._write({
            ACCESS_TOKEN_KEY: auth.access_token,
            REFRESH_TOKEN_KEY: auth.refresh_token,
            USER_KEY: json.dumps(auth.user.to_dict(), ensure_ascii=False),
        })

    def set_access_token(self, token: str) -> None:
        self.set_item(ACCESS_TOKEN_KEY, token)

    def clear(self) -> None:
        """Remove every stored key."""
        if self.path.exists():
            self.path.unlink()
