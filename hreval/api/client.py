"""
HTTP client for the evaluation backend.

Wraps aiohttp with the session's bearer token and a single refresh-and-replay
on 401. Streamlit scripts are synchronous, so `call()` drives one request on
a fresh event loop; the async `request()` is what the loop runs.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from hreval.infra.exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    SessionExpiredError,
    TokenRejectedError,
    ValidationError,
)
from hreval.infra.logging import get_logger

from .session_store import SessionStore

logger = get_logger(__name__)

LOGIN_PATH = "/auth/login"
REFRESH_PATH = "/auth/refresh"

# 401 on these means bad credentials, never an expired access token
_NO_REFRESH_PATHS = (LOGIN_PATH, REFRESH_PATH)


class ApiClient:
    """Bearer-token client with one refresh-and-replay per originating request.

    Concurrent 401s are not coalesced; each triggers its own refresh.
    """

    def __init__(self, base_url: str, store: SessionStore, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    # ---- public entry points -------------------------------------------------

    def call(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        """Synchronous request for Streamlit scripts."""
        return asyncio.run(self.request(method, path, params=params, json_body=json_body))

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            return await self._send(session, method, path, params, json_body, retried=False)

    # ---- internals -----------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.store.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _send(
        self,
        session: aiohttp.ClientSession,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]],
        json_body: Any,
        *,
        retried: bool,
    ) -> Any:
        url = self.url(path)
        try:
            async with session.request(
                method, url, params=params, json=json_body, headers=self._headers()
            ) as response:
                status = response.status
                body = _decode(await response.text())
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(f"Request failed: {e}", url=url) from e

        if status == 401 and not retried and path not in _NO_REFRESH_PATHS:
            await self._refresh(session)
            logger.info(f"Replaying {method} {path} with refreshed token")
            return await self._send(session, method, path, params, json_body, retried=True)

        if status >= 400:
            raise _error_for_status(status, path, body)
        return body

    async def _refresh(self, session: aiohttp.ClientSession) -> str:
        """Swap the refresh token for a new access token, or end the session."""
        refresh_token = self.store.refresh_token
        if not refresh_token:
            logger.warning("Access token rejected and no refresh token stored; clearing session")
            self.store.clear()
            raise SessionExpiredError("No refresh token")

        logger.info("Access token rejected, refreshing")
        try:
            async with session.post(
                self.url(REFRESH_PATH),
                json={"refreshToken": refresh_token},
                headers={"Content-Type": "application/json"},
            ) as response:
                status = response.status
                body = _decode(await response.text())
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Token refresh failed: {e}; clearing session")
            self.store.clear()
            raise SessionExpiredError(f"Refresh failed: {e}") from e

        new_token = body.get("accessToken") if isinstance(body, dict) else None
        if status >= 400 or not new_token:
            logger.warning(f"Token refresh rejected (HTTP {status}); clearing session")
            self.store.clear()
            raise SessionExpiredError(f"Refresh rejected with HTTP {status}")

        self.store.set_access_token(str(new_token))
        logger.info("Access token refreshed")
        return str(new_token)


def _decode(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _error_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        for key in ("error", "message"):
            if body.get(key):
                return str(body[key])
    if isinstance(body, str) and body:
        return body
    return default


def _error_for_status(status: int, path: str, body: Any):
    message = _error_message(body, f"HTTP {status}")
    if status == 401 and path not in _NO_REFRESH_PATHS:
        return TokenRejectedError(message, path=path)
    if status == 401:
        return AuthenticationError(message, path=path)
    if status == 403:
        return AuthorizationError(message, path=path)
    if status in (400, 422):
        return ValidationError(message, path=path, response=body)
    return APIError(message, status_code=status, path=path, response=body)
