"""Screen-level wrappers around backend calls.

Loads degrade to an empty default; mutations show one flat message. An
expired session always ends on the login page.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TypeVar

import streamlit as st

from hreval.infra.exceptions import (
    ErrorHandler,
    HREvalException,
    SessionExpiredError,
    ValidationError,
    handle_errors,
)
from hreval.infra.logging import get_logger

from .guard import redirect_to_login
from .state import set_flash

T = TypeVar("T")

logger = get_logger(__name__)
_errors = ErrorHandler(logger)


def _call(fn: Callable[[], T]) -> T:
    # anything outside the HREvalException tree arrives as APIError
    return handle_errors(logger)(fn)()


def load(fn: Callable[[], T], default: T, *, context: Optional[Dict[str, Any]] = None) -> T:
    """Fetch for rendering; failures are logged and yield `default`."""
    try:
        return _call(fn)
    except SessionExpiredError:
        redirect_to_login()
    except HREvalException as e:
        _errors.handle_and_log(e, context)
    return default


def failure_message(error: HREvalException, failure: str) -> str:
    # locally raised validation carries its own inline text
    if isinstance(error, ValidationError) and not error.details.get("path"):
        return error.message
    return ErrorHandler.user_message(error, failure)


def run_action(
    fn: Callable[[], Any],
    *,
    success: str,
    failure: str,
    context: Optional[Dict[str, Any]] = None,
) -> bool:
    """Issue one mutating call; queue `success` as flash or show the failure."""
    try:
        _call(fn)
    except SessionExpiredError:
        redirect_to_login()
        return False
    except HREvalException as e:
        _errors.handle_and_log(e, context)
        st.error(failure_message(e, failure))
        return False
    set_flash(success)
    return True
