"""Retry logic for calls rejected because of an expired session.

Confluence invalidates XML-RPC session tokens after a period of inactivity.
A call that fails with SessionExpiredError is retried exactly once after
logging in again; every other failure, and a second session failure,
propagates to the caller.
"""

import logging
from typing import Callable, TypeVar

from .errors import SessionExpiredError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def retry_on_session_expiry(func: Callable[[], T], relogin: Callable[[], object]) -> T:
    """Run func, re-authenticating and retrying once if the session expired.

    Args:
        func: Zero-argument callable performing the remote call
        relogin: Callable that obtains a fresh session token

    Returns:
        The return value of func

    Raises:
        SessionExpiredError: If the retried call is rejected again
        Other exceptions: Passed through immediately without retry,
            including failures raised by relogin

    Example:
        >>> retry_on_session_expiry(lambda: service.get_comment(session.token, 42),
        ...                         session.login)
    """
    try:
        return func()
    except SessionExpiredError as e:
        logger.info(f"Session expired during {e.operation}, logging in again")

    relogin()
    return func()
