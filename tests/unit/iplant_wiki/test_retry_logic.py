"""Unit tests for iplant_wiki.retry_logic module."""

import pytest
from unittest.mock import MagicMock

from src.iplant_wiki.errors import RemoteCallError, SessionExpiredError
from src.iplant_wiki.retry_logic import retry_on_session_expiry


class TestRetryOnSessionExpiry:
    """Test cases for retry_on_session_expiry function."""

    def test_success_on_first_attempt(self):
        """The result is returned without logging in again."""
        func = MagicMock(return_value="success")
        relogin = MagicMock()

        assert retry_on_session_expiry(func, relogin) == "success"
        func.assert_called_once_with()
        relogin.assert_not_called()

    def test_relogin_and_retry_once(self):
        """An expired session triggers one relogin and one retry."""
        func = MagicMock(side_effect=[SessionExpiredError("getComment(1)"), "success"])
        relogin = MagicMock()

        assert retry_on_session_expiry(func, relogin) == "success"
        assert func.call_count == 2
        relogin.assert_called_once_with()

    def test_second_expiry_propagates(self):
        """A second session failure surfaces instead of looping."""
        second = SessionExpiredError("getComment(1)")
        func = MagicMock(side_effect=[SessionExpiredError("getComment(1)"), second, "never"])
        relogin = MagicMock()

        with pytest.raises(SessionExpiredError) as exc_info:
            retry_on_session_expiry(func, relogin)

        assert exc_info.value is second
        assert func.call_count == 2
        assert relogin.call_count == 1

    def test_other_errors_fail_fast(self):
        """Non-session errors propagate without a relogin."""
        error = RemoteCallError("getComment(1)", "boom")
        func = MagicMock(side_effect=error)
        relogin = MagicMock()

        with pytest.raises(RemoteCallError) as exc_info:
            retry_on_session_expiry(func, relogin)

        assert exc_info.value is error
        relogin.assert_not_called()

    def test_relogin_failure_propagates(self):
        """If logging in again fails, that error reaches the caller."""
        func = MagicMock(side_effect=SessionExpiredError("getComment(1)"))
        relogin = MagicMock(side_effect=RuntimeError("login down"))

        with pytest.raises(RuntimeError):
            retry_on_session_expiry(func, relogin)

        func.assert_called_once_with()
