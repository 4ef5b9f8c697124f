"""Unit tests for iplant_wiki.errors module."""

import pytest

from src.iplant_wiki.errors import (
    WikiError,
    ClientError,
    AuthenticationError,
    ConfigError,
    RemoteCallError,
    SessionExpiredError,
    ServiceUnreachableError,
    NotFoundError,
    PageNotFoundError,
    CommentNotFoundError,
)


class TestHierarchy:
    """Test cases for the exception hierarchy."""

    @pytest.mark.parametrize("error_class", [
        ClientError, AuthenticationError, ConfigError, RemoteCallError,
        SessionExpiredError, ServiceUnreachableError, NotFoundError,
        PageNotFoundError, CommentNotFoundError,
    ])
    def test_everything_is_a_wiki_error(self, error_class):
        assert issubclass(error_class, WikiError)

    def test_authentication_error_is_client_error(self):
        assert issubclass(AuthenticationError, ClientError)

    def test_session_expired_is_remote_call_error(self):
        """A repeated session failure can be caught as RemoteCallError."""
        assert issubclass(SessionExpiredError, RemoteCallError)

    def test_not_found_is_not_remote_call_error(self):
        assert not issubclass(PageNotFoundError, RemoteCallError)


class TestAuthenticationError:
    """Test cases for AuthenticationError."""

    def test_message_format(self):
        error = AuthenticationError("de-service", "https://wiki.example.org/rpc/xmlrpc", code=0)
        assert "Login failure" in str(error)
        assert "de-service" in str(error)
        assert "code = 0" in str(error)

    def test_stores_attributes(self):
        error = AuthenticationError("de-service", "https://wiki.example.org", code=403)
        assert error.user == "de-service"
        assert error.endpoint == "https://wiki.example.org"
        assert error.code == 403

    def test_without_code(self):
        error = AuthenticationError("de-service", "https://wiki.example.org")
        assert "code" not in str(error)
        assert error.code is None


class TestConfigError:
    def test_with_field(self):
        error = ConfigError("Required field is missing or empty", config_field="user")
        assert str(error) == "Configuration error in field 'user': Required field is missing or empty"

    def test_without_field(self):
        assert str(ConfigError("bad")) == "Configuration error: bad"


class TestRemoteCallErrors:
    def test_remote_call_error_message(self):
        error = RemoteCallError("getComment(42)", "boom")
        assert str(error) == "Wiki call getComment(42) failed: boom"
        assert error.operation == "getComment(42)"

    def test_remote_call_error_without_message(self):
        assert str(RemoteCallError("logout")) == "Wiki call logout failed"

    def test_session_expired_keeps_operation(self):
        error = SessionExpiredError("getPage(DOC, Guide)")
        assert error.operation == "getPage(DOC, Guide)"
        assert "expired" in str(error)

    def test_service_unreachable(self):
        error = ServiceUnreachableError("https://wiki.example.org", operation="login")
        assert error.endpoint == "https://wiki.example.org"
        assert "not available" in str(error)


class TestNotFoundErrors:
    def test_page_not_found(self):
        error = PageNotFoundError("NoSuchPage", "DOC")
        assert str(error) == "Page 'NoSuchPage' not found in space DOC"
        assert error.title == "NoSuchPage"
        assert error.space == "DOC"

    def test_comment_not_found(self):
        error = CommentNotFoundError(42)
        assert error.comment_id == 42
        assert "42" in str(error)
