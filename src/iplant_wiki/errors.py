"""Typed exception hierarchy for iPlant wiki client errors.

This module defines all custom exceptions raised by the wiki client.
All exceptions inherit from WikiError so callers can catch everything the
client raises in one place, and each carries the context (user, endpoint,
operation, page title) needed for debugging.
"""

from typing import Optional


class WikiError(Exception):
    """Base exception for all iplant-wiki errors."""
    pass


class ClientError(WikiError):
    """Base exception for failures on the client side (login, configuration)."""
    pass


class AuthenticationError(ClientError):
    """Raised when logging into the wiki fails.

    Covers bad credentials, an unreachable service during login and any
    other non-success login result. ``code`` is the failure code reported
    by the service (XML-RPC fault code) or the name of the transport error.
    """

    def __init__(self, user: str, endpoint: str, code: Optional[object] = None):
        message = f"Login failure for user {user} at {endpoint}"
        if code is not None:
            message += f" (code = {code})"
        super().__init__(message)
        self.user = user
        self.endpoint = endpoint
        self.code = code


class ConfigError(ClientError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field


class RemoteCallError(WikiError):
    """Raised when a remote call fails for a reason other than an expired session."""

    def __init__(self, operation: str, message: Optional[str] = None):
        if message:
            full_message = f"Wiki call {operation} failed: {message}"
        else:
            full_message = f"Wiki call {operation} failed"
        super().__init__(full_message)
        self.operation = operation


class SessionExpiredError(RemoteCallError):
    """Raised when the service rejects the session token as invalid or expired.

    The client catches this once per call, logs in again and retries.
    A second occurrence propagates like any other RemoteCallError.
    """

    def __init__(self, operation: str):
        super().__init__(operation, "session is invalid or has expired")


class ServiceUnreachableError(RemoteCallError):
    """Raised when the wiki endpoint cannot be reached or times out."""

    def __init__(self, endpoint: str, operation: str = "request"):
        super().__init__(operation, f"service is not available at {endpoint}")
        self.endpoint = endpoint


class NotFoundError(WikiError):
    """Base exception for lookups that returned nothing."""
    pass


class PageNotFoundError(NotFoundError):
    """Raised when a page does not exist in the given space."""

    def __init__(self, title: str, space: str):
        super().__init__(f"Page '{title}' not found in space {space}")
        self.title = title
        self.space = space


class CommentNotFoundError(NotFoundError):
    """Raised when the service returns no comment for an identifier."""

    def __init__(self, comment_id: int):
        super().__init__(f"Comment {comment_id} not found")
        self.comment_id = comment_id
