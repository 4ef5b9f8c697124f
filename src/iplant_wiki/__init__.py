"""Session-aware client library for the iPlant Confluence wiki.

This package wraps the Confluence XML-RPC API with the page and comment
operations used by the Discovery Environment, handling login and session
expiry transparently.
"""

from .client import IPlantWikiClient, SessionAwareWikiClient
from .config import PropertiesLoader, WikiProperties
from .errors import (
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
from .models import Comment, Page

__all__ = [
    "IPlantWikiClient",
    "SessionAwareWikiClient",
    "PropertiesLoader",
    "WikiProperties",
    "Comment",
    "Page",
    "WikiError",
    "ClientError",
    "AuthenticationError",
    "ConfigError",
    "RemoteCallError",
    "SessionExpiredError",
    "ServiceUnreachableError",
    "NotFoundError",
    "PageNotFoundError",
    "CommentNotFoundError",
]
