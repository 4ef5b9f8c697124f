"""Remote service wrapper for the Confluence XML-RPC API.

This module wraps the ``confluence2`` XML-RPC namespace and translates
XML-RPC faults and transport failures into our typed exception hierarchy.
It knows nothing about sessions beyond passing the token it is given;
login and retry policy live in the client.
"""

import logging
import re
import xmlrpc.client
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from .errors import (
    AuthenticationError,
    RemoteCallError,
    SessionExpiredError,
    ServiceUnreachableError,
)
from .models import Comment, Page
from .transport import RequestsTransport

logger = logging.getLogger(__name__)

RPC_PATH = "/rpc/xmlrpc"

# Substrings Confluence puts in faultString for an invalid or timed-out token
SESSION_EXPIRED_PATTERNS = (
    'invalidsessionexception',
    'session expired',
    'user not authenticated',
)

AUTH_FAILED_PATTERNS = (
    'authenticationfailedexception',
)

# getPage reports a missing page as a RemoteException with this wording
PAGE_MISSING_PATTERNS = (
    'does not exist',
    'not allowed to view that page',
    'no page found',
)


class RemoteService:
    """Wrapper around the Confluence ``confluence2`` XML-RPC methods.

    This class provides a thin layer over ServerProxy that:
    1. Builds the endpoint URL and a requests-backed transport
    2. Translates XML-RPC faults to typed exceptions
    3. Records the current operation for diagnostics

    Example:
        >>> service = RemoteService("https://wiki.example.org")
        >>> token = service.login("user", "secret")
        >>> page = service.get_page(token, "DOC", "Guide")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        proxy: Optional[Any] = None,
    ):
        """Initialize the service wrapper.

        Args:
            base_url: Wiki base URL; the XML-RPC path is appended
            timeout: Request timeout in seconds
            proxy: Optional pre-built ServerProxy (or compatible object)
        """
        self.base_url = base_url.rstrip('/')
        self.endpoint = self.base_url + RPC_PATH
        if proxy is None:
            scheme = urlparse(self.endpoint).scheme or "https"
            proxy = xmlrpc.client.ServerProxy(
                self.endpoint,
                transport=RequestsTransport(scheme=scheme, timeout=timeout),
                allow_none=True,
            )
        self._proxy = proxy
        self._call_context: Dict[str, Any] = {}

    @property
    def call_context(self) -> Dict[str, Any]:
        """Operation name and arguments of the call in progress.

        Logged with every translated failure.
        """
        return dict(self._call_context)

    def reset_call_state(self) -> None:
        """Drop the context left behind by the previous call."""
        self._call_context = {}

    def close(self) -> None:
        if isinstance(self._proxy, xmlrpc.client.ServerProxy):
            self._proxy("close")()

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------
    def _sanitize(self, text: str) -> str:
        """Mask tokens and passwords that Confluence echoes in fault strings.

        Example:
            >>> service._sanitize("login(bob, password=hunter2) failed")
            'login(bob, password=***REDACTED***) failed'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'://([\w.-]+):([\w.-]+)@',
            r'://***:***@',
            text
        )
        sanitized = re.sub(
            r'password["\']?\s*[:=]\s*["\']?([^"\'\s&,)]+)',
            r'password=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(token)["\']?\s*[:=]\s*["\']?([^"\'\s&,)]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate a fault or transport failure into a typed exception.

        Args:
            exception: The original exception raised by the proxy
            operation: Name of the remote operation (for messages and logging)

        Returns:
            Exception: One of our typed exceptions
        """
        logger.debug(f"Failed call context: {self._call_context}")

        if isinstance(exception, ServiceUnreachableError):
            return ServiceUnreachableError(endpoint=exception.endpoint, operation=operation)

        if isinstance(exception, RemoteCallError):
            return exception

        if isinstance(exception, xmlrpc.client.Fault):
            fault_msg = str(exception.faultString).lower()

            if any(p in fault_msg for p in SESSION_EXPIRED_PATTERNS):
                logger.debug(f"Session rejected during {operation}")
                return SessionExpiredError(operation)

            safe_msg = self._sanitize(str(exception.faultString))
            logger.error(f"Remote operation failed: {operation} - {safe_msg}")
            return RemoteCallError(operation, safe_msg)

        if isinstance(exception, xmlrpc.client.ProtocolError):
            logger.error(
                f"Remote operation failed: {operation} - HTTP {exception.errcode} {exception.errmsg}"
            )
            if exception.errcode in (502, 503, 504):
                return ServiceUnreachableError(endpoint=self.endpoint, operation=operation)
            return RemoteCallError(operation, f"HTTP {exception.errcode} {exception.errmsg}")

        if isinstance(exception, OSError):
            return ServiceUnreachableError(endpoint=self.endpoint, operation=operation)

        safe_msg = self._sanitize(str(exception))
        logger.error(f"Remote operation failed: {operation} - {safe_msg}")
        return RemoteCallError(operation, safe_msg)

    def _invoke(self, operation: str, method: Callable[..., Any], *args: Any) -> Any:
        self._call_context['operation'] = operation
        try:
            return method(*args)
        except ServiceUnreachableError as e:
            raise self._translate_error(e, operation) from e
        except RemoteCallError:
            raise
        except Exception as e:
            raise self._translate_error(e, operation) from e

    # ------------------------------------------------------------------
    # confluence2 methods
    # ------------------------------------------------------------------
    def login(self, user: str, password: str) -> str:
        """Log in and return a session token.

        Raises:
            AuthenticationError: If the service rejects the credentials, the
                endpoint cannot be reached, the reply is not
                XML-RPC, or no token comes back
        """
        self._call_context = {'operation': 'login', 'user': user}
        try:
            token = self._proxy.confluence2.login(user, password)
        except xmlrpc.client.Fault as e:
            fault_msg = str(e.faultString).lower()
            if any(p in fault_msg for p in AUTH_FAILED_PATTERNS):
                logger.warning(f"Credentials for {user} rejected by {self.endpoint}")
            else:
                logger.error(f"Login failed: {self._sanitize(str(e.faultString))}")
            raise AuthenticationError(user, self.endpoint, code=e.faultCode) from e
        except ServiceUnreachableError as e:
            raise AuthenticationError(user, self.endpoint, code=type(e).__name__) from e
        except (xmlrpc.client.ProtocolError, OSError) as e:
            code = getattr(e, 'errcode', None) or type(e).__name__
            raise AuthenticationError(user, self.endpoint, code=code) from e
        except Exception as e:
            # Malformed or non-XML-RPC reply, e.g. an HTML sign-on page
            logger.error(f"Login failed: unreadable response from {self.endpoint} ({type(e).__name__})")
            raise AuthenticationError(user, self.endpoint, code=type(e).__name__) from e

        if not token:
            raise AuthenticationError(user, self.endpoint, code='empty token')
        return token

    def logout(self, token: str) -> bool:
        return bool(self._invoke('logout', self._proxy.confluence2.logout, token))

    def get_page(self, token: str, space: str, title: str) -> Optional[Page]:
        """Look a page up by space and title.

        Returns:
            The page, or None if the space has no page with that title

        Raises:
            SessionExpiredError: If the token was rejected
            RemoteCallError: For any other failure
        """
        operation = f"getPage({space}, {title})"
        self._call_context.update(operation=operation, space=space, title=title)
        try:
            struct = self._proxy.confluence2.getPage(token, space, title)
        except xmlrpc.client.Fault as e:
            fault_msg = str(e.faultString).lower()
            if (not any(p in fault_msg for p in SESSION_EXPIRED_PATTERNS)
                    and any(p in fault_msg for p in PAGE_MISSING_PATTERNS)):
                return None
            raise self._translate_error(e, operation) from e
        except ServiceUnreachableError as e:
            raise self._translate_error(e, operation) from e
        except RemoteCallError:
            raise
        except Exception as e:
            raise self._translate_error(e, operation) from e

        if not struct:
            return None
        return Page.from_struct(struct)

    def store_page(self, token: str, page: Page) -> Page:
        struct = self._invoke(
            f"storePage({page.space}, {page.title})",
            self._proxy.confluence2.storePage,
            token,
            page.to_struct(),
        )
        return Page.from_struct(struct)

    def add_comment(self, token: str, comment: Comment) -> Comment:
        struct = self._invoke(
            f"addComment({comment.page_id})",
            self._proxy.confluence2.addComment,
            token,
            comment.to_struct(),
        )
        return Comment.from_struct(struct)

    def edit_comment(self, token: str, comment: Comment) -> Comment:
        struct = self._invoke(
            f"editComment({comment.comment_id})",
            self._proxy.confluence2.editComment,
            token,
            comment.to_struct(),
        )
        return Comment.from_struct(struct or {})

    def remove_comment(self, token: str, comment_id: int) -> bool:
        return bool(self._invoke(
            f"removeComment({comment_id})",
            self._proxy.confluence2.removeComment,
            token,
            str(comment_id),
        ))

    def get_comment(self, token: str, comment_id: int) -> Optional[Comment]:
        struct = self._invoke(
            f"getComment({comment_id})",
            self._proxy.confluence2.getComment,
            token,
            str(comment_id),
        )
        if not struct:
            return None
        return Comment.from_struct(struct)
