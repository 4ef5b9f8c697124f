"""Session-aware client for the iPlant wiki.

IPlantWikiClient adds the operations the Discovery Environment needs on top
of the Confluence XML-RPC service: creating application pages under a
configured parent page and managing page comments. Every remote call runs
through _call_service, which logs in lazily and logs in again once if the
server reports that the session token has expired.
"""

import logging
import threading
from typing import Callable, Optional, TypeVar

from .config import WikiProperties
from .errors import (
    ClientError,
    CommentNotFoundError,
    PageNotFoundError,
    RemoteCallError,
)
from .models import Comment, Page
from .retry_logic import retry_on_session_expiry
from .service import RemoteService

logger = logging.getLogger(__name__)

T = TypeVar('T')


class IPlantWikiClient:
    """Wiki client that owns a session token and re-authenticates on demand.

    The session token is shared state; a re-entrant lock serialises each
    authenticate-then-call sequence, so one instance can be used from
    several threads.

    Example:
        >>> props = PropertiesLoader.from_env()
        >>> with IPlantWikiClient(props) as wiki:
        ...     url = wiki.create_page("Muscle", "<p>Multiple alignment tool</p>")
        ...     comment = wiki.add_comment(props.space_name, "Muscle", "Works well")
    """

    def __init__(
        self,
        properties: WikiProperties,
        auth_token: Optional[str] = None,
        service: Optional[RemoteService] = None,
    ):
        """Initialize the client.

        Args:
            properties: Connection and placement settings
            auth_token: Token of an already active session, or None to log
                in on first use
            service: Remote service to use; built from properties if omitted
        """
        self._properties = properties
        self._token: Optional[str] = auth_token or None
        self._service = service or RemoteService(
            properties.base_url, timeout=properties.timeout
        )
        self._lock = threading.RLock()

    def __enter__(self) -> "IPlantWikiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def properties(self) -> WikiProperties:
        return self._properties

    # ------------------------------------------------------------------
    # Session handling
    # ------------------------------------------------------------------
    def _login(self) -> None:
        """Log into the wiki and replace the session token.

        Raises:
            AuthenticationError: If the login does not succeed
        """
        props = self._properties
        logger.info(f"Logging into {self._service.endpoint} as {props.user}")
        with self._lock:
            self._token = None
            self._token = self._service.login(props.user, props.password)

    def _call_service(self, call: Callable[[str], T]) -> T:
        """Call the wiki service and handle authentication.

        Logs in first if no token is held, otherwise clears the per-call
        state of the service. If the call is rejected because the session
        expired, logs in once more and repeats the call once.

        Args:
            call: Callable taking the session token and performing the call

        Returns:
            Whatever call returns
        """
        with self._lock:
            if self._token is None:
                self._login()
            else:
                self._service.reset_call_state()

            return retry_on_session_expiry(lambda: call(self._token), self._login)

    def get_token(self) -> Optional[str]:
        """Return the session token, logging in first if there is none.

        A failed login is logged and reported as None instead of raising,
        since callers use the token in non-critical contexts.
        """
        with self._lock:
            if self._token is None:
                try:
                    self._login()
                except ClientError:
                    logger.error("Cannot login", exc_info=True)
                    return None
            return self._token

    def logout(self) -> None:
        """End the current session, if any. The token is dropped even if logout fails."""
        with self._lock:
            if self._token is None:
                return
            try:
                self._service.logout(self._token)
            except RemoteCallError as e:
                logger.warning(f"Logout failed: {e}")
            finally:
                self._token = None

    def close(self) -> None:
        self.logout()
        self._service.close()

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    def create_page(self, title: str, content: str = "") -> str:
        """Create a page as a child of the configured parent page.

        Nothing is created if the space already has a page with this title;
        the existing page is not updated either.

        Args:
            title: The page title
            content: The page content in storage format

        Returns:
            The public URL of the page (space URL prefix + title)

        Raises:
            ValueError: If title is empty
            PageNotFoundError: If the configured parent page does not exist
            RemoteCallError: If the service call fails
            AuthenticationError: If logging in fails
        """
        if not title or not title.strip():
            raise ValueError("title cannot be empty")

        space = self._properties.space_name
        parent = self._properties.parent_page

        def _create(token: str) -> Optional[Page]:
            if self._service.get_page(token, space, title) is not None:
                logger.info(f"Page '{title}' already exists in {space}, leaving it unchanged")
                return None

            parent_page = self._service.get_page(token, space, parent)
            if parent_page is None:
                raise PageNotFoundError(parent, space)

            page = Page(
                page_id=None,
                space=space,
                title=title,
                content=content or "",
                parent_id=parent_page.page_id,
            )
            stored = self._service.store_page(token, page)
            logger.info(f"Created page '{title}' ({stored.page_id}) under '{parent}'")
            return stored

        self._call_service(_create)

        return self._properties.space_url + title

    def get_page(self, title: str, space: str) -> Optional[Page]:
        """Return the page with this title in space, or None if there is none."""
        return self._call_service(lambda token: self._service.get_page(token, space, title))

    def get_content_id(self, title: str, space: str) -> int:
        """Resolve a page's numeric content identifier.

        Raises:
            PageNotFoundError: If the space has no page with this title
        """
        page = self.get_page(title, space)
        if page is None or page.page_id is None:
            raise PageNotFoundError(title, space)
        return page.page_id

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def add_comment(self, space: str, page_title: str, text: str) -> Comment:
        """Add a comment to an existing page.

        Args:
            space: The space the page lives in
            page_title: The title of the page to comment on
            text: The comment text

        Returns:
            The comment as stored by the server, including its new ID

        Raises:
            PageNotFoundError: If the page does not exist
        """
        page_id = self.get_content_id(page_title, space)
        comment = Comment(page_id=page_id, content=text)

        created = self._call_service(lambda token: self._service.add_comment(token, comment))
        logger.debug(f"Added comment {created.comment_id} to '{page_title}'")
        return created

    def edit_comment(self, comment_id: int, new_text: str) -> None:
        """Replace the text of an existing comment.

        The comment is not looked up first; an unknown ID surfaces as a
        RemoteCallError from the service.
        """
        comment = Comment(
            comment_id=comment_id,
            url=self._properties.base_url,
            content=new_text,
        )
        self._call_service(lambda token: self._service.edit_comment(token, comment))

    def remove_comment(self, comment_id: int) -> None:
        """Remove a comment."""
        self._call_service(lambda token: self._service.remove_comment(token, comment_id))

    def get_comment(self, comment_id: int) -> str:
        """Retrieve a comment's text.

        Raises:
            CommentNotFoundError: If the service returns no comment
        """
        comment = self._call_service(lambda token: self._service.get_comment(token, comment_id))
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment.content


SessionAwareWikiClient = IPlantWikiClient
