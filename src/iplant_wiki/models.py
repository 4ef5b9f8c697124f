"""Page and comment data models.

Confluence's XML-RPC API exchanges pages and comments as structs (dicts)
whose numeric identifiers are encoded as strings. These dataclasses hold the
same data with Python types and convert to and from the wire structs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _to_id(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


@dataclass
class Page:
    """A wiki page as returned by ``confluence2.getPage``.

    Attributes:
        page_id: Numeric content identifier (None before the page is stored)
        space: Space key the page lives in
        title: Page title, unique within the space
        content: Page body in storage format
        parent_id: Content identifier of the parent page, if any
        version: Current version number
        url: Public URL reported by the server
    """
    page_id: Optional[int]
    space: str
    title: str
    content: str = ""
    parent_id: Optional[int] = None
    version: int = 0
    url: Optional[str] = None

    @classmethod
    def from_struct(cls, struct: Dict[str, Any]) -> "Page":
        return cls(
            page_id=_to_id(struct.get('id')),
            space=struct.get('space', ''),
            title=struct.get('title', ''),
            content=struct.get('content', '') or '',
            parent_id=_to_id(struct.get('parentId')),
            version=int(struct.get('version') or 0),
            url=struct.get('url'),
        )

    def to_struct(self) -> Dict[str, Any]:
        """Build the struct for ``confluence2.storePage``.

        Only fields that are set are sent; a struct without an id makes the
        server create a new page.
        """
        struct: Dict[str, Any] = {
            'space': self.space,
            'title': self.title,
            'content': self.content,
        }
        if self.page_id is not None:
            struct['id'] = str(self.page_id)
            struct['version'] = str(self.version)
        if self.parent_id is not None:
            struct['parentId'] = str(self.parent_id)
        return struct


@dataclass
class Comment:
    """A comment attached to a wiki page.

    Used both as the request payload for add/edit and as the result the
    server sends back.

    Attributes:
        comment_id: Server-assigned identifier (None for a new comment)
        page_id: Identifier of the page the comment belongs to
        content: Comment text
        url: Comment URL; edits carry the service address here
        title: Comment title assigned by the server
        creator: User name of the author
    """
    comment_id: Optional[int] = None
    page_id: Optional[int] = None
    content: str = ""
    url: Optional[str] = None
    title: Optional[str] = None
    creator: Optional[str] = None

    @classmethod
    def from_struct(cls, struct: Dict[str, Any]) -> "Comment":
        return cls(
            comment_id=_to_id(struct.get('id')),
            page_id=_to_id(struct.get('pageId')),
            content=struct.get('content', '') or '',
            url=struct.get('url'),
            title=struct.get('title'),
            creator=struct.get('creator'),
        )

    def to_struct(self) -> Dict[str, Any]:
        struct: Dict[str, Any] = {'content': self.content}
        if self.comment_id is not None:
            struct['id'] = str(self.comment_id)
        if self.page_id is not None:
            struct['pageId'] = str(self.page_id)
        if self.url is not None:
            struct['url'] = self.url
        return struct
