"""Test helper modules for wiki client testing.

- fake_wiki_service: in-memory replacement for RemoteService
"""

from .fake_wiki_service import FakeWikiService

__all__ = [
    'FakeWikiService',
]
