"""Root pytest configuration and shared fixtures."""

import logging

import pytest

from src.iplant_wiki.config import WikiProperties
from tests.helpers import FakeWikiService

# urllib3 logs every retry at WARNING; keep test output focused on our loggers
logging.getLogger("urllib3").setLevel(logging.ERROR)


@pytest.fixture
def wiki_properties():
    """Settings matching the documented DOC space example."""
    return WikiProperties(
        base_url="https://wiki.example.org",
        user="de-service",
        password="secret",
        space_name="DOC",
        parent_page="List of Applications",
        space_url="https://wiki.example.org/docs/",
        timeout=5.0,
    )


@pytest.fixture
def fake_service():
    """Fake service with the parent page already present."""
    service = FakeWikiService()
    service.add_page("DOC", "List of Applications")
    return service
