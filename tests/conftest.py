"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - build_pdf: Builds small real PDFs in memory, one text line per page
    - fake_pages: Page-text backend answering from a lookup table
    - completion: Scripted completion backend recording every payload
    - session: ChatSession wired to the scripted backend and pypdf
    - async_client: HTTPX client for API testing against that session
"""

from collections.abc import AsyncGenerator, Callable, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from chatpdfy.api import app
from chatpdfy.chat.session import ChatSession, get_chat_session
from chatpdfy.parsing.extractor import DocumentExtractor
from chatpdfy.parsing.pdf_parser import PypdfBackend
from tests.helpers import FakePageBackend, ScriptedCompletion, make_pdf


@pytest.fixture
def build_pdf() -> Callable[[Sequence[str]], bytes]:
    """Return the in-memory PDF builder."""
    return make_pdf


@pytest.fixture
def fake_pages() -> FakePageBackend:
    """Return an empty fake page backend; tests register documents on it."""
    return FakePageBackend({})


@pytest.fixture
def completion() -> ScriptedCompletion:
    """Return a scripted completion backend with no queued replies."""
    return ScriptedCompletion()


@pytest.fixture
def session(completion: ScriptedCompletion) -> ChatSession:
    """Return a chat session using pypdf and the scripted backend."""
    return ChatSession(completion, DocumentExtractor(PypdfBackend()))


@pytest.fixture
async def async_client(session: ChatSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient whose requests use the test session.
    """
    app.dependency_overrides[get_chat_session] = lambda: session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_chat_session, None)
