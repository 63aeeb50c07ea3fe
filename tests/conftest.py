"""
Shared fixtures for the ArticleLens test suite.

Provides an HTML page with known word counts, a recording presenter and a
scriptable generation provider so orchestrator tests never touch the network.
"""

# Standard library imports
import logging

# Third-party imports
import pytest
import structlog

# Local imports
from articlelens.context import DocumentContextExecutor, StaticDocumentSource
from articlelens.llm import ModelClient
from articlelens.orchestrator import QueryOrchestrator
from articlelens.storage import MemoryCredentialStore
from tests.helpers import FakeProvider, RecordingPresenter, make_words

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# HTML Fixtures
# ============================================================================


@pytest.fixture
def article_page() -> str:
    """A 300-word article next to a 20-word sidebar and some page chrome."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>  Field Notes:
            A Long Article </title>
        <style>body {{ font-family: serif; }}</style>
    </head>
    <body>
        <header><a href="/">Home</a> <a href="/about">About</a></header>
        <nav><ul><li>Section one</li><li>Section two</li></ul></nav>
        <article>
            <h1>{make_words(5, "title")}</h1>
            <p>{make_words(150, "alpha")}</p>
            <p>{make_words(145, "beta")}</p>
        </article>
        <aside class="sidebar">{make_words(20, "side")}</aside>
        <footer>Copyright footer text</footer>
        <script>var tracking = "should never be read";</script>
    </body>
    </html>
    """


# ============================================================================
# Orchestrator Fixtures
# ============================================================================


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def document_source(article_page) -> StaticDocumentSource:
    return StaticDocumentSource({"tab-1": article_page})


@pytest.fixture
def credential_store() -> MemoryCredentialStore:
    return MemoryCredentialStore("test-api-key")


@pytest.fixture
def orchestrator(document_source, presenter, fake_provider, credential_store) -> QueryOrchestrator:
    return QueryOrchestrator(
        DocumentContextExecutor(document_source),
        presenter,
        credential_store=credential_store,
        model_client=ModelClient(provider=fake_provider),
    )


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_logging():
    """Undo root handler and structlog changes made by ``configure_logging``."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
