"""
End-to-end flow: message endpoint and orchestrator over the same page,
with generation served by a mocked HTTP transport.
"""

import json

import httpx
import pytest

from articlelens.config import ModelConfig
from articlelens.context import DocumentContextExecutor, StaticDocumentSource
from articlelens.llm import GeminiProvider, ModelClient
from articlelens.messaging import EXTRACT_CONTENT, ExtractionEndpoint
from articlelens.orchestrator import QueryOrchestrator, QueryState, QueryStatus
from articlelens.storage import FileCredentialStore
from tests.helpers import RecordingPresenter

pytestmark = pytest.mark.integration


@pytest.fixture
def gemini_requests():
    return []


@pytest.fixture
def gemini_client(gemini_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        gemini_requests.append(request)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "OK"}]}}]})

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_article_is_summarized(article_page, gemini_client, gemini_requests, tmp_path):
    source = StaticDocumentSource()
    source.add("tab-1", article_page, url="https://example.com/field-notes")
    executor = DocumentContextExecutor(source)

    reply = await ExtractionEndpoint(executor, "tab-1").handle({"action": EXTRACT_CONTENT})
    assert reply["success"] is True
    assert len(reply["content"].split()) == 300
    assert "side0" not in reply["content"]

    store = FileCredentialStore(tmp_path / "credentials.json")
    store.save("integration-key")
    presenter = RecordingPresenter()
    config = ModelConfig()
    orchestrator = QueryOrchestrator(
        executor,
        presenter,
        credential_store=store,
        model_client=ModelClient(provider=GeminiProvider(config, client=gemini_client), config=config),
    )

    await orchestrator.start("tab-1")
    assert orchestrator.content.word_count == 300

    state = await orchestrator.summarize()

    assert state == QueryState.success("OK")
    assert presenter.controls_enabled
    assert presenter.responses[-1] == "OK"
    assert len(gemini_requests) == 1
    request = gemini_requests[0]
    assert request.headers["x-goog-api-key"] == "integration-key"
    body = json.loads(request.content)
    assert body["contents"][0]["parts"][0]["text"].endswith(orchestrator.content.text)
    assert body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 2048}


@pytest.mark.asyncio
async def test_credential_saved_mid_session_survives_restart(article_page, gemini_client, gemini_requests, tmp_path):
    source = StaticDocumentSource({"tab-1": article_page})
    store = FileCredentialStore(tmp_path / "credentials.json")
    model_client = ModelClient(provider=GeminiProvider(client=gemini_client))

    first = QueryOrchestrator(
        DocumentContextExecutor(source), RecordingPresenter(), credential_store=store, model_client=model_client
    )
    await first.start("tab-1")
    assert (await first.summarize()).message == "Please enter your API key"
    first.set_credential("fresh-key")

    second = QueryOrchestrator(
        DocumentContextExecutor(source), RecordingPresenter(), credential_store=store, model_client=model_client
    )
    await second.start("tab-1")
    state = await second.ask("What do the beta paragraphs say?")

    assert state.status is QueryStatus.SUCCESS
    assert gemini_requests[-1].headers["x-goog-api-key"] == "fresh-key"
