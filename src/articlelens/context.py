"""
Document contexts: where a page comes from and how extraction runs against it.

An extraction function is a pure callable taking the parsed tree and the
page URL. The executor loads the document for a context id, runs the
function off the event loop (parsing is CPU-bound) and reports every
failure as ``ExtractionFailure``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Protocol, TypeVar, Union, runtime_checkable

import httpx
import structlog
from bs4 import BeautifulSoup

from .exceptions import ExtractionFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ExtractionFunction = Callable[[BeautifulSoup, Optional[str]], T]

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ArticleLens/0.1)"


@dataclass(slots=True, frozen=True)
class DocumentSnapshot:
    """Raw markup of a document and the URL it was loaded from."""

    html: str
    url: Optional[str] = None


@runtime_checkable
class DocumentSource(Protocol):
    """Resolves a context id to the current markup of that document."""

    async def load(self, context_id: str) -> DocumentSnapshot: ...


class StaticDocumentSource:
    """In-memory documents keyed by context id."""

    def __init__(self, documents: Optional[Mapping[str, Union[str, DocumentSnapshot]]] = None) -> None:
        self._documents: Dict[str, DocumentSnapshot] = {}
        for context_id, document in (documents or {}).items():
            self.add(context_id, document)

    def add(self, context_id: str, document: Union[str, DocumentSnapshot], url: Optional[str] = None) -> None:
        if isinstance(document, str):
            document = DocumentSnapshot(html=document, url=url)
        self._documents[context_id] = document

    async def load(self, context_id: str) -> DocumentSnapshot:
        try:
            return self._documents[context_id]
        except KeyError as e:
            raise ExtractionFailure(f"Unknown document context: {context_id}") from e


class HttpDocumentSource:
    """Fetches the document over HTTP. The context id is the page URL."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._client = client
        self.timeout = timeout
        self.user_agent = user_agent

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        response = await client.get(url, headers={"User-Agent": self.user_agent}, follow_redirects=True)
        response.raise_for_status()
        return response

    async def load(self, context_id: str) -> DocumentSnapshot:
        try:
            if self._client is not None:
                response = await self._get(self._client, context_id)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._get(client, context_id)
        except httpx.HTTPStatusError as e:
            raise ExtractionFailure(f"Page request failed with HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ExtractionFailure(f"Could not load page: {e}") from e

        return DocumentSnapshot(html=response.text, url=str(response.url))


class DocumentContextExecutor:
    """Runs extraction functions inside a document context."""

    def __init__(self, source: DocumentSource, parser: str = "html.parser") -> None:
        self.source = source
        self.parser = parser
        self.logger = logger.bind(component="DocumentContextExecutor")

    def _run(self, snapshot: DocumentSnapshot, func: ExtractionFunction[T]) -> T:
        soup = BeautifulSoup(snapshot.html, self.parser)
        return func(soup, snapshot.url)

    async def execute(self, context_id: str, func: ExtractionFunction[T]) -> T:
        """Load ``context_id`` and return ``func``'s result for it.

        Raises:
            ExtractionFailure: the document could not be loaded or ``func`` raised
        """
        try:
            snapshot = await self.source.load(context_id)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self._run, snapshot, func)
        except ExtractionFailure:
            raise
        except Exception as e:
            self.logger.error(
                "Extraction failed in document context",
                context_id=context_id,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise ExtractionFailure(f"Error extracting page content: {e}") from e
