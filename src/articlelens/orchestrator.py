"""
Session controller tying extraction, prompting and generation together.

The orchestrator owns the extracted content, the credential and the query
state of one session. Every transition is an explicit method returning the
new ``QueryState``; every pipeline error is turned into a presenter update
here and never propagates further.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

import structlog

from .config.config import SanitizerConfig
from .context import DocumentContextExecutor
from .exceptions import ArticleLensError
from .extractor import ContentExtractor, ExtractionResult, Extractor
from .llm import ModelClient
from .observability import increment
from .prompts import AskQuestion, Intent, PromptBuilder, Summarize
from .sanitizer import count_words, sanitize
from .storage import CredentialStore, MemoryCredentialStore

logger = structlog.get_logger(__name__)

LOADING_PLACEHOLDER = "Analyzing content..."

# intent kind -> (in progress, succeeded, failed)
STATUS_MESSAGES = {
    Summarize.kind: ("Generating summary...", "Summary generated", "Error generating summary"),
    AskQuestion.kind: ("Analyzing question...", "Question answered", "Error answering question"),
}


class QueryStatus(Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class QueryState:
    """Observable state of the session. ``text`` and ``message`` carry the last outcome."""

    status: QueryStatus
    text: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> QueryState:
        return cls(QueryStatus.IDLE)

    @classmethod
    def extracting(cls) -> QueryState:
        return cls(QueryStatus.EXTRACTING)

    @classmethod
    def loading(cls) -> QueryState:
        return cls(QueryStatus.LOADING)

    @classmethod
    def success(cls, text: str) -> QueryState:
        return cls(QueryStatus.SUCCESS, text=text)

    @classmethod
    def failed(cls, message: str) -> QueryState:
        return cls(QueryStatus.FAILED, message=message)

    @property
    def is_busy(self) -> bool:
        return self.status in (QueryStatus.EXTRACTING, QueryStatus.LOADING)


@runtime_checkable
class Presenter(Protocol):
    """The surface the orchestrator reports to."""

    def update_status(self, message: str) -> None: ...

    def display_response(self, text: str) -> None: ...

    def display_error(self, message: str) -> None: ...

    def set_controls_enabled(self, enabled: bool) -> None: ...


class QueryOrchestrator:
    """
    Drives one inspection session.

    * ``activate`` extracts and sanitizes the document content
      (Idle -> Extracting -> Idle).
    * ``summarize`` / ``ask`` run one generation request
      (Idle -> Loading -> Success | Failed). Success and Failed are ready
      states; the next action may start from them.
    * Any action while Extracting or Loading is a no-op, so at most one
      request is ever in flight.

    There is no timeout or cancellation: a hung provider call leaves the
    session in Loading until the transport gives up.
    """

    def __init__(
        self,
        executor: DocumentContextExecutor,
        presenter: Presenter,
        *,
        credential_store: Optional[CredentialStore] = None,
        extractor: Optional[Extractor] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        model_client: Optional[ModelClient] = None,
        sanitizer_config: Optional[SanitizerConfig] = None,
    ) -> None:
        self.executor = executor
        self.presenter = presenter
        self.credential_store = credential_store or MemoryCredentialStore()
        self.extractor = extractor or ContentExtractor()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.model_client = model_client or ModelClient()
        self.sanitizer_config = sanitizer_config or SanitizerConfig()

        self._state = QueryState.idle()
        self._content: Optional[ExtractionResult] = None
        self._credential = ""
        self.logger = logger.bind(component="QueryOrchestrator")

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def content(self) -> Optional[ExtractionResult]:
        return self._content

    @property
    def has_credential(self) -> bool:
        return bool(self._credential)

    # --- Session lifecycle ---

    async def start(self, context_id: str) -> QueryState:
        """Load the stored credential, then extract the document."""
        self._credential = self.credential_store.load()
        return await self.activate(context_id)

    def set_credential(self, value: str) -> None:
        """Persist a new credential, then make it the one used for requests."""
        try:
            self.credential_store.save(value)
        except OSError as e:
            self.logger.warning("Failed to persist credential", error=str(e))
            self.presenter.update_status("Could not save API key")
        self._credential = value

    async def activate(self, context_id: str) -> QueryState:
        if self._state.is_busy:
            self.logger.warning("Activation ignored while busy", status=self._state.status.value)
            return self._state

        self._state = QueryState.extracting()
        self.presenter.update_status("Extracting page content...")
        try:
            raw = await self.executor.execute(context_id, self.extractor.extract)
        except ArticleLensError as e:
            self._content = None
            self.logger.warning("Content extraction failed", context_id=context_id, error=str(e))
            self.presenter.update_status("Error extracting page content")
        except Exception as e:
            self._content = None
            self.logger.exception("Unexpected extraction error", context_id=context_id, error=str(e))
            self.presenter.update_status("Error extracting page content")
        else:
            text = sanitize(raw.text, self.sanitizer_config.max_length, self.sanitizer_config.truncation_marker)
            if text:
                self._content = ExtractionResult(text=text, word_count=count_words(text), title=raw.title, url=raw.url)
                self.presenter.update_status(f"Extracted {self._content.word_count} words from page")
            else:
                self._content = None
                self.presenter.update_status("Could not extract content from page")

        self._state = QueryState.idle()
        return self._state

    # --- User actions ---

    async def summarize(self) -> QueryState:
        return await self.run(Summarize())

    async def ask(self, question: str) -> QueryState:
        return await self.run(AskQuestion(question))

    async def run(self, intent: Intent) -> QueryState:
        # The busy check and the switch to Loading happen before the first
        # await, so a second call can never interleave with this one.
        if self._state.is_busy:
            self.logger.warning("Action ignored while busy", intent=intent.kind, status=self._state.status.value)
            return self._state

        in_progress, succeeded, failed = STATUS_MESSAGES[intent.kind]
        self._state = QueryState.loading()
        self.presenter.update_status(in_progress)
        self.presenter.set_controls_enabled(False)
        self.presenter.display_response(LOADING_PLACEHOLDER)

        try:
            content = self._content.text if self._content else ""
            prompt = self.prompt_builder.build(intent, content)
            text = await self.model_client.generate(prompt, self._credential)
        except ArticleLensError as e:
            self._fail(intent, str(e), failed)
        except Exception as e:
            self.logger.exception("Unexpected query error", intent=intent.kind, error=str(e))
            self._fail(intent, f"Unexpected error: {e}", failed)
        else:
            self._state = QueryState.success(text)
            increment("queries", labels={"intent": intent.kind, "outcome": "success"})
            self.presenter.display_response(text)
            self.presenter.update_status(succeeded)
        finally:
            self.presenter.set_controls_enabled(True)

        return self._state

    def _fail(self, intent: Intent, message: str, status_message: str) -> None:
        self._state = QueryState.failed(message)
        increment("queries", labels={"intent": intent.kind, "outcome": "failed"})
        self.presenter.display_error(message)
        self.presenter.update_status(status_message)

    def show_extracted_content(self) -> QueryState:
        """Preview the stored content. Does not change state."""
        if not self._content:
            self.presenter.display_error("No content extracted")
            return self._state

        limit = self.sanitizer_config.preview_length
        text = self._content.text
        preview = text[:limit] + "..." if len(text) > limit else text
        self.presenter.display_response(f"Extracted Content:\n\n{preview}")
        self.presenter.update_status(f"Showing {self._content.word_count} words")
        return self._state
