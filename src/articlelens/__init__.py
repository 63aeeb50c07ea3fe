"""
ArticleLens - summarize and question the main content of a web page.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ContentExtractor, ExtractionResult
from .orchestrator import QueryOrchestrator, QueryState, QueryStatus
from .prompts import AskQuestion, PromptBuilder, Summarize
from .sanitizer import sanitize

__all__ = [
    "__version__",
    "AskQuestion",
    "Config",
    "ContentExtractor",
    "ExtractionResult",
    "PromptBuilder",
    "QueryOrchestrator",
    "QueryState",
    "QueryStatus",
    "Summarize",
    "sanitize",
]
