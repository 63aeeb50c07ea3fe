"""
Request/response endpoint answering extraction requests for one document.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog

from .context import DocumentContextExecutor
from .exceptions import ArticleLensError
from .extractor import ContentExtractor, Extractor

logger = structlog.get_logger(__name__)

EXTRACT_CONTENT = "extractContent"


class ExtractionEndpoint:
    """
    Answers ``{"action": "extractContent"}`` with the page's main content.

    The reply is ``{"success": True, "content", "title", "url"}`` or
    ``{"success": False, "error"}``. Requests for other actions get no reply.
    The caller awaits ``handle`` until the reply is ready; cancelling it is
    not supported.
    """

    def __init__(
        self,
        executor: DocumentContextExecutor,
        context_id: str,
        extractor: Optional[Extractor] = None,
    ) -> None:
        self.executor = executor
        self.context_id = context_id
        self.extractor = extractor or ContentExtractor()

    async def handle(self, request: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        action = request.get("action") if isinstance(request, Mapping) else None
        if action != EXTRACT_CONTENT:
            logger.debug("Ignoring message", action=action)
            return None

        try:
            result = await self.executor.execute(self.context_id, self.extractor.extract)
        except ArticleLensError as e:
            logger.warning("Extraction request failed", context_id=self.context_id, error=str(e))
            return {"success": False, "error": str(e)}

        return {
            "success": True,
            "content": result.text,
            "title": result.title,
            "url": result.url,
        }
