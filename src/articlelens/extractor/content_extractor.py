"""
Selector-scoring extractor that picks "the article" out of a rendered page.

Pages carry no reliable structural marker for their main content, so every
match of an ordered list of content selectors is scored by its word count,
boosted by naming conventions, and the best one wins. When nothing
qualifies, the visible text of the whole body is returned instead.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, Iterator, Optional, Sequence

import structlog
from bs4 import BeautifulSoup

from ..config.config import ExtractionSettings
from ..observability import histogram, increment
from ..sanitizer import count_words
from .models import CandidateRegion, ExtractionResult
from .visibility import hide, visible_text

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BoostRule:
    """Score multiplier applied when ``applies(selector)`` holds."""

    name: str
    factor: float
    applies: Callable[[str], bool]


def default_boost_rules(settings: ExtractionSettings) -> tuple[BoostRule, ...]:
    """Boost table built from the configured factors. Rules stack multiplicatively."""
    return (
        BoostRule("article_tag", settings.article_tag_boost, lambda selector: selector == "article"),
        BoostRule("content_name", settings.content_name_boost, lambda selector: "content" in selector),
        BoostRule("article_name", settings.article_name_boost, lambda selector: "article" in selector),
    )


def score_candidate(selector: str, word_count: int, rules: Iterable[BoostRule]) -> float:
    """Fold every applicable boost over the raw word count."""
    return reduce(
        lambda score, rule: score * rule.factor if rule.applies(selector) else score,
        rules,
        float(word_count),
    )


class ContentExtractor:
    """Extracts the best-scoring content region of a document."""

    name = "candidate_scan"

    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        *,
        parser: str = "html.parser",
        boost_rules: Optional[Sequence[BoostRule]] = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.parser = parser
        self.boost_rules = tuple(boost_rules) if boost_rules is not None else default_boost_rules(self.settings)
        self.logger = logger.bind(component="ContentExtractor")

    def parse(self, document: BeautifulSoup | str) -> BeautifulSoup:
        if isinstance(document, BeautifulSoup):
            return document
        return BeautifulSoup(document or "", self.parser)

    def suppress_boilerplate(self, soup: BeautifulSoup) -> int:
        """Hide every boilerplate match in place. Returns how many were hidden."""
        hidden = 0
        for selector in self.settings.boilerplate_selectors:
            for element in soup.select(selector):
                if hide(element):
                    hidden += 1
        return hidden

    def scan_candidates(self, soup: BeautifulSoup) -> Iterator[CandidateRegion]:
        """Yield a scored region for every match, in selector order then document order."""
        for selector in self.settings.content_selectors:
            for element in soup.select(selector):
                text = visible_text(element)
                word_count = count_words(text)
                yield CandidateRegion(
                    selector=selector,
                    text=text,
                    word_count=word_count,
                    score=score_candidate(selector, word_count, self.boost_rules),
                )

    def select_best(self, candidates: Iterable[CandidateRegion]) -> Optional[CandidateRegion]:
        """Highest score among candidates above the word floor; the first one wins ties."""
        best: Optional[CandidateRegion] = None
        for candidate in candidates:
            if candidate.word_count <= self.settings.min_word_count:
                continue
            if best is None or candidate.score > best.score:
                best = candidate
        return best

    def extract(self, document: BeautifulSoup | str, url: Optional[str] = None) -> ExtractionResult:
        """Extract the primary content of ``document``.

        A parsed tree is modified only by hiding boilerplate through inline
        styles. When suppression leaves the body without text, the text
        under the suppressed elements is used. Returns an empty result only
        when the document has no visible text.
        """
        start_time = time.perf_counter()
        soup = self.parse(document)
        title = " ".join(soup.title.get_text().split()) if soup.title else ""

        hidden = self.suppress_boilerplate(soup)
        best = self.select_best(self.scan_candidates(soup))

        if best is not None and len(best.text) >= self.settings.min_text_length:
            text, outcome = best.text, "candidate"
        else:
            root = soup.body or soup
            text = visible_text(root)
            if not text and hidden:
                # Every visible line sat inside a suppressed wrapper.
                text = visible_text(root, include_hidden=True)
            outcome = "fallback" if text else "empty"

        result = ExtractionResult(text=text, word_count=count_words(text), title=title, url=url)

        duration = time.perf_counter() - start_time
        increment("extractions", labels={"outcome": outcome})
        histogram("extraction_duration_seconds", duration)
        self.logger.info(
            "Extraction completed",
            url=url,
            outcome=outcome,
            selector=best.selector if outcome == "candidate" and best else None,
            word_count=result.word_count,
            hidden_elements=hidden,
            duration=duration,
        )
        return result
