"""
Prompt construction for the two user intents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .exceptions import ValidationError

SUMMARY_INSTRUCTIONS = """Please provide a comprehensive summary of this article. Include:
1. Main topic and key points
2. Important details and findings
3. Conclusions or implications
4. Any notable quotes or statistics

Keep the summary informative but concise."""

QUESTION_INSTRUCTIONS = """Based on the provided content, please answer this question: {question}

Please provide a detailed and accurate response based only on the information in the content. \
If the content doesn't contain enough information to answer the question, please say so."""

CONTENT_LABEL = "Content to analyze:"


@dataclass(frozen=True)
class Summarize:
    """Summarize the page."""

    kind = "summarize"


@dataclass(frozen=True)
class AskQuestion:
    """Answer a free-form question about the page."""

    question: str

    kind = "ask"


Intent = Union[Summarize, AskQuestion]


class PromptBuilder:
    """Combines task framing for an intent with the page content."""

    def __init__(self, content_label: str = CONTENT_LABEL) -> None:
        self.content_label = content_label

    def instructions(self, intent: Intent) -> str:
        if isinstance(intent, AskQuestion):
            question = intent.question.strip()
            if not question:
                raise ValidationError("Please enter a question")
            return QUESTION_INSTRUCTIONS.format(question=question)
        if isinstance(intent, Summarize):
            return SUMMARY_INSTRUCTIONS
        raise TypeError(f"Unsupported intent: {intent!r}")

    def build(self, intent: Intent, content: str) -> str:
        """Return the full prompt for ``intent`` grounded in ``content``.

        Raises:
            ValidationError: if the question is blank or there is no content
        """
        instructions = self.instructions(intent)
        if not content:
            raise ValidationError("No content extracted from page")
        return f"{instructions}\n\n{self.content_label}\n{content}"
