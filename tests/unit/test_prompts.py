"""
Tests for prompt construction.
"""

import pytest

from articlelens.exceptions import ValidationError
from articlelens.prompts import CONTENT_LABEL, SUMMARY_INSTRUCTIONS, AskQuestion, PromptBuilder, Summarize


@pytest.fixture
def builder():
    return PromptBuilder()


def test_summary_prompt_layout(builder):
    prompt = builder.build(Summarize(), "The article body.")

    assert prompt == f"{SUMMARY_INSTRUCTIONS}\n\n{CONTENT_LABEL}\nThe article body."
    assert "1. Main topic and key points" in prompt


def test_question_prompt_embeds_question(builder):
    prompt = builder.build(AskQuestion("  Who wrote it?  "), "Written by Ada.")

    assert "please answer this question: Who wrote it?" in prompt
    assert "doesn't contain enough information" in prompt
    assert prompt.endswith(f"\n\n{CONTENT_LABEL}\nWritten by Ada.")


def test_content_is_the_suffix(builder):
    content = "line one\nline two"

    assert builder.build(Summarize(), content).endswith(content)


@pytest.mark.parametrize("question", ["", "   ", "\n\t"])
def test_blank_question_is_rejected(builder, question):
    with pytest.raises(ValidationError, match="Please enter a question"):
        builder.build(AskQuestion(question), "some content")


def test_empty_content_is_rejected(builder):
    with pytest.raises(ValidationError, match="No content extracted from page"):
        builder.build(Summarize(), "")


def test_question_is_checked_before_content(builder):
    with pytest.raises(ValidationError, match="Please enter a question"):
        builder.build(AskQuestion(""), "")


def test_custom_content_label():
    prompt = PromptBuilder(content_label="Page:").build(Summarize(), "body")

    assert prompt.endswith("\n\nPage:\nbody")


def test_unknown_intent(builder):
    with pytest.raises(TypeError):
        builder.build("summarize", "body")


def test_intent_kinds():
    assert Summarize().kind == "summarize"
    assert AskQuestion("why?").kind == "ask"
