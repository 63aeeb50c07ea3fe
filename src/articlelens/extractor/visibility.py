"""
Rendered-text helpers for parsed documents.

``visible_text`` approximates what a browser's ``innerText`` returns. Hidden
subtrees below the root are skipped, block-level elements start new lines,
and runs of whitespace inside a line collapse to one space.
"""

from __future__ import annotations

import re
from itertools import chain
from typing import Iterator, List

from bs4 import NavigableString, Tag

NON_RENDERED_TAGS = frozenset(
    {"script", "style", "noscript", "template", "head", "title", "meta", "link", "iframe", "svg"}
)

BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "details", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary", "table",
        "tbody", "td", "th", "thead", "tr", "ul",
    }
)

_DISPLAY_NONE = re.compile(r"display\s*:\s*none", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_LINE_BREAK = object()


def is_hidden(tag: Tag) -> bool:
    """True when the element itself is not rendered."""
    if tag.name in NON_RENDERED_TAGS or tag.has_attr("hidden"):
        return True
    style = tag.get("style")
    return isinstance(style, str) and _DISPLAY_NONE.search(style) is not None


def hide(tag: Tag) -> bool:
    """Hide ``tag`` through its inline style, leaving the tree shape intact.

    Returns False if the element was already hidden that way.
    """
    style = tag.get("style")
    style = style if isinstance(style, str) else ""
    if _DISPLAY_NONE.search(style):
        return False
    style = style.strip().rstrip(";")
    tag["style"] = f"{style}; display: none" if style else "display: none"
    return True


def _iter_visible_strings(root: Tag, include_hidden: bool) -> Iterator[str]:
    # Iterative walk so deeply nested markup cannot hit the recursion limit.
    stack: List[Iterator[object]] = [iter(root.children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
        elif child is _LINE_BREAK:
            yield "\n"
        elif isinstance(child, Tag):
            if child.name in NON_RENDERED_TAGS or (not include_hidden and is_hidden(child)):
                continue
            if child.name in BLOCK_TAGS:
                yield "\n"
                stack.append(chain(child.children, (_LINE_BREAK,)))
            else:
                stack.append(iter(child.children))
        elif type(child) is NavigableString:
            # Subclasses are comments, doctypes, CDATA and the like.
            yield _WHITESPACE.sub(" ", str(child))


def visible_text(root: Tag, *, include_hidden: bool = False) -> str:
    """Rendered text of ``root``, one line per block, empty lines dropped.

    Only descendants are checked for visibility. A region inside a hidden
    wrapper still yields its own text, the way ``innerText`` falls back to
    the text content of an element that is not being rendered.

    With ``include_hidden`` the ``hidden`` attribute and inline
    ``display: none`` are ignored. Script, style and other non-rendered
    tags are always skipped.
    """
    raw = "".join(_iter_visible_strings(root, include_hidden))
    lines = (" ".join(line.split()) for line in raw.splitlines())
    return "\n".join(line for line in lines if line)
