"""Markdown text helpers: frontmatter fences and leading-heading extraction."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from globfrontmatter.models import HeadingExtraction

# A level-1 heading that comes before any non-blank content.
LEADING_HEADING_RE = re.compile(r"(?:[^\S\n]*\n)*# ([^\n]+)\n?")

RENDERED_HEADING_RE = re.compile(r"<h1(?:\s[^>]*)?>.*?</h1>\n*", re.DOTALL | re.IGNORECASE)

FRONTMATTER_FENCE_RE = re.compile(
    r"\A---\r?\n(?P<data>.*?)^---\r?$\n?", re.DOTALL | re.MULTILINE
)

_INLINE_PATTERNS = (
    (re.compile(r"!\[([^\]]*)\]\([^)]*\)"), r"\1"),  # images
    (re.compile(r"\[([^\]]*)\]\([^)]*\)"), r"\1"),  # links
    (re.compile(r"(\*\*|__)(.*?)\1"), r"\2"),  # bold
    (re.compile(r"(\*|_)(.*?)\1"), r"\2"),  # italic
    (re.compile(r"~~(.*?)~~"), r"\1"),  # strikethrough
    (re.compile(r"`([^`]+)`"), r"\1"),  # inline code
)


def flatten_inline_markdown(text: str) -> str:
    """Reduce inline markdown (images, links, emphasis, code) to plain text."""
    for pattern, replacement in _INLINE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text.strip()


def extract_leading_heading(markdown: str) -> Optional[HeadingExtraction]:
    """Extract a leading ``# Title`` line from a markdown body.

    Only a heading that is the first non-blank line qualifies. The heading
    line and at most one empty line right after it are removed from the
    returned body. Returns ``None`` when there is no leading heading.
    """
    match = LEADING_HEADING_RE.match(markdown)
    if match is None:
        return None

    title = flatten_inline_markdown(match.group(1))
    body = markdown[match.end():]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return HeadingExtraction(title=title, body=body)


def strip_rendered_heading(html: str) -> str:
    """Remove the first ``<h1>`` element and the newlines that follow it."""
    return RENDERED_HEADING_RE.sub("", html, count=1)


def split_frontmatter(text: str) -> Tuple[Optional[str], str]:
    """Split a content file into its frontmatter block and its body.

    Returns ``(None, text)`` when the file does not open with a ``---`` fence.
    """
    match = FRONTMATTER_FENCE_RE.match(text)
    if match is None:
        return None, text
    return match.group("data"), text[match.end():]
