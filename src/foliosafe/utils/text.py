"""Text formatting helpers."""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(html: str) -> str:
    """Remove every ``<...>`` construct, leaving only the text between them.

    Entities are left encoded so that ``&lt;script&gt;`` stays inert.
    """
    return _TAG_RE.sub("", html)


def truncate(text: str, max_length: int = 300, suffix: str = "...") -> str:
    """Truncate text to max_length, breaking at word boundary."""
    if len(text) <= max_length:
        return text
    truncated = text[: max_length - len(suffix)]
    # Break at last space
    last_space = truncated.rfind(" ")
    if last_space > max_length // 2:
        truncated = truncated[:last_space]
    return truncated + suffix
