"""Textual-mode sanitizer: ordered regex passes over the raw string.

This is a degraded fallback for when no node tree can be built. It is a
deny-list pass only: tags outside the allow-list are left untouched, and only
scripts, event handlers, script protocols and the dangerous tags are removed.
"""

from __future__ import annotations

import logging
import re

from foliosafe.core.models import Policy
from foliosafe.core.policy import DEFAULT_POLICY

logger = logging.getLogger(__name__)

_SCRIPT_BLOCK_RE = re.compile(r"<script\b[\s\S]*?</script\s*>", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(
    r"""(?:\s|(?<=[/"']))on\w+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""",
    re.IGNORECASE,
)
_SCRIPT_PROTOCOL_RE = re.compile(r"javascript:|vbscript:", re.IGNORECASE)

# Each pass shortens the string, so this bound is never reached on real input
_MAX_PASSES = 100


class PatternSanitizer:
    """Regex deny-list sanitizer that needs no parser."""

    name = "textual"

    def __init__(self, policy: Policy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self._tag_patterns: list[tuple[re.Pattern[str], re.Pattern[str]]] = []
        for tag in sorted(policy.dangerous_tags):
            t = re.escape(tag)
            paired = re.compile(rf"<{t}\b[^>]*>.*?</{t}\s*>", re.IGNORECASE | re.DOTALL)
            single = re.compile(rf"</?{t}\b[^>]*/?>", re.IGNORECASE)
            self._tag_patterns.append((paired, single))

    def clean(self, html: str) -> str:
        cleaned = html
        for _ in range(_MAX_PASSES):
            result = self._single_pass(cleaned)
            if result == cleaned:
                return result
            cleaned = result
        logger.warning("Textual sanitization did not settle after %d passes", _MAX_PASSES)
        return cleaned

    def _single_pass(self, html: str) -> str:
        cleaned = _SCRIPT_BLOCK_RE.sub("", html)
        cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
        cleaned = _SCRIPT_PROTOCOL_RE.sub("", cleaned)
        for paired, single in self._tag_patterns:
            cleaned = paired.sub("", cleaned)
            cleaned = single.sub("", cleaned)
        return cleaned
