"""Advisory check for content that looks dangerous.

A pre-check for gating and warnings only: a True result from untrusted input
is no reason to skip ``sanitize``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from foliosafe.core.models import Policy
from foliosafe.core.policy import DEFAULT_POLICY

_SIGNATURES = (
    re.compile(r"<script\b", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=", re.IGNORECASE),
)


@lru_cache(maxsize=8)
def _dangerous_tag_re(dangerous_tags: frozenset[str]) -> re.Pattern[str]:
    names = "|".join(re.escape(t) for t in sorted(dangerous_tags))
    return re.compile(rf"</?(?:{names})\b", re.IGNORECASE)


def is_safe_content(html: Optional[str], policy: Policy = DEFAULT_POLICY) -> bool:
    """Return False if ``html`` matches any dangerous signature."""
    if not html or not isinstance(html, str):
        return True
    if any(sig.search(html) for sig in _SIGNATURES):
        return False
    return not _dangerous_tag_re(policy.dangerous_tags).search(html)
