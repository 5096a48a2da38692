"""Link validation for ``href`` values."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from foliosafe.core.models import Policy
from foliosafe.core.policy import DEFAULT_POLICY

# Browsers ignore whitespace and control characters inside a scheme
_IGNORED_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")
_BLOCKED_PROTOCOLS = ("javascript:", "vbscript:", "data:")
_RELATIVE_PREFIXES = ("/", "./", "../")


def _is_relative(url: str) -> bool:
    return url.startswith(_RELATIVE_PREFIXES) or (":" not in url and not url.startswith("//"))


def _textual_check(url: str, policy: Policy) -> bool:
    lowered = url.lower()
    if any(lowered.startswith(f"{scheme}:") for scheme in policy.allowed_url_schemes):
        return True
    return _is_relative(url)


def is_safe_url(value: Optional[str], policy: Policy = DEFAULT_POLICY, use_parser: bool = True) -> bool:
    """Return True if ``value`` may be kept as a link target."""
    if not value:
        return False
    url = value.strip()
    if not url:
        return False

    collapsed = _IGNORED_CHARS_RE.sub("", url).lower()
    if any(proto in collapsed for proto in _BLOCKED_PROTOCOLS):
        return False

    if use_parser:
        try:
            scheme = urlsplit(url).scheme
        except ValueError:
            scheme = ""
        if scheme:
            return scheme.lower() in policy.allowed_url_schemes

    return _textual_check(url, policy)
