"""Inline ``style`` attribute filtering."""

from __future__ import annotations

import re
from typing import Optional

from foliosafe.core.models import Policy
from foliosafe.core.policy import DEFAULT_POLICY

_DANGEROUS_VALUE_RE = re.compile(
    r"javascript:|expression\(|url\(|@import|behavior:|binding:",
    re.IGNORECASE,
)
# Comments and escapes can hide the patterns above (e.g. "exp/**/ression(")
_OBFUSCATION_RE = re.compile(r"/\*|\\")


def is_safe_css_value(value: str) -> bool:
    """Return True if a CSS value carries no script or obfuscation pattern."""
    if not value:
        return False
    return not (_DANGEROUS_VALUE_RE.search(value) or _OBFUSCATION_RE.search(value))


def sanitize_style(value: Optional[str], policy: Policy = DEFAULT_POLICY) -> str:
    """Keep only allowed, safe declarations of an inline style.

    >>> sanitize_style("color:red;behavior:url(x.htc);font-size:12px")
    'color: red; font-size: 12px'
    """
    if not value:
        return ""

    kept: list[str] = []
    for declaration in value.split(";"):
        prop, sep, val = declaration.partition(":")
        prop, val = prop.strip().lower(), val.strip()
        if not sep or not prop or not val:
            continue
        if prop not in policy.allowed_style_properties:
            continue
        if not is_safe_css_value(val):
            continue
        kept.append(f"{prop}: {val}")

    return "; ".join(kept)
