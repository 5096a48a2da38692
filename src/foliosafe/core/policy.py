"""The canonical sanitization policy and its config-driven builder."""

from __future__ import annotations

import logging
from typing import Iterable

from foliosafe.core.models import Policy, SanitizerConfig

logger = logging.getLogger(__name__)

# Markup produced by the rich-text editor
ALLOWED_TAGS = frozenset({
    "p", "br", "div", "span",
    "strong", "b", "em", "i", "u", "s", "strike",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ol", "ul", "li",
    "blockquote", "pre", "code",
    "a",
})

ALLOWED_ATTRIBUTES = frozenset({
    "class", "style", "href", "target", "rel",
    "data-list", "data-indent", "data-align",
})

ALLOWED_STYLE_PROPERTIES = frozenset({
    "color", "background-color",
    "font-size", "font-weight", "font-style",
    "text-decoration", "text-align",
    "margin-left", "text-indent", "padding",
})

BASE_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel"})

# Removed together with everything inside them
DANGEROUS_TAGS = frozenset({
    "script", "iframe", "object", "embed", "applet",
    "form", "input", "button",
})


def _normalize(names: Iterable[str]) -> frozenset[str]:
    return frozenset(n.strip().lower() for n in names if n and n.strip())


def build_policy(cfg: SanitizerConfig | None = None) -> Policy:
    """Build a frozen Policy from the built-in lists plus config additions."""
    cfg = cfg or SanitizerConfig()

    dangerous = DANGEROUS_TAGS | _normalize(cfg.extra_dangerous_tags)
    allowed = ALLOWED_TAGS | _normalize(cfg.extra_allowed_tags)
    overlap = allowed & dangerous
    if overlap:
        logger.warning("Tags both allowed and dangerous, treating as dangerous: %s", sorted(overlap))
        allowed = allowed - overlap

    schemes = BASE_URL_SCHEMES | ({"ftp"} if cfg.allow_ftp else frozenset())

    return Policy(
        allowed_tags=allowed,
        allowed_attributes=ALLOWED_ATTRIBUTES | _normalize(cfg.extra_allowed_attributes),
        allowed_style_properties=ALLOWED_STYLE_PROPERTIES | _normalize(cfg.extra_style_properties),
        allowed_url_schemes=schemes,
        dangerous_tags=dangerous,
    )


DEFAULT_POLICY = build_policy()
