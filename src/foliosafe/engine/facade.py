"""Public entry point: pick a strategy, degrade on failure, never raise."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from foliosafe.core.models import AppConfig, Policy, SanitizeMode
from foliosafe.core.policy import DEFAULT_POLICY, build_policy
from foliosafe.engine.classifier import is_safe_content as _is_safe_content
from foliosafe.engine.patterns import PatternSanitizer
from foliosafe.engine.tree import TreeSanitizer
from foliosafe.utils.text import strip_tags

logger = logging.getLogger(__name__)


class Strategy(Protocol):
    name: str

    def clean(self, html: str) -> str: ...


class HtmlSanitizer:
    """Sanitizes rich-text HTML with a fixed fallback chain.

    With ``structured=True`` the chain is tree walk, then regex pass; with
    ``structured=False`` only the regex pass runs. If every strategy raises,
    all tags are stripped and the remaining text is returned.
    """

    def __init__(
        self,
        policy: Optional[Policy] = None,
        structured: bool = True,
        parser: str = "html.parser",
    ) -> None:
        self.policy = policy if policy is not None else DEFAULT_POLICY
        self.structured = structured
        self.strategies: list[Strategy] = []
        if structured:
            self.strategies.append(TreeSanitizer(self.policy, parser=parser))
        self.strategies.append(PatternSanitizer(self.policy))

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "HtmlSanitizer":
        san = cfg.sanitizer
        return cls(
            policy=build_policy(san),
            structured=san.mode == SanitizeMode.STRUCTURED,
            parser=san.parser,
        )

    def sanitize(self, html: Optional[str]) -> str:
        if not html or not isinstance(html, str):
            return ""
        # Nothing can be an element without "<"
        if "<" not in html:
            return html

        for strategy in self.strategies:
            try:
                return strategy.clean(html)
            except Exception as exc:
                logger.warning("%s sanitization failed, falling back: %s", strategy.name, exc)

        logger.error("All sanitization strategies failed, stripping tags")
        return strip_tags(html)

    def is_safe_content(self, html: Optional[str]) -> bool:
        return _is_safe_content(html, self.policy)


_default_sanitizer = HtmlSanitizer()


def get_sanitizer(cfg: Optional[AppConfig] = None) -> HtmlSanitizer:
    """Return the shared default sanitizer, or a new one built from ``cfg``."""
    if cfg is None:
        return _default_sanitizer
    return HtmlSanitizer.from_config(cfg)


def sanitize(html: Optional[str]) -> str:
    """Sanitize ``html`` with the default policy. Never raises."""
    return _default_sanitizer.sanitize(html)


def is_safe_content(html: Optional[str]) -> bool:
    """Advisory check with the default policy."""
    return _default_sanitizer.is_safe_content(html)
