"""Structured-mode sanitizer: walk a BeautifulSoup tree against the policy."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from foliosafe.core.models import Policy
from foliosafe.core.policy import DEFAULT_POLICY
from foliosafe.engine.styles import sanitize_style
from foliosafe.engine.urls import is_safe_url

logger = logging.getLogger(__name__)

# Attribute values carrying any of these are dropped whatever the attribute
_DANGEROUS_VALUE_MARKERS = ("javascript:", "vbscript:", "data:", "mocha:", "livescript:")

# Declaration and processing-instruction openers, escaped when the parser rejects them
_DECLARATION_OPENER_RE = re.compile(r"<(?=[!?])")

# Whitespace the tree builder collapses, and the elements where it does not
_ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"
_PRESERVE_WHITESPACE_TAGS = ("pre", "textarea")


class TreeSanitizer:
    """Filters tags and attributes on a parsed node tree.

    Disallowed elements are unwrapped so their content survives; dangerous
    elements are removed together with their subtree. Markup the parser
    rejects is parsed again with its declaration openers escaped as text.
    Anything else the tree builder raises (e.g. ``bs4.FeatureNotFound``)
    propagates so the caller can fall back.
    """

    name = "structured"

    def __init__(self, policy: Policy = DEFAULT_POLICY, parser: str = "html.parser") -> None:
        self.policy = policy
        self.parser = parser

    def clean(self, html: str) -> str:
        soup = self._parse(html)

        # Iterative depth-first walk, document order
        stack: list[Tag] = [soup]
        while stack:
            node = stack.pop()
            kept = self._clean_children(node)
            stack.extend(reversed(kept))

        return soup.decode(formatter="minimal")

    def _parse(self, html: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, self.parser)
        except ParserRejectedMarkup as exc:
            # e.g. a malformed marked section such as "<![x]>"
            logger.debug("Parser rejected markup, escaping declarations: %s", exc)
            return BeautifulSoup(_DECLARATION_OPENER_RE.sub("&lt;", html), self.parser)

    def _clean_children(self, parent: Tag) -> list[Tag]:
        """Filter the direct children of ``parent``, returning the elements kept."""
        kept: list[Tag] = []
        i = 0
        while i < len(parent.contents):
            child = parent.contents[i]

            if isinstance(child, NavigableString):
                # Comments, doctypes, CDATA and processing instructions
                if isinstance(child, PreformattedString):
                    child.extract()
                else:
                    i += 1
                continue

            name = (child.name or "").lower()
            if self.policy.is_dangerous(name):
                logger.debug("Removing <%s> and its content", name)
                child.decompose()
            elif not self.policy.is_allowed(name):
                # Grandchildren now sit at index i and are visited next
                child.unwrap()
            else:
                self._clean_attributes(child)
                kept.append(child)
                i += 1

        self._merge_strings(parent)
        return kept

    def _merge_strings(self, parent: Tag) -> None:
        """Join adjacent text nodes left behind by removals.

        Whitespace-only runs collapse to a single newline or space, as the
        tree builder does on a fresh parse, so the output parses back to the
        same tree.
        """
        i = 0
        while i < len(parent.contents):
            child = parent.contents[i]
            if not isinstance(child, NavigableString):
                i += 1
                continue

            run = [child]
            for sibling in parent.contents[i + 1:]:
                if not isinstance(sibling, NavigableString):
                    break
                run.append(sibling)

            text = "".join(run)
            if text and not text.strip(_ASCII_SPACES) and not self._preserves_whitespace(parent):
                text = "\n" if "\n" in text else " "

            if len(run) > 1 or text != child:
                for extra in run[1:]:
                    extra.extract()
                child.replace_with(type(child)(text))
            i += 1

    @staticmethod
    def _preserves_whitespace(parent: Tag) -> bool:
        if parent.name in _PRESERVE_WHITESPACE_TAGS:
            return True
        return parent.find_parent(_PRESERVE_WHITESPACE_TAGS) is not None

    def _clean_attributes(self, tag: Tag) -> None:
        for attr in list(tag.attrs):
            raw = tag.attrs[attr]
            value = " ".join(raw) if isinstance(raw, list) else (raw or "")
            name = attr.lower()

            if name.startswith("on") or name not in self.policy.allowed_attributes:
                del tag[attr]
                continue

            if any(marker in value.lower() for marker in _DANGEROUS_VALUE_MARKERS):
                del tag[attr]
                continue

            if name == "style":
                cleaned = sanitize_style(value, self.policy)
                if cleaned:
                    tag[attr] = cleaned
                else:
                    del tag[attr]
            elif name == "href" and not is_safe_url(value, self.policy):
                del tag[attr]
