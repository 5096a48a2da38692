"""Pydantic models for the FOLIOSAFE sanitizer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SanitizeMode(str, Enum):
    STRUCTURED = "structured"
    TEXTUAL = "textual"


# --- Policy ---

class Policy(BaseModel):
    """Allow-lists and deny-list shared by every sanitizer component.

    Frozen once built; components receive it by reference.
    """

    model_config = ConfigDict(frozen=True)

    allowed_tags: frozenset[str]
    allowed_attributes: frozenset[str]
    allowed_style_properties: frozenset[str]
    allowed_url_schemes: frozenset[str]
    dangerous_tags: frozenset[str]

    def is_dangerous(self, tag_name: str) -> bool:
        """Return True if the tag is removed together with its content."""
        return tag_name.lower() in self.dangerous_tags

    def is_allowed(self, tag_name: str) -> bool:
        """Return True if the tag may be kept as an element."""
        return tag_name.lower() in self.allowed_tags


# --- Config ---

class SanitizerConfig(BaseModel):
    mode: SanitizeMode = SanitizeMode.STRUCTURED
    parser: str = "html.parser"
    allow_ftp: bool = True
    extra_allowed_tags: list[str] = Field(default_factory=list)
    extra_allowed_attributes: list[str] = Field(default_factory=list)
    extra_style_properties: list[str] = Field(default_factory=list)
    extra_dangerous_tags: list[str] = Field(default_factory=list)


class AppConfig(BaseModel):
    sanitizer: SanitizerConfig = Field(default_factory=SanitizerConfig)
    log_level: str = "WARNING"
