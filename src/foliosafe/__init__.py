"""FOLIOSAFE: rich-text HTML sanitization for portfolio content."""

from foliosafe.engine import HtmlSanitizer, get_sanitizer, is_safe_content, sanitize

__all__ = ["HtmlSanitizer", "get_sanitizer", "is_safe_content", "sanitize"]
