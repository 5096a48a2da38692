from foliosafe.engine.facade import HtmlSanitizer, get_sanitizer, is_safe_content, sanitize
from foliosafe.engine.styles import sanitize_style
from foliosafe.engine.urls import is_safe_url

__all__ = [
    "HtmlSanitizer",
    "get_sanitizer",
    "is_safe_content",
    "is_safe_url",
    "sanitize",
    "sanitize_style",
]
