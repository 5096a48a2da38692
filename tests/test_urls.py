import pytest

from foliosafe.core.models import SanitizerConfig
from foliosafe.core.policy import build_policy
from foliosafe.engine.urls import is_safe_url


@pytest.mark.parametrize("url", [
    "https://example.com/work",
    "http://example.com",
    "mailto:me@example.com",
    "tel:+15551234567",
    "ftp://files.example.com/cv.pdf",
    "/projects/1",
    "./resume.pdf",
    "../about",
    "about.html",
    "#contact",
    "  https://example.com  ",
])
def test_safe_urls_are_accepted(url):
    assert is_safe_url(url)


@pytest.mark.parametrize("url", [
    "javascript:alert(1)",
    "JaVaScRiPt:alert(1)",
    "   javascript:alert(1)",
    "java\tscript:alert(1)",
    "java\nscript:alert(1)",
    "vbscript:msgbox(1)",
    "data:text/html;base64,PHNjcmlwdD4=",
    "https://example.com/?next=javascript:alert(1)",
    "custom-scheme:payload",
    "C:/Windows/system32",
])
def test_dangerous_or_unknown_urls_are_rejected(url):
    assert not is_safe_url(url)


@pytest.mark.parametrize("url", [None, "", "   "])
def test_empty_values_are_rejected(url):
    assert not is_safe_url(url)


def test_protocol_relative_url_follows_slash_rule():
    # "//host" starts with "/" and is treated like the relative paths
    assert is_safe_url("//cdn.example.com/logo.png")


def test_textual_check_without_parser():
    assert is_safe_url("https://example.com", use_parser=False)
    assert is_safe_url("MAILTO:me@example.com", use_parser=False)
    assert is_safe_url("/relative", use_parser=False)
    assert not is_safe_url("custom:x", use_parser=False)
    assert not is_safe_url("javascript:alert(1)", use_parser=False)


def test_unparseable_url_falls_back_to_textual_check():
    # urlsplit raises ValueError on the unterminated IPv6 literal
    assert is_safe_url("http://[::1")


def test_ftp_can_be_disabled():
    policy = build_policy(SanitizerConfig(allow_ftp=False))
    assert not is_safe_url("ftp://files.example.com", policy)
    assert is_safe_url("https://files.example.com", policy)
