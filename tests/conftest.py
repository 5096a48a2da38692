import pytest

from foliosafe.engine.facade import HtmlSanitizer


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FOLIOSAFE_MODE", "FOLIOSAFE_PARSER", "FOLIOSAFE_ALLOW_FTP", "FOLIOSAFE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sanitizer():
    return HtmlSanitizer()


@pytest.fixture
def textual_sanitizer():
    return HtmlSanitizer(structured=False)
