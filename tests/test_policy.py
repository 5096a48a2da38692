import logging

import pytest
from pydantic import ValidationError

from foliosafe.core.models import SanitizerConfig
from foliosafe.core.policy import DANGEROUS_TAGS, DEFAULT_POLICY, build_policy


def test_default_policy_contents():
    assert {"p", "a", "h1", "h6", "blockquote", "pre", "code"} <= DEFAULT_POLICY.allowed_tags
    assert {"target", "rel", "data-list", "data-indent", "data-align"} <= DEFAULT_POLICY.allowed_attributes
    assert DEFAULT_POLICY.allowed_url_schemes == {"http", "https", "mailto", "tel", "ftp"}
    assert DEFAULT_POLICY.dangerous_tags == {
        "script", "iframe", "object", "embed", "applet", "form", "input", "button",
    }
    assert not DEFAULT_POLICY.allowed_tags & DEFAULT_POLICY.dangerous_tags


def test_policy_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_POLICY.allowed_tags = frozenset({"script"})


def test_tag_checks_ignore_case():
    assert DEFAULT_POLICY.is_dangerous("IFRAME")
    assert DEFAULT_POLICY.is_allowed("Strong")
    assert not DEFAULT_POLICY.is_allowed("marquee")


def test_extra_tags_are_normalized():
    policy = build_policy(SanitizerConfig(extra_allowed_tags=[" IMG ", ""], extra_allowed_attributes=["Title"]))
    assert "img" in policy.allowed_tags
    assert "" not in policy.allowed_tags
    assert "title" in policy.allowed_attributes


def test_dangerous_wins_over_allowed(caplog):
    with caplog.at_level(logging.WARNING, logger="foliosafe.core.policy"):
        policy = build_policy(SanitizerConfig(extra_allowed_tags=["script", "img"]))
    assert "script" not in policy.allowed_tags
    assert "script" in policy.dangerous_tags
    assert "img" in policy.allowed_tags
    assert "treating as dangerous" in caplog.text


def test_config_can_only_extend_deny_list():
    policy = build_policy(SanitizerConfig(extra_dangerous_tags=["style", "svg"]))
    assert DANGEROUS_TAGS <= policy.dangerous_tags
    assert {"style", "svg"} <= policy.dangerous_tags
