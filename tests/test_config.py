import os

import pytest

from foliosafe.core.config import ConfigError, load_config
from foliosafe.core.models import SanitizeMode


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    (tmp_path / "config").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_without_config_file(project_dir):
    cfg = load_config()
    assert cfg.sanitizer.mode == SanitizeMode.STRUCTURED
    assert cfg.sanitizer.parser == "html.parser"
    assert cfg.sanitizer.allow_ftp is True
    assert cfg.log_level == "WARNING"


def test_yaml_values_are_loaded(project_dir):
    (project_dir / "config" / "default.yaml").write_text(
        "log_level: info\n"
        "sanitizer:\n"
        "  mode: textual\n"
        "  allow_ftp: false\n"
        "  extra_allowed_tags: [img]\n"
    )
    cfg = load_config()
    assert cfg.sanitizer.mode == SanitizeMode.TEXTUAL
    assert cfg.sanitizer.allow_ftp is False
    assert cfg.sanitizer.extra_allowed_tags == ["img"]
    assert cfg.log_level == "INFO"


def test_env_overrides_yaml(project_dir, monkeypatch):
    (project_dir / "config" / "default.yaml").write_text("sanitizer:\n  mode: structured\n")
    monkeypatch.setenv("FOLIOSAFE_MODE", "Textual")
    monkeypatch.setenv("FOLIOSAFE_ALLOW_FTP", "no")
    monkeypatch.setenv("FOLIOSAFE_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.sanitizer.mode == SanitizeMode.TEXTUAL
    assert cfg.sanitizer.allow_ftp is False
    assert cfg.log_level == "DEBUG"


def test_dotenv_file_is_read(project_dir):
    (project_dir / ".env").write_text("FOLIOSAFE_PARSER=html5lib\n")
    try:
        cfg = load_config()
    finally:
        os.environ.pop("FOLIOSAFE_PARSER", None)
    assert cfg.sanitizer.parser == "html5lib"


def test_explicit_path(project_dir, tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("sanitizer:\n  extra_dangerous_tags: [style]\n")
    assert load_config(str(path)).sanitizer.extra_dangerous_tags == ["style"]


def test_missing_explicit_path_raises(project_dir):
    with pytest.raises(ConfigError):
        load_config(str(project_dir / "nope.yaml"))


def test_invalid_mode_raises(project_dir):
    (project_dir / "config" / "default.yaml").write_text("sanitizer:\n  mode: permissive\n")
    with pytest.raises(ConfigError):
        load_config()


@pytest.mark.parametrize("content", ["sanitizer: [unclosed\n", "- just\n- a list\n"])
def test_malformed_yaml_raises(project_dir, content):
    (project_dir / "config" / "default.yaml").write_text(content)
    with pytest.raises(ConfigError):
        load_config()
