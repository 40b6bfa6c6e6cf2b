from pathlib import Path
from typing import Any

import pytest

from redactkit.config import ensure_api_key, load_config
from redactkit.utils.errors import ConfigurationError


def test_env_api_key(monkeypatch: Any) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    cfg = load_config()
    assert cfg.detector.api_key is not None
    assert cfg.detector.api_key.get_secret_value() == "test-key"
    assert "test-key" not in repr(cfg)


def test_custom_env_override(monkeypatch: Any, tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text('detector:\n  api_key_env: "CUSTOM_KEY"\n')
    monkeypatch.setenv("CUSTOM_KEY", "custom")
    cfg = load_config(cfg_file)
    assert cfg.detector.api_key_env == "CUSTOM_KEY"
    assert cfg.detector.api_key is not None
    assert cfg.detector.api_key.get_secret_value() == "custom"


def test_empty_env_value_is_ignored() -> None:
    cfg = load_config(env={"GEMINI_API_KEY": ""})
    assert cfg.detector.api_key is None


def test_ensure_api_key() -> None:
    cfg = load_config(env={})
    assert ensure_api_key(cfg, strict=False) is False
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        ensure_api_key(cfg, strict=True)

    cfg = load_config(env={"GEMINI_API_KEY": "k"})
    assert ensure_api_key(cfg, strict=True) is True
