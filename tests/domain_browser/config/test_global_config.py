from __future__ import annotations

import json
from pathlib import Path

import pytest

from domain_browser.config.loader import load_global_config, parse_global_config
from domain_browser.config.model import Credentials, GlobalConfig
from domain_browser.core.exceptions import ConfigError


def _write_config(root: Path, raw) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "global.json").write_text(json.dumps(raw))
    return root


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("DOMAIN_BROWSER_SOURCE_URL", "DOMAIN_BROWSER_USERNAME", "DOMAIN_BROWSER_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


def test_load_global_config_from_directory(tmp_path):
    root = _write_config(
        tmp_path / "config",
        {
            "ui_title": "Test Dashboard",
            "source_url": "https://example.test/sheet",
            "fetch_timeout": 5,
            "page_size_options": [20, 40],
            "dropdown_filters": ["language"],
            "range_filters": ["traffic"],
            "credentials": {"username": "u", "password": "p"},
        },
    )

    cfg = load_global_config(root)

    assert cfg.ui_title == "Test Dashboard"
    assert cfg.source_url == "https://example.test/sheet"
    assert cfg.fetch_timeout == 5.0
    assert cfg.page_size_options == (20, 40)
    assert cfg.dropdown_filters == ["language"]
    assert cfg.range_filters == ["traffic"]
    assert cfg.credentials == Credentials("u", "p")
    assert cfg.identity_field == "domain"


def test_missing_keys_take_defaults(tmp_path):
    cfg = load_global_config(_write_config(tmp_path, {}))

    assert cfg == GlobalConfig()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


def test_invalid_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{not json")

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"credentials": "demo"},
        {"fetch_timeout": "soon"},
        {"page_size_options": [0, 20]},
        {"page_size_options": ["ten"]},
        {"dropdown_filters": "language"},
        {"range_filters": [1, 2]},
    ],
)
def test_invalid_values_raise_config_error(raw):
    with pytest.raises(ConfigError):
        parse_global_config(raw)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DOMAIN_BROWSER_SOURCE_URL", "https://override.test")
    monkeypatch.setenv("DOMAIN_BROWSER_USERNAME", "alice")
    monkeypatch.setenv("DOMAIN_BROWSER_PASSWORD", "hunter2")

    cfg = parse_global_config({"source_url": "https://file.test"})

    assert cfg.source_url == "https://override.test"
    assert cfg.credentials == Credentials("alice", "hunter2")


def test_repo_config_is_valid():
    root = Path(__file__).resolve().parents[3] / "config"

    cfg = load_global_config(root)

    assert cfg.identity_field == "domain"
    assert "spamscore" in cfg.range_filters
