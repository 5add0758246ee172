from __future__ import annotations

from pathlib import Path

import pytest

from utils.config import load_api_config


@pytest.fixture(autouse=True)
def _no_countries_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("COUNTRIES_API_CONFIG", raising=False)
    monkeypatch.delenv("COUNTRIES_API_URL", raising=False)
    monkeypatch.delenv("COUNTRIES_API_TIMEOUT_SECONDS", raising=False)
    # keep a developer's local .env out of the picture
    monkeypatch.setattr("utils.config.load_dotenv", lambda *a, **k: False)


def _write(tmp_path: Path, text: str) -> str:
    p = tmp_path / "api.yaml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_project_default_config_loads() -> None:
    cfg = load_api_config()
    assert cfg.url.endswith("countries.json")
    assert cfg.timeout_seconds == 30.0


def test_explicit_path(tmp_path: Path) -> None:
    cfg = load_api_config(_write(tmp_path, "api:\n  url: https://example.test/c.json\n  timeout_seconds: 5\n"))
    assert cfg.url == "https://example.test/c.json"
    assert cfg.timeout_seconds == 5.0


def test_env_config_path_and_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COUNTRIES_API_CONFIG", _write(tmp_path, "api:\n  url: https://a.test\n  timeout_seconds: 5\n"))
    monkeypatch.setenv("COUNTRIES_API_URL", "https://b.test")
    monkeypatch.setenv("COUNTRIES_API_TIMEOUT_SECONDS", "2.5")

    cfg = load_api_config()
    assert cfg.url == "https://b.test"
    assert cfg.timeout_seconds == 2.5


@pytest.mark.parametrize(
    "text,match",
    [
        ("api:\n  timeout_seconds: 5\n", "api.url"),
        ("api:\n  url: https://a.test\n", "api.timeout_seconds"),
        ("api:\n  url: https://a.test\n  timeout_seconds: 0\n", "must be > 0"),
        ("api:\n  url: https://a.test\n  timeout_seconds: soon\n", "Invalid"),
        ("", "api.url"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        load_api_config(_write(tmp_path, text))
