from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from utils.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_setup_logging_writes_json_lines_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "countries.jsonl"
    setup_logging(level="INFO", log_file=str(log_file), json_console=True)

    get_logger(component="test").info("countries_refreshed", count=3)
    for h in logging.getLogger().handlers:
        h.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["event"] == "countries_refreshed"
    assert payload["component"] == "test"
    assert payload["count"] == 3
    assert payload["level"] == "info"
    assert "timestamp" in payload


def test_setup_logging_filters_below_level(tmp_path: Path) -> None:
    log_file = tmp_path / "countries.jsonl"
    setup_logging(level="WARNING", log_file=str(log_file))

    get_logger().info("dropped")
    get_logger().warning("kept")
    for h in logging.getLogger().handlers:
        h.flush()

    events = [json.loads(x)["event"] for x in log_file.read_text(encoding="utf-8").splitlines()]
    assert events == ["kept"]
    assert logging.getLogger("httpx").level == logging.WARNING


def test_no_file_handler_without_log_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_FILE", raising=False)
    setup_logging(level="INFO")

    assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)
