from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import structlog


def _build_handlers(lvl: str, file_path: str | None) -> list[logging.Handler]:
    formatter = logging.Formatter("%(message)s")
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))
    for h in handlers:
        h.setLevel(lvl)
        h.setFormatter(formatter)
    return handlers


def setup_logging(
    *,
    level: str | None = None,
    log_file: str | None = None,
    json_console: bool | None = None,
) -> None:
    """
    Structured logging for the read API and scripts.

    - LOG_LEVEL (default INFO)
    - LOG_FILE: optional JSON-lines file; nothing is written to disk unless set
    - LOG_FORMAT=console switches to the human-readable renderer (scripts)
    """
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    file_path = log_file or os.getenv("LOG_FILE")
    if json_console is None:
        json_console = os.getenv("LOG_FORMAT", "json").lower() != "console"

    root = logging.getLogger()
    root.setLevel(lvl)
    root.handlers.clear()
    for h in _build_handlers(lvl, file_path):
        root.addHandler(h)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    renderer: Any = structlog.processors.JSONRenderer() if json_console else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, lvl, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(**kwargs: Any):
    # Lazy proxy: module-level loggers pick up later configure() calls.
    return structlog.get_logger(**kwargs)
