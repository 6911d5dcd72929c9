"""Logging and runtime utility helpers."""

from __future__ import annotations

from collections import OrderedDict
import logging
from pathlib import Path
from typing import Any

SESSION_LOGGER = "knowledge_keepers.session"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
    detach_session_log_files()
    if log_file is not None:
        attach_session_log_file(log_file)


def attach_session_log_file(path: str | Path) -> logging.FileHandler:
    """Append every session event to ``path`` so a played game leaves a log behind.

    The file is opened in append mode; earlier sessions are kept.
    """
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger(SESSION_LOGGER).addHandler(handler)
    return handler


def detach_session_log_files() -> None:
    session_logger = logging.getLogger(SESSION_LOGGER)
    for handler in list(session_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            session_logger.removeHandler(handler)
            handler.close()


def _format_context_value(value: Any) -> str:
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def _format_mode_label(mode: str) -> str:
    words = mode.replace("-", " ").split()
    return " ".join(word.title() for word in words)


def log_key_values(
    logger_name: str,
    values: dict[str, Any],
    *,
    prefix: str | None = None,
    key_value_separator: str = "=",
    level: int = logging.INFO,
) -> None:
    logger = logging.getLogger(logger_name)
    if not logger.isEnabledFor(level):
        return

    ordered = OrderedDict((key, value) for key, value in values.items() if value is not None)
    segments: list[str] = []
    if prefix:
        segments.append(str(prefix))

    for key, value in ordered.items():
        value_text = _format_context_value(value)
        if key_value_separator == ":":
            segments.append(f"{key}: {value_text}")
        else:
            segments.append(f"{key}{key_value_separator}{value_text}")

    logger.log(level, "\t".join(segments))


def log_session_event(event: str, **values: Any) -> None:
    """Record one game event (level up, hit, victory...) on the session logger."""
    log_key_values(SESSION_LOGGER, values, prefix=event)


def log_run_context(mode: str, context: dict[str, Any]) -> None:
    mode_label = _format_mode_label(mode)
    titled_context = OrderedDict(
        (key.replace("_", " ").title(), value) for key, value in context.items() if value is not None
    )
    log_key_values(
        "knowledge_keepers.run",
        dict(titled_context),
        prefix=mode_label,
        key_value_separator=":",
    )
