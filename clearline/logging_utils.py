"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(*, level: str = "INFO") -> None:
    """Configure application-wide logging."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)


def content_preview(text: str, *, enabled: bool, limit: int = 200) -> str:
    """Return a log suffix quoting the start of ``text`` when content logging is on."""
    if not enabled:
        return ""
    return f" preview={text[:limit]!r}"
