"""Rewriting service combining the style store and the rewrite engine."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Sequence

from clearline.logging_utils import get_logger
from clearline.rewrite import RewriteEngine, RewriteOptions, RewriteResult, StyleExample
from clearline.store import StyleStore

logger = get_logger(__name__)


@dataclass
class TimedRewrite:
    """Structured response returned by the rewriting service."""

    result: RewriteResult
    latency_ms: float


class RewritingService:
    """Service feeding stored style examples into the rewrite engine."""

    def __init__(self, *, store: StyleStore, engine: RewriteEngine | None = None) -> None:
        self._store = store
        self._engine = engine or RewriteEngine()

    def rewrite(
        self,
        *,
        text: str,
        options: RewriteOptions,
        style_examples: Sequence[StyleExample] | None = None,
    ) -> TimedRewrite:
        """Rewrite ``text``, defaulting to the store's active style examples."""
        if style_examples is None:
            style_examples = self._store.active_examples()

        start = time.perf_counter()
        result = self._engine.rewrite(text, options, style_examples)
        latency_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Rewrite service call | document_type=%s variant=%s examples=%d latency_ms=%.2f",
            options.document_type,
            options.english_variant,
            len(style_examples),
            latency_ms,
        )
        return TimedRewrite(result=result, latency_ms=latency_ms)
