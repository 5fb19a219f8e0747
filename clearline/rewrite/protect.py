"""Masking of substrings that rewrite rules must never touch."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Literal

ChunkKind = Literal["text", "protected"]

# Alternation order is the priority order: first alternative wins at a position.
PROTECTED_PATTERN = re.compile(
    r"(\bhttps?://\S+\b)"  # http(s) URLs
    r"|(\bwww\.\S+\b)"  # bare www. URLs
    r"|(\b[\w.+-]+@[\w-]+\.[\w.-]+\b)"  # email addresses
    r"|(`[^`]*`)"  # inline code
    r"|(\b[A-Za-z]:\\\S+\b)"  # Windows drive paths
    r"|(\B/\S+\b)"  # POSIX absolute paths
)


@dataclass(frozen=True, slots=True)
class ProtectedChunk:
    """A slice of the input, either free text or a protected span."""

    kind: ChunkKind
    value: str


def protect_tokens(text: str) -> list[ProtectedChunk]:
    """Split ``text`` into alternating free-text and protected chunks.

    The chunks cover the input with no gaps or overlaps, so joining their
    values reproduces ``text`` exactly.
    """
    chunks: list[ProtectedChunk] = []
    last = 0
    for match in PROTECTED_PATTERN.finditer(text):
        start, end = match.span()
        if start > last:
            chunks.append(ProtectedChunk("text", text[last:start]))
        chunks.append(ProtectedChunk("protected", match.group(0)))
        last = end
    if last < len(text):
        chunks.append(ProtectedChunk("text", text[last:]))
    return chunks


def map_unprotected(text: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to the free-text chunks only and reassemble."""
    return "".join(
        chunk.value if chunk.kind == "protected" else transform(chunk.value)
        for chunk in protect_tokens(text)
    )
