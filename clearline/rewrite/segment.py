"""Paragraph and sentence segmentation plus spacing normalisation.

Sentence boundaries are lexical: a run of text followed by ``.``, ``!`` or
``?``. Abbreviations such as "Dr." therefore end a sentence. Protected spans
(URLs, emails, paths, inline code) are never split and never respaced.
"""

from __future__ import annotations

import re

from clearline.rewrite.protect import map_unprotected, protect_tokens

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_PIECE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+")
_HORIZONTAL_SPACE = re.compile(r"[ \t]+")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.;:!?])")
_MISSING_SPACE_AFTER_PUNCT = re.compile(r"([,.;:!?])([A-Za-z])")
_ANY_SPACE = re.compile(r"\s+")


def split_paragraphs(text: str) -> list[str]:
    """Split on one or more blank lines after normalising line endings."""
    normalised = text.replace("\r\n", "\n").replace("\r", "\n")
    return _PARAGRAPH_BREAK.split(normalised)


def split_sentences(text: str) -> list[str]:
    """Split a paragraph into trimmed, non-empty sentences."""
    sentences: list[str] = []
    current = ""
    for chunk in protect_tokens(text):
        if chunk.kind == "protected":
            current += chunk.value
            continue
        for piece in _SENTENCE_PIECE.findall(chunk.value):
            current += piece
            if piece.rstrip()[-1:] in (".", "!", "?"):
                sentences.append(current)
                current = ""
    sentences.append(current)
    return [sentence.strip() for sentence in sentences if sentence.strip()]


def _respace(text: str) -> str:
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _MISSING_SPACE_AFTER_PUNCT.sub(r"\1 \2", text)
    return _ANY_SPACE.sub(" ", text)


def normalise_spacing(text: str) -> str:
    """Collapse whitespace, tighten punctuation spacing and trim."""
    return map_unprotected(text, _respace).strip()


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""
    return len(text.split())
