"""Per-sentence rewrite rules.

Each rule is a plain function over a single sentence. Rules that edit text
return the new sentence together with human-readable change descriptions;
detection rules return suggestion strings and never touch the sentence.

Rules that rewrite free text go through :func:`map_unprotected` so that
URLs, emails, paths and inline code survive byte-for-byte.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from clearline.rewrite.protect import map_unprotected, protect_tokens
from clearline.rewrite.records import StyleExample
from clearline.rewrite.segment import count_words, split_sentences
from clearline.rewrite.tables import (
    COMMON_DETERMINERS,
    FILLER_OPENERS,
    IMPACT_CUES,
    IMPACT_MESSAGE,
    MAX_STYLE_EXAMPLES,
    MIXED_VARIANT_MESSAGE,
    PARTICIPLE_BASE_VERBS,
    QUALIFIER_MESSAGE,
    QUALIFIERS,
    STYLE_LENGTH_RATIO,
    STYLE_MIN_WORDS,
    UK_TO_US,
    US_TO_UK,
    VOCABULARY_MAP,
    VOICE_WITHHELD_MESSAGE,
)
from clearline.types import DocumentType, EnglishVariant

_FILLER_PATTERNS = [
    (opener, re.compile(rf"^{re.escape(opener)}\b[\s,:;]*", re.IGNORECASE)) for opener in FILLER_OPENERS
]
_VOCABULARY_PATTERNS = [
    (source, target, re.compile(re.escape(source), re.IGNORECASE))
    for source, target in VOCABULARY_MAP.items()
]


def _word_patterns(terms: Sequence[str]) -> list[tuple[str, re.Pattern[str]]]:
    return [(term, re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)) for term in terms]


_UK_PATTERNS = _word_patterns(list(UK_TO_US))
_US_PATTERNS = _word_patterns(list(US_TO_UK))


def strip_filler_opener(sentence: str) -> tuple[str, str | None]:
    """Remove the first matching filler opener from the start of ``sentence``.

    Returns:
        The (possibly) shortened sentence and the opener removed, if any.
    """
    for opener, pattern in _FILLER_PATTERNS:
        if pattern.match(sentence):
            return pattern.sub("", sentence, count=1), opener
    return sentence, None


def replace_vocabulary(sentence: str) -> tuple[str, list[str]]:
    """Swap wordy phrases for their plain equivalents.

    One change description is produced per phrase, however often it occurs.
    """
    changes: list[str] = []
    for source, target, pattern in _VOCABULARY_PATTERNS:
        hits = 0

        def _swap(chunk: str) -> str:
            nonlocal hits
            replaced, count = pattern.subn(target, chunk)
            hits += count
            return replaced

        sentence = map_unprotected(sentence, _swap)
        if hits:
            changes.append(f'Replaced "{source}" with "{target}"')
    return sentence, changes


def match_case(original: str, replacement: str) -> str:
    """Carry the capitalisation pattern of ``original`` over to ``replacement``."""
    if original.upper() == original:
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def standardise_spelling(sentence: str, variant: EnglishVariant) -> tuple[str, list[str]]:
    """Rewrite UK/US spelling variants to ``variant``, whole words only.

    Args:
        sentence: Sentence to rewrite.
        variant: ``"en-US"`` rewrites UK forms, ``"en-GB"`` rewrites US forms.

    Returns:
        The rewritten sentence and one change description per distinct term.
    """
    mapping, patterns = (UK_TO_US, _UK_PATTERNS) if variant == "en-US" else (US_TO_UK, _US_PATTERNS)
    replaced: list[str] = []

    def _rewrite_chunk(chunk: str) -> str:
        for term, pattern in patterns:
            target = mapping[term]
            chunk, count = pattern.subn(lambda m: match_case(m.group(0), target), chunk)
            if count and term not in replaced:
                replaced.append(term)
        return chunk

    sentence = map_unprotected(sentence, _rewrite_chunk)
    return sentence, [f'Standardised spelling: "{term}" → "{mapping[term]}"' for term in replaced]


def detect_mixed_variant(text: str) -> str | None:
    """Flag documents that use both UK and US spellings from the dictionary."""
    has_uk = any(pattern.search(text) for _, pattern in _UK_PATTERNS)
    has_us = any(pattern.search(text) for _, pattern in _US_PATTERNS)
    return MIXED_VARIANT_MESSAGE if has_uk and has_us else None


def find_qualifier_hints(sentence: str) -> list[str]:
    """Report hedging terms; the sentence itself is left alone."""
    lower = sentence.lower()
    found = [term for term in QUALIFIERS if term in lower]
    if not found:
        return []
    return [QUALIFIER_MESSAGE.format(terms=", ".join(found))]


@dataclass(frozen=True, slots=True)
class VoiceOutcome:
    """Result of attempting a passive-to-active conversion."""

    converted: bool
    sentence: str
    suggestion: str | None = None


@dataclass(frozen=True, slots=True)
class PassivePattern:
    """A strict passive construction and the active sentence it maps to."""

    name: str
    regex: re.Pattern[str]
    build: Callable[[re.Match[str], str], str]


_PARTICIPLES = "|".join(PARTICIPLE_BASE_VERBS)
_BY_AGENT = re.compile(r"^by\s+.+$", re.IGNORECASE | re.DOTALL)


def to_base_verb(participle: str) -> str:
    """Map a recognised past participle to its base verb."""
    return PARTICIPLE_BASE_VERBS.get(participle, re.sub(r"ed$", "", participle))


def _subject(match: re.Match[str]) -> str:
    subject = match.group(1).strip()
    first_word = subject.split(" ", 1)[0]
    if first_word in COMMON_DETERMINERS:
        return subject[:1].lower() + subject[1:]
    return subject


def _tail(match: re.Match[str]) -> str:
    tail = (match.group(4) or "").strip()
    return "" if _BY_AGENT.match(tail) else tail


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _build_negated(match: re.Match[str], owner: str) -> str:
    base = to_base_verb(match.group(3).lower())
    return _join(owner, "did not", base, _subject(match), _tail(match))


def _build_affirmative(match: re.Match[str], owner: str) -> str:
    return _join(owner, match.group(3).lower(), _subject(match), _tail(match))


# Order matters: the negated form must be tried before the affirmative one.
PASSIVE_PATTERNS: tuple[PassivePattern, ...] = (
    PassivePattern(
        name="negated",
        regex=re.compile(
            rf"^(.+?)\s+(was|were)\s+not\s+({_PARTICIPLES})\b(.*)$", re.IGNORECASE | re.DOTALL
        ),
        build=_build_negated,
    ),
    PassivePattern(
        name="affirmative",
        regex=re.compile(rf"^(.+?)\s+(was|were)\s+({_PARTICIPLES})\b(.*)$", re.IGNORECASE | re.DOTALL),
        build=_build_affirmative,
    ),
)


_AGENT_NEGATION = re.compile(r"\bnot\b|n't\b", re.IGNORECASE)
_AGENT_CONTINUATION = re.compile(r"[,;:]|\b(?:and|but|or|which|while|although)\b", re.IGNORECASE)


def _drops_meaning(match: re.Match[str]) -> bool:
    """Whether discarding the ``by ...`` tail would lose more than the agent.

    The tail is only safe to drop when it is a bare agent phrase: no protected
    span, no hedge, no negation and no following clause.
    """
    tail = (match.group(4) or "").strip()
    if not _BY_AGENT.match(tail):
        return False
    if any(chunk.kind == "protected" for chunk in protect_tokens(tail)):
        return True
    lower = tail.lower()
    if any(term in lower for term in QUALIFIERS):
        return True
    return bool(_AGENT_NEGATION.search(tail) or _AGENT_CONTINUATION.search(tail))


def convert_passive_to_active(
    sentence: str,
    *,
    owner: str | None,
    clear_ownership: bool,
    audit_safe_mode: bool,
) -> VoiceOutcome:
    """Convert a strict passive construction to active voice, naming ``owner``.

    Only a closed set of participles is recognised, and negation is only
    produced when the input already says "not". Without an owner or with
    ownership switched off nothing is attempted and nothing is suggested.
    """
    owner = (owner or "").strip()
    if not owner or not clear_ownership:
        return VoiceOutcome(converted=False, sentence=sentence)

    for pattern in PASSIVE_PATTERNS:
        match = pattern.regex.match(sentence)
        if match is None:
            continue
        if _drops_meaning(match):
            break
        return VoiceOutcome(converted=True, sentence=pattern.build(match, owner))

    if audit_safe_mode:
        return VoiceOutcome(converted=False, sentence=sentence, suggestion=VOICE_WITHHELD_MESSAGE)
    return VoiceOutcome(converted=False, sentence=sentence)


def impact_suggestion(sentence: str, document_type: DocumentType) -> str | None:
    """Prompt for a stated consequence in audit findings that lack one."""
    if document_type != "audit-finding":
        return None
    lower = sentence.lower()
    if any(cue in lower for cue in IMPACT_CUES):
        return None
    return IMPACT_MESSAGE


def average_sentence_length(examples: Sequence[StyleExample]) -> float:
    """Mean of each active example's mean sentence word count."""
    active = [example for example in examples if example.is_active][:MAX_STYLE_EXAMPLES]
    if not active:
        return 0.0
    total = 0.0
    for example in active:
        sentences = split_sentences(example.text)
        total += sum(count_words(s) for s in sentences) / max(1, len(sentences))
    return total / len(active)


_STYLE_SPLITS = (
    (re.compile(r", and ", re.IGNORECASE), ". "),
    (re.compile(r", which ", re.IGNORECASE), ". This "),
)


def _split_first_unprotected(sentence: str, pattern: re.Pattern[str], replacement: str) -> str | None:
    chunks = protect_tokens(sentence)
    for index, chunk in enumerate(chunks):
        if chunk.kind == "text" and pattern.search(chunk.value):
            head = "".join(c.value for c in chunks[:index])
            rest = "".join(c.value for c in chunks[index + 1 :])
            return head + pattern.sub(replacement, chunk.value, count=1) + rest
    return None


def _capitalise_after_breaks(sentence: str) -> str:
    return map_unprotected(
        sentence, lambda chunk: re.sub(r"([.!?] )([a-z])", lambda m: m.group(1) + m.group(2).upper(), chunk)
    )


def apply_style_heuristics(sentence: str, examples: Sequence[StyleExample]) -> str:
    """Split an overlong sentence once, calibrated against the style examples."""
    average = average_sentence_length(examples)
    words = count_words(sentence)
    if average <= 0 or words <= average * STYLE_LENGTH_RATIO or words <= STYLE_MIN_WORDS:
        return sentence

    for pattern, replacement in _STYLE_SPLITS:
        split = _split_first_unprotected(sentence, pattern, replacement)
        if split is not None:
            return _capitalise_after_breaks(split)
    return sentence


def fix_sentence_casing(sentence: str) -> str:
    """Uppercase the first letter and the standalone pronoun "i".

    The first letter is left alone when it sits inside a protected span.
    """
    sentence = sentence.strip()
    offset = 0
    for chunk in protect_tokens(sentence):
        if chunk.kind == "text":
            letter = re.search(r"[A-Za-z]", chunk.value)
            if letter:
                index = offset + letter.start()
                sentence = sentence[:index] + sentence[index].upper() + sentence[index + 1 :]
                break
        elif re.search(r"[A-Za-z]", chunk.value):
            break
        offset += len(chunk.value)
    return map_unprotected(sentence, lambda chunk: re.sub(r"\bi\b", "I", chunk))


def ensure_terminal_punctuation(sentence: str) -> str:
    """Append a full stop unless the sentence already ends in ``.``, ``!`` or ``?``."""
    sentence = sentence.strip()
    if not sentence or sentence[-1] in ".!?":
        return sentence
    return f"{sentence}."
