"""Rewrite engine coordinating the per-sentence rules over a whole document."""

from __future__ import annotations

from typing import Iterable, Sequence

from clearline.logging_utils import get_logger
from clearline.rewrite import rules
from clearline.rewrite.records import Change, RewriteOptions, RewriteResult, StyleExample
from clearline.rewrite.segment import normalise_spacing, split_paragraphs, split_sentences
from clearline.rewrite.tables import MAX_SUGGESTIONS

logger = get_logger(__name__)


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop blank and repeated entries, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        key = item.strip()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(key)
    return result


class RewriteEngine:
    """Apply the rewrite rules to a document.

    Rules run per sentence in a fixed order:

    1. filler-opener stripping (``concise``)
    2. vocabulary substitution
    3. spelling standardisation (``standardise_spelling``)
    4. qualifier hints
    5. passive-to-active conversion (``active_voice``)
    6. impact suggestions (``sharper_impact``)
    7. style-example sentence splitting
    8. casing, terminal punctuation and spacing

    The engine holds no state between calls.
    """

    def rewrite(
        self,
        text: str,
        options: RewriteOptions,
        style_examples: Sequence[StyleExample] = (),
    ) -> RewriteResult:
        """Rewrite ``text`` and report what changed and what could be improved."""
        change_log: list[Change] = []
        suggestions: list[str] = []

        mixed = rules.detect_mixed_variant(text)
        if mixed:
            suggestions.append(mixed)

        blocks = [
            self._rewrite_block(block, options, style_examples, change_log, suggestions)
            for block in split_paragraphs(text)
        ]
        result = RewriteResult(
            rewritten_text="\n\n".join(blocks).strip(),
            change_log=change_log,
            suggestions=dedupe(suggestions)[:MAX_SUGGESTIONS],
        )

        logger.debug(
            "Rewrite completed | paragraphs=%d changes=%d suggestions=%d text_len=%d",
            len(blocks),
            len(result.change_log),
            len(result.suggestions),
            len(text),
        )
        return result

    def _rewrite_block(
        self,
        block: str,
        options: RewriteOptions,
        style_examples: Sequence[StyleExample],
        change_log: list[Change],
        suggestions: list[str],
    ) -> str:
        if not block.strip():
            return block

        sentences = split_sentences(normalise_spacing(block))
        rewritten = [
            self._rewrite_sentence(sentence, options, style_examples, change_log, suggestions)
            for sentence in sentences
        ]
        return " ".join(rewritten).strip()

    def _rewrite_sentence(
        self,
        sentence: str,
        options: RewriteOptions,
        style_examples: Sequence[StyleExample],
        change_log: list[Change],
        suggestions: list[str],
    ) -> str:
        if options.concise:
            sentence, removed = rules.strip_filler_opener(sentence)
            if removed:
                change_log.append(Change("concision", f'Removed filler opener: "{removed}"'))

        sentence, replaced = rules.replace_vocabulary(sentence)
        change_log.extend(Change("clarity", description) for description in replaced)

        if options.standardise_spelling:
            sentence, respelled = rules.standardise_spelling(sentence, options.english_variant)
            change_log.extend(Change("spelling", description) for description in respelled)

        suggestions.extend(rules.find_qualifier_hints(sentence))

        if options.active_voice:
            outcome = rules.convert_passive_to_active(
                sentence,
                owner=options.owner,
                clear_ownership=options.clear_ownership,
                audit_safe_mode=options.audit_safe_mode,
            )
            if outcome.converted:
                sentence = outcome.sentence
                change_log.append(Change("voice", "Converted passive to active voice (safe rule)"))
            elif outcome.suggestion:
                suggestions.append(outcome.suggestion)

        if options.sharper_impact:
            hint = rules.impact_suggestion(sentence, options.document_type)
            if hint:
                suggestions.append(hint)

        if style_examples:
            sentence = rules.apply_style_heuristics(sentence, style_examples)

        sentence = rules.fix_sentence_casing(sentence)
        sentence = rules.ensure_terminal_punctuation(sentence)
        return normalise_spacing(sentence)


_engine = RewriteEngine()


def rewrite(
    text: str,
    options: RewriteOptions,
    style_examples: Sequence[StyleExample] = (),
) -> RewriteResult:
    """Module-level entry point using a shared, stateless engine."""
    return _engine.rewrite(text, options, style_examples)
