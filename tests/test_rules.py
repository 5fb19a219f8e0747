"""Unit tests for the individual rewrite rules and helpers."""

from __future__ import annotations

import pytest

from clearline.rewrite import rules
from clearline.rewrite.engine import dedupe
from clearline.rewrite.protect import protect_tokens
from clearline.rewrite.records import StyleExample
from clearline.rewrite.segment import normalise_spacing, split_paragraphs, split_sentences
from clearline.rewrite.tables import MIXED_VARIANT_MESSAGE, UK_TO_US, US_TO_UK, VOICE_WITHHELD_MESSAGE


def test_protect_tokens_covers_input_without_gaps() -> None:
    """Chunks alternate text and protected spans and rejoin to the input."""
    text = "See https://example.com/a and /etc/hosts or C:\\Temp\\x.txt, mail a.b@c.org, `code here`."
    chunks = protect_tokens(text)

    assert "".join(chunk.value for chunk in chunks) == text
    assert [chunk.value for chunk in chunks if chunk.kind == "protected"] == [
        "https://example.com/a",
        "/etc/hosts",
        "C:\\Temp\\x.txt",
        "a.b@c.org",
        "`code here`",
    ]


def test_protect_tokens_www_and_plain_text() -> None:
    """Bare www links are protected; plain text yields a single chunk."""
    assert [c.kind for c in protect_tokens("go to www.example.org now")] == ["text", "protected", "text"]
    assert [c.kind for c in protect_tokens("nothing special")] == ["text"]
    assert protect_tokens("") == []


def test_protect_tokens_ignores_inner_slashes() -> None:
    """A slash between words such as and/or is not a path."""
    assert [c.kind for c in protect_tokens("review and/or approve")] == ["text"]


def test_split_sentences_is_not_abbreviation_aware() -> None:
    """Abbreviations end a sentence; this is a known limitation."""
    assert split_sentences("Dr. Smith reviewed it. Done") == ["Dr.", "Smith reviewed it.", "Done"]


def test_split_sentences_keeps_protected_spans_whole() -> None:
    """Dots inside URLs and emails do not end a sentence."""
    assert split_sentences("Mail ops@corp.example.com today. Visit https://a.b.com/x!") == [
        "Mail ops@corp.example.com today.",
        "Visit https://a.b.com/x!",
    ]


def test_split_paragraphs_on_blank_lines() -> None:
    """Runs of blank lines, including whitespace-only lines, separate paragraphs."""
    assert split_paragraphs("a\nb\n\n\nc\n  \nd") == ["a\nb", "c", "d"]


def test_normalise_spacing() -> None:
    """Whitespace collapses and punctuation spacing is tightened."""
    assert normalise_spacing("  Hello ,world \t .Yes  ") == "Hello, world. Yes"
    assert normalise_spacing("Mail a.b@c.org ,see www.x.org") == "Mail a.b@c.org, see www.x.org"


@pytest.mark.parametrize(
    ("sentence", "expected", "removed"),
    [
        ("It should be noted the control failed.", "the control failed.", "It should be noted"),
        ("please be advised access lapsed.", "access lapsed.", "Please be advised"),
        ("The team noted it.", "The team noted it.", None),
        ("For awareness, the review was late.", "the review was late.", "For awareness"),
        ("We note thatched roofs leak.", "We note thatched roofs leak.", None),
    ],
)
def test_strip_filler_opener(sentence: str, expected: str, removed: str | None) -> None:
    """Only sentence-initial openers are removed, case-insensitively."""
    assert rules.strip_filler_opener(sentence) == (expected, removed)


def test_replace_vocabulary_skips_protected_spans() -> None:
    """Phrases inside inline code stay as written."""
    sentence, changes = rules.replace_vocabulary("Use `in order to` in order to test.")
    assert sentence == "Use `in order to` to test."
    assert changes == ['Replaced "in order to" with "to"']


def test_standardise_spelling_preserves_case() -> None:
    """All-caps, initial-caps and lowercase matches keep their shape."""
    sentence, changes = rules.standardise_spelling(
        "ORGANISATION, Organisation and organisation.", "en-US"
    )
    assert sentence == "ORGANIZATION, Organization and organization."
    assert changes == ['Standardised spelling: "organisation" → "organization"']


def test_standardise_spelling_round_trip() -> None:
    """The dictionary is symmetric between the two variants."""
    us, _ = rules.standardise_spelling("unauthorised", "en-US")
    uk, _ = rules.standardise_spelling(us, "en-GB")
    assert (us, uk) == ("unauthorized", "unauthorised")
    assert len(US_TO_UK) == len(UK_TO_US)


def test_standardise_spelling_whole_words_only() -> None:
    """Partial-word matches are never rewritten."""
    sentence, changes = rules.standardise_spelling("The disorganised team.", "en-US")
    assert sentence == "The disorganised team."
    assert changes == []


def test_detect_mixed_variant() -> None:
    """Only documents containing both variants are flagged."""
    assert rules.detect_mixed_variant("Unauthorised users analyze data.") == MIXED_VARIANT_MESSAGE
    assert rules.detect_mixed_variant("Unauthorised users analyse data.") is None


def test_find_qualifier_hints_lists_all_terms_once() -> None:
    """One suggestion per sentence names every hedge found."""
    hints = rules.find_qualifier_hints("It appears to work and could possibly fail.")
    assert len(hints) == 1
    assert "(could, appears to, possibly)" in hints[0]
    assert rules.find_qualifier_hints("It works.") == []


def test_passive_patterns_are_ordered() -> None:
    """The negated pattern is evaluated before the affirmative one."""
    assert [pattern.name for pattern in rules.PASSIVE_PATTERNS] == ["negated", "affirmative"]


def test_convert_passive_requires_clear_ownership() -> None:
    """Ownership switched off means no attempt and no suggestion."""
    outcome = rules.convert_passive_to_active(
        "The fix was implemented.", owner="IT", clear_ownership=False, audit_safe_mode=True
    )
    assert outcome == rules.VoiceOutcome(converted=False, sentence="The fix was implemented.")


def test_convert_passive_keeps_protected_agent() -> None:
    """An agent phrase containing a protected span is never dropped."""
    outcome = rules.convert_passive_to_active(
        "The change was approved by ops@corp.com.", owner="IT", clear_ownership=True, audit_safe_mode=True
    )
    assert not outcome.converted
    assert outcome.sentence == "The change was approved by ops@corp.com."
    assert outcome.suggestion == VOICE_WITHHELD_MESSAGE


@pytest.mark.parametrize(
    "sentence",
    [
        "The control was reviewed by management and may be incomplete.",
        "The policy was reviewed by Legal but not approved.",
        "The log was reviewed by staff, possibly late.",
        "The change was approved by a manager who wasn't authorised.",
    ],
)
def test_convert_passive_keeps_agent_tail_that_carries_meaning(sentence: str) -> None:
    """A by-phrase followed by a hedge, negation or clause is never discarded."""
    outcome = rules.convert_passive_to_active(sentence, owner="IT", clear_ownership=True, audit_safe_mode=True)
    assert outcome == rules.VoiceOutcome(converted=False, sentence=sentence, suggestion=VOICE_WITHHELD_MESSAGE)


def test_convert_passive_drops_bare_agent_only() -> None:
    """A plain agent phrase is replaced by the owner."""
    outcome = rules.convert_passive_to_active(
        "The policy was approved by the board.", owner="IT", clear_ownership=True, audit_safe_mode=True
    )
    assert outcome.sentence == "IT approved the policy."


def test_convert_passive_keeps_proper_noun_subject() -> None:
    """Subjects not led by a common determiner are moved verbatim."""
    outcome = rules.convert_passive_to_active(
        "Finance ledgers were reviewed monthly.", owner="Internal Audit", clear_ownership=True, audit_safe_mode=False
    )
    assert outcome.sentence == "Internal Audit reviewed Finance ledgers monthly."


def test_to_base_verb() -> None:
    """Known participles map explicitly; others fall back to stripping -ed."""
    assert rules.to_base_verb("identified") == "identify"
    assert rules.to_base_verb("checked") == "check"


def test_impact_suggestion_respects_cues() -> None:
    """Sentences already stating a consequence get no prompt."""
    assert rules.impact_suggestion("This creates a risk of loss.", "audit-finding") is None
    assert rules.impact_suggestion("Access lapsed.", "audit-finding") is not None
    assert rules.impact_suggestion("Access lapsed.", "email-senior") is None


def test_average_sentence_length_uses_first_three_active() -> None:
    """Only the first three active examples count."""
    examples = [
        StyleExample(id="a", title="", text="One two. Three four.", is_active=True),
        StyleExample(id="b", title="", text="One two three four five six.", is_active=False),
        StyleExample(id="c", title="", text="One two three four.", is_active=True),
        StyleExample(id="d", title="", text="One two three four five six.", is_active=True),
        StyleExample(id="e", title="", text="Word " * 40, is_active=True),
    ]
    assert rules.average_sentence_length(examples) == pytest.approx(4.0)
    assert rules.average_sentence_length([]) == 0.0


def test_style_split_prefers_which_when_no_and() -> None:
    """Without ', and ' the ', which ' split is used."""
    examples = [StyleExample(id="a", title="", text="Short one.", is_active=True)]
    sentence = (
        "The quarterly access review covered every production system in the entire primary data centre, "
        "which exposed several dormant accounts held by former contractors."
    )
    assert rules.apply_style_heuristics(sentence, examples) == (
        "The quarterly access review covered every production system in the entire primary data centre. "
        "This exposed several dormant accounts held by former contractors."
    )


def test_style_split_noop_below_floor() -> None:
    """Sentences at or under the absolute floor are never split."""
    examples = [StyleExample(id="a", title="", text="Short one.", is_active=True)]
    sentence = "Access was granted, and it was logged."
    assert rules.apply_style_heuristics(sentence, examples) == sentence


def test_fix_sentence_casing() -> None:
    """First letter and the pronoun i are uppercased outside protected spans."""
    assert rules.fix_sentence_casing("  -- yes i agree") == "-- Yes I agree"
    assert rules.fix_sentence_casing("`i` is the loop index") == "`i` is the loop index"


def test_ensure_terminal_punctuation() -> None:
    """A full stop is appended only when missing."""
    assert rules.ensure_terminal_punctuation("Done") == "Done."
    assert rules.ensure_terminal_punctuation("Done?") == "Done?"
    assert rules.ensure_terminal_punctuation("") == ""


def test_dedupe_preserves_first_seen_order() -> None:
    """Exact duplicates after trimming are removed, order kept."""
    assert dedupe(["b", "a ", " b", "", "a", "c"]) == ["b", "a", "c"]
