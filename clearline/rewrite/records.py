"""Plain records passed into and out of the rewrite engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from clearline.types import ChangeType, DocumentType, EnglishVariant


@dataclass(frozen=True, slots=True)
class RewriteOptions:
    """User-tunable switches for one rewrite call.

    ``calm_tone`` is carried for the caller's benefit; no rule reads it yet.
    """

    active_voice: bool
    clear_ownership: bool
    sharper_impact: bool
    calm_tone: bool
    concise: bool
    audit_safe_mode: bool
    document_type: DocumentType
    english_variant: EnglishVariant
    standardise_spelling: bool
    owner: str | None


@dataclass(slots=True)
class StyleExample:
    """A user-curated reference text used to calibrate sentence length."""

    id: str
    title: str
    text: str
    tags: list[str] = field(default_factory=list)
    is_active: bool = False


@dataclass(frozen=True, slots=True)
class Change:
    """One applied edit, recorded in order of application."""

    type: ChangeType
    description: str


@dataclass
class RewriteResult:
    """Output of the rewrite engine."""

    rewritten_text: str
    change_log: list[Change]
    suggestions: list[str]
