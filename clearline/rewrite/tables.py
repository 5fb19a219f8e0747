"""Fixed lookup tables used by the rewrite rules."""

from __future__ import annotations

VOCABULARY_MAP: dict[str, str] = {
    "lack of clarity": "unclear",
    "not consistently": "inconsistently",
    "at this stage": "based on current information",
    "in order to": "to",
    "due to the fact that": "because",
    "for the purpose of": "to",
    "with regards to": "regarding",
    "at the present time": "currently",
}

FILLER_OPENERS: tuple[str, ...] = (
    "We note that",
    "For awareness",
    "It should be noted",
    "It is important to note",
    "Please be advised",
    "For your information",
)

UK_TO_US: dict[str, str] = {
    "unauthorised": "unauthorized",
    "authorised": "authorized",
    "authorisation": "authorization",
    "authorisations": "authorizations",
    "organisation": "organization",
    "organisations": "organizations",
    "organise": "organize",
    "organised": "organized",
    "organising": "organizing",
    "prioritise": "prioritize",
    "prioritised": "prioritized",
    "prioritising": "prioritizing",
    "standardise": "standardize",
    "standardised": "standardized",
    "standardising": "standardizing",
    "emphasise": "emphasize",
    "emphasised": "emphasized",
    "emphasising": "emphasizing",
    "analyse": "analyze",
    "analysed": "analyzed",
    "analysing": "analyzing",
    "behaviour": "behavior",
    "behaviours": "behaviors",
    "labour": "labor",
    "defence": "defense",
    "catalogue": "catalog",
    "catalogues": "catalogs",
    "modelling": "modeling",
    "modelled": "modeled",
    "programme": "program",
    "programmes": "programs",
}

US_TO_UK: dict[str, str] = {us: uk for uk, us in UK_TO_US.items()}

QUALIFIERS: tuple[str, ...] = (
    "may",
    "could",
    "might",
    "potentially",
    "appears to",
    "seems to",
    "generally",
    "possibly",
)

PARTICIPLE_BASE_VERBS: dict[str, str] = {
    "completed": "complete",
    "implemented": "implement",
    "performed": "perform",
    "reviewed": "review",
    "approved": "approve",
    "identified": "identify",
    "documented": "document",
}

IMPACT_CUES: tuple[str, ...] = ("risk", "impact", "result", "consequence")

# Leading words of a moved subject that are safe to lowercase.
COMMON_DETERMINERS: frozenset[str] = frozenset(
    {"The", "A", "An", "This", "That", "These", "Those", "Some", "All", "Each", "Every"}
)

MIXED_VARIANT_MESSAGE = "Mixed UK/US spelling detected. Select one English variant for consistency."
QUALIFIER_MESSAGE = (
    "Qualification detected ({terms}). Audit-safe default is to keep it unless evidence "
    "supports a stronger statement."
)
VOICE_WITHHELD_MESSAGE = (
    "Active voice not applied (audit-safe): only strict, meaning-preserving patterns are converted."
)
IMPACT_MESSAGE = (
    "Consider adding impact: state the credible consequence (who/what is affected and why it "
    "matters) without overstating certainty."
)

MAX_SUGGESTIONS = 12
MAX_STYLE_EXAMPLES = 3
STYLE_LENGTH_RATIO = 1.5
STYLE_MIN_WORDS = 22
