"""Shared typing helpers."""

from typing import Literal, get_args

DocumentType = Literal[
    "audit-finding",
    "executive-summary",
    "status-update",
    "email-senior",
    "risk-description",
]
EnglishVariant = Literal["en-US", "en-GB"]
ChangeType = Literal["concision", "clarity", "spelling", "voice"]
Theme = Literal["light", "dark", "system"]

DOCUMENT_TYPES: tuple[str, ...] = get_args(DocumentType)
THEMES: tuple[str, ...] = get_args(Theme)
