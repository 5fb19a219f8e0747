"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from clearline.rewrite.records import Change, RewriteOptions, StyleExample
from clearline.store import AppSettings, DefaultToggles
from clearline.types import ChangeType, DocumentType, EnglishVariant, Theme


class HealthResponse(BaseModel):
    """Response model for /health."""

    status: str
    environment: str
    version: str


class RewriteOptionsModel(BaseModel):
    """Rewrite switches; every field except ``owner`` must be supplied."""

    active_voice: bool
    clear_ownership: bool
    sharper_impact: bool
    calm_tone: bool
    concise: bool
    audit_safe_mode: bool
    owner: str | None = Field(default=None, description="Accountable party named in active rewrites.")
    document_type: DocumentType
    english_variant: EnglishVariant
    standardise_spelling: bool

    def to_options(self) -> RewriteOptions:
        return RewriteOptions(**self.model_dump())


class StyleExampleModel(BaseModel):
    """A style example as exchanged with the client."""

    id: str = Field(..., min_length=1)
    title: str = Field(default="", max_length=120)
    text: str
    tags: list[str] = Field(default_factory=list)
    is_active: bool = False

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value: list[str]) -> list[str]:
        """Trim tags and drop empty ones."""
        return [tag.strip() for tag in value if tag.strip()]

    def to_example(self) -> StyleExample:
        return StyleExample(**self.model_dump())

    @classmethod
    def from_example(cls, example: StyleExample) -> "StyleExampleModel":
        return cls(
            id=example.id,
            title=example.title,
            text=example.text,
            tags=list(example.tags),
            is_active=example.is_active,
        )


class StyleExampleUpsert(BaseModel):
    """Body for PUT /v1/style-examples/{id}; the id comes from the path."""

    title: str = Field(default="", max_length=120)
    text: str
    tags: list[str] = Field(default_factory=list)
    is_active: bool = False


class RewriteRequest(BaseModel):
    """Request payload for /v1/text/rewrite."""

    text: str = Field(..., description="Text to rewrite. May be empty.")
    options: RewriteOptionsModel
    style_examples: list[StyleExampleModel] | None = Field(
        default=None,
        description="Style examples to calibrate against; defaults to the stored active examples.",
    )


class ChangeModel(BaseModel):
    """One entry of the change log."""

    type: ChangeType
    description: str

    @classmethod
    def from_change(cls, change: Change) -> "ChangeModel":
        return cls(type=change.type, description=change.description)


class RewriteResponse(BaseModel):
    """Response payload for rewrite calls."""

    rewritten_text: str
    change_log: list[ChangeModel]
    suggestions: list[str]
    latency_ms: float


class DefaultTogglesModel(BaseModel):
    active_voice: bool = True
    clear_ownership: bool = True
    sharper_impact: bool = True
    calm_tone: bool = True
    concise: bool = True


class SettingsModel(BaseModel):
    """Persisted user preferences."""

    theme: Theme = "system"
    default_doc_type: DocumentType = "audit-finding"
    english_variant: EnglishVariant = "en-US"
    standardise_spelling: bool = True
    audit_safe_mode: bool = True
    default_toggles: DefaultTogglesModel = Field(default_factory=DefaultTogglesModel)

    def to_settings(self) -> AppSettings:
        data = self.model_dump()
        return AppSettings(**{**data, "default_toggles": DefaultToggles(**data["default_toggles"])})

    @classmethod
    def from_settings(cls, app_settings: AppSettings) -> "SettingsModel":
        return cls(
            theme=app_settings.theme,
            default_doc_type=app_settings.default_doc_type,
            english_variant=app_settings.english_variant,
            standardise_spelling=app_settings.standardise_spelling,
            audit_safe_mode=app_settings.audit_safe_mode,
            default_toggles=DefaultTogglesModel(
                active_voice=app_settings.default_toggles.active_voice,
                clear_ownership=app_settings.default_toggles.clear_ownership,
                sharper_impact=app_settings.default_toggles.sharper_impact,
                calm_tone=app_settings.default_toggles.calm_tone,
                concise=app_settings.default_toggles.concise,
            ),
        )


class ImportResponse(BaseModel):
    """Summary of an import call."""

    imported_examples: int
