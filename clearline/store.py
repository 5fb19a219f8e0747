"""JSON-file persistence for style examples and application settings."""

from __future__ import annotations

import json
import threading
import uuid
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from clearline.logging_utils import get_logger
from clearline.rewrite.records import StyleExample
from clearline.types import DOCUMENT_TYPES, THEMES, DocumentType, EnglishVariant, Theme

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 120


class StoreError(RuntimeError):
    """Base class for persistence failures surfaced to the shell."""


class StyleExampleNotFoundError(StoreError, KeyError):
    """Raised when a style example id does not exist."""


class ImportPayloadError(StoreError, ValueError):
    """Raised when an import payload cannot be parsed."""


@dataclass
class DefaultToggles:
    """Rewrite switches pre-selected for new documents."""

    active_voice: bool = True
    clear_ownership: bool = True
    sharper_impact: bool = True
    calm_tone: bool = True
    concise: bool = True


@dataclass
class AppSettings:
    """User preferences persisted alongside the style examples."""

    theme: Theme = "system"
    default_doc_type: DocumentType = "audit-finding"
    english_variant: EnglishVariant = "en-US"
    standardise_spelling: bool = True
    audit_safe_mode: bool = True
    default_toggles: DefaultToggles = field(default_factory=DefaultToggles)


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    """Return the first present key, accepting snake_case or camelCase exports."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _as_bool(value: Any, default: bool) -> bool:
    return default if value is None else bool(value)


def coerce_example(raw: dict[str, Any]) -> StyleExample:
    """Build a style example from an untrusted import record."""
    raw_id = raw.get("id")
    tags = raw.get("tags")
    return StyleExample(
        id=str(raw_id) if raw_id is not None else uuid.uuid4().hex,
        title=str(raw.get("title") or "")[:MAX_TITLE_LENGTH],
        text=str(raw.get("text") or ""),
        tags=[str(tag).strip() for tag in tags if str(tag).strip()] if isinstance(tags, list) else [],
        is_active=bool(_pick(raw, "is_active", "isActive")),
    )


def coerce_settings(raw: dict[str, Any]) -> AppSettings:
    """Merge an untrusted settings record onto the defaults, field by field."""
    theme = raw.get("theme")
    doc_type = _pick(raw, "default_doc_type", "defaultDocType")
    toggles = _pick(raw, "default_toggles", "defaultToggles")
    if not isinstance(toggles, dict):
        toggles = {}

    return AppSettings(
        theme=theme if theme in THEMES else "system",
        default_doc_type=doc_type if doc_type in DOCUMENT_TYPES else "audit-finding",
        english_variant="en-GB" if _pick(raw, "english_variant", "englishVariant") == "en-GB" else "en-US",
        standardise_spelling=_as_bool(_pick(raw, "standardise_spelling", "standardiseSpelling"), True),
        audit_safe_mode=_as_bool(_pick(raw, "audit_safe_mode", "auditSafeMode"), True),
        default_toggles=DefaultToggles(
            active_voice=_as_bool(_pick(toggles, "active_voice", "activeVoice"), True),
            clear_ownership=_as_bool(_pick(toggles, "clear_ownership", "clearOwnership"), True),
            sharper_impact=_as_bool(_pick(toggles, "sharper_impact", "sharperImpact"), True),
            calm_tone=_as_bool(_pick(toggles, "calm_tone", "calmTone"), True),
            concise=_as_bool(toggles.get("concise"), True),
        ),
    )


class StyleStore:
    """Loads and persists style examples and settings in a single JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {"examples": [], "settings": None}
        with self._path.open("r", encoding="utf-8") as file:
            return json.load(file)

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def list_examples(self) -> list[StyleExample]:
        with self._lock:
            return [coerce_example(raw) for raw in self._read().get("examples") or []]

    def active_examples(self) -> list[StyleExample]:
        """Snapshot of the examples currently marked active."""
        return [example for example in self.list_examples() if example.is_active]

    def save_example(self, example: StyleExample) -> StyleExample:
        with self._lock:
            data = self._read()
            examples = [raw for raw in data.get("examples") or [] if str(raw.get("id")) != example.id]
            examples.append(asdict(example))
            data["examples"] = examples
            self._write(data)
        return example

    def delete_example(self, example_id: str) -> None:
        with self._lock:
            data = self._read()
            examples = data.get("examples") or []
            remaining = [raw for raw in examples if str(raw.get("id")) != example_id]
            if len(remaining) == len(examples):
                raise StyleExampleNotFoundError(example_id)
            data["examples"] = remaining
            self._write(data)

    def get_settings(self) -> AppSettings | None:
        with self._lock:
            raw = self._read().get("settings")
        return coerce_settings(raw) if isinstance(raw, dict) else None

    def save_settings(self, app_settings: AppSettings) -> AppSettings:
        with self._lock:
            data = self._read()
            data["settings"] = asdict(app_settings)
            self._write(data)
        return app_settings

    def export_all(self) -> str:
        """Serialise every example and the settings as indented JSON."""
        app_settings = self.get_settings()
        payload = {
            "examples": [asdict(example) for example in self.list_examples()],
            "settings": asdict(app_settings) if app_settings else None,
        }
        return json.dumps(payload, indent=2)

    def import_all(self, payload: str) -> int:
        """Upsert examples and merge settings from an export document.

        Returns:
            Number of style examples imported.
        """
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ImportPayloadError(f"Import payload is not valid JSON: {exc.msg}") from exc
        if not isinstance(data, dict):
            raise ImportPayloadError("Import payload must be a JSON object.")

        imported = 0
        raw_examples = data.get("examples")
        if isinstance(raw_examples, list):
            for raw in raw_examples:
                if not isinstance(raw, dict):
                    logger.warning("Skipping malformed style example in import: %r", raw)
                    continue
                self.save_example(coerce_example(raw))
                imported += 1

        raw_settings = data.get("settings")
        if isinstance(raw_settings, dict):
            self.save_settings(coerce_settings(raw_settings))

        logger.info("Import completed | examples=%d settings=%s", imported, isinstance(raw_settings, dict))
        return imported

    def clear_all(self) -> None:
        with self._lock:
            self._write({"examples": [], "settings": None})
