"""FastAPI entrypoint for the ClearLine backend."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status

from clearline import __version__, schemas
from clearline.config import settings
from clearline.logging_utils import configure_logging, content_preview, get_logger
from clearline.services.rewriting import RewritingService, TimedRewrite
from clearline.store import ImportPayloadError, StyleExampleNotFoundError, StyleStore

configure_logging(level=settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="ClearLine Backend", version=__version__)


@lru_cache(maxsize=1)
def get_store() -> StyleStore:
    """Instantiate the style store."""
    return StyleStore(Path(settings.data_path))


def get_rewriting_service(store: StyleStore = Depends(get_store)) -> RewritingService:
    """Instantiate the rewriting service."""
    return RewritingService(store=store)


@app.get("/health", response_model=schemas.HealthResponse)
async def health() -> schemas.HealthResponse:
    """Simple health-check endpoint."""
    return schemas.HealthResponse(status="ok", environment=settings.environment, version=__version__)


@app.post("/v1/text/rewrite", response_model=schemas.RewriteResponse)
def rewrite_text(
    payload: schemas.RewriteRequest,
    service: RewritingService = Depends(get_rewriting_service),
) -> schemas.RewriteResponse:
    """Main rewriting endpoint."""
    style_examples = None
    if payload.style_examples is not None:
        style_examples = [example.to_example() for example in payload.style_examples]

    timed: TimedRewrite = service.rewrite(
        text=payload.text,
        options=payload.options.to_options(),
        style_examples=style_examples,
    )
    result = timed.result

    logger.info(
        "Rewrite request processed | document_type=%s changes=%d suggestions=%d latency_ms=%.2f text_len=%d%s",
        payload.options.document_type,
        len(result.change_log),
        len(result.suggestions),
        timed.latency_ms,
        len(payload.text),
        content_preview(payload.text, enabled=settings.log_content_enabled),
    )

    return schemas.RewriteResponse(
        rewritten_text=result.rewritten_text,
        change_log=[schemas.ChangeModel.from_change(change) for change in result.change_log],
        suggestions=result.suggestions,
        latency_ms=timed.latency_ms,
    )


@app.get("/v1/style-examples", response_model=list[schemas.StyleExampleModel])
def list_style_examples(store: StyleStore = Depends(get_store)) -> list[schemas.StyleExampleModel]:
    """Return every stored style example."""
    return [schemas.StyleExampleModel.from_example(example) for example in store.list_examples()]


@app.put("/v1/style-examples/{example_id}", response_model=schemas.StyleExampleModel)
def upsert_style_example(
    example_id: str,
    payload: schemas.StyleExampleUpsert,
    store: StyleStore = Depends(get_store),
) -> schemas.StyleExampleModel:
    """Create or replace a style example."""
    model = schemas.StyleExampleModel(id=example_id, **payload.model_dump())
    saved = store.save_example(model.to_example())
    return schemas.StyleExampleModel.from_example(saved)


@app.delete("/v1/style-examples/{example_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_style_example(example_id: str, store: StyleStore = Depends(get_store)) -> Response:
    """Delete a style example."""
    try:
        store.delete_example(example_id)
    except StyleExampleNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Style example not found: {example_id}",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/v1/settings", response_model=schemas.SettingsModel)
def get_settings(store: StyleStore = Depends(get_store)) -> schemas.SettingsModel:
    """Return saved settings."""
    app_settings = store.get_settings()
    if app_settings is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No settings saved.")
    return schemas.SettingsModel.from_settings(app_settings)


@app.put("/v1/settings", response_model=schemas.SettingsModel)
def save_settings(
    payload: schemas.SettingsModel,
    store: StyleStore = Depends(get_store),
) -> schemas.SettingsModel:
    """Persist settings."""
    return schemas.SettingsModel.from_settings(store.save_settings(payload.to_settings()))


@app.get("/v1/data/export")
def export_data(store: StyleStore = Depends(get_store)) -> Response:
    """Download every example and the settings as JSON."""
    return Response(
        content=store.export_all(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="clearline-export.json"'},
    )


@app.post("/v1/data/import", response_model=schemas.ImportResponse)
async def import_data(request: Request, store: StyleStore = Depends(get_store)) -> schemas.ImportResponse:
    """Import a document produced by the export endpoint."""
    payload = (await request.body()).decode("utf-8", errors="replace")
    try:
        imported = store.import_all(payload)
    except ImportPayloadError as exc:
        logger.warning("Import rejected | %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return schemas.ImportResponse(imported_examples=imported)


@app.delete("/v1/data", status_code=status.HTTP_204_NO_CONTENT)
def clear_data(store: StyleStore = Depends(get_store)) -> Response:
    """Delete all stored examples and settings."""
    store.clear_all()
    logger.info("Stored data cleared")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
