"""FastAPI application for the notepad service.

Endpoints:
  GET    /notes             — Loaded notes, optionally filtered by ?q=
  POST   /notes             — Create a note from a form
  PUT    /notes/{note_id}   — Replace a note from a form
  DELETE /notes/{note_id}   — Delete a note
  POST   /notes/reload      — Re-fetch every note from the store
  GET    /health            — Store and controller status
  GET    /metrics           — Prometheus metrics
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field
from starlette.middleware.base import BaseHTTPMiddleware

from notepad.collection import InMemoryCollection, RedisCollection
from notepad.config import settings
from notepad.controller import NoteController
from notepad.errors import StorageError, ValidationError
from notepad.forms import NoteForm
from notepad.metrics import HTTP_DURATION, HTTP_REQUESTS
from notepad.models import Note, display_color
from notepad.search import filter_notes
from notepad.store import NoteStore

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

# Endpoints excluded from HTTP metrics
_METRICS_EXCLUDE = {"/metrics", "/openapi.json", "/docs", "/redoc"}


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record HTTP request count and duration for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        """Wrap each request with timing and counting."""
        path = request.url.path
        if path in _METRICS_EXCLUDE:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Label by route template so note ids don't become label values
        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        HTTP_REQUESTS.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        HTTP_DURATION.labels(endpoint=endpoint).observe(elapsed)
        return response


# --- Request / Response models ---


class NoteResponse(BaseModel):
    """A note as rendered to clients."""

    model_config = {"populate_by_name": True}

    id: str
    title: str
    content: str
    color_hex: str = Field(alias="colorHex")
    display_color: str = Field(alias="displayColor")
    tags: list[str]

    @classmethod
    def from_note(cls, note: Note) -> NoteResponse:
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            color_hex=note.color_hex,
            display_color=display_color(note),
            tags=note.tags,
        )


class SubmitResponse(BaseModel):
    """Result of a create or edit submission."""

    created: bool
    total_notes: int


# --- Endpoints ---

router = APIRouter()


def get_controller(request: Request) -> NoteController:
    return request.app.state.controller


@router.get("/notes", response_model=list[NoteResponse])
async def list_notes(
    q: str = "", controller: NoteController = Depends(get_controller)
) -> list[NoteResponse]:
    """Return the loaded notes matching *q* (all notes when empty)."""
    return [NoteResponse.from_note(n) for n in filter_notes(controller.notes.value, q)]


@router.post("/notes", response_model=SubmitResponse, status_code=201)
async def create_note(
    form: NoteForm,
    response: Response,
    controller: NoteController = Depends(get_controller),
) -> SubmitResponse:
    """Create a note. A title that is already loaded is skipped (200, created=false)."""
    form = form.model_copy(update={"note_id": None})
    created = await form.submit(controller)
    if not created:
        response.status_code = 200
    return SubmitResponse(created=created, total_notes=len(controller.notes.value))


@router.put("/notes/{note_id}", response_model=SubmitResponse)
async def update_note(
    note_id: str,
    form: NoteForm,
    controller: NoteController = Depends(get_controller),
) -> SubmitResponse:
    """Replace every field of the note at *note_id*."""
    form = form.model_copy(update={"note_id": note_id})
    await form.submit(controller)
    return SubmitResponse(created=False, total_notes=len(controller.notes.value))


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(
    note_id: str, controller: NoteController = Depends(get_controller)
) -> Response:
    """Delete the note at *note_id*; unknown ids are ignored."""
    await controller.delete_note(note_id)
    return Response(status_code=204)


@router.post("/notes/reload")
async def reload_notes(controller: NoteController = Depends(get_controller)) -> dict[str, Any]:
    """Re-fetch every note from the store."""
    await controller.reload()
    return {"status": "ok", "total_notes": len(controller.notes.value)}


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Report whether the last store round trip succeeded."""
    controller: NoteController = request.app.state.controller
    error = controller.error.value
    return {
        "status": "healthy" if error is None else "degraded",
        "backend": request.app.state.backend,
        "total_notes": len(controller.notes.value),
        "last_error": str(error) if error else None,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# --- Error handlers ---


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(
        status_code=503, content={"detail": str(exc), "operation": exc.operation}
    )


# --- App factory ---


def build_collection(backend: Optional[str] = None):
    """Return the remote collection selected by STORE_BACKEND."""
    backend = backend or settings.store_backend
    if backend == "memory":
        return InMemoryCollection()
    return RedisCollection(settings.redis_url, settings.notes_collection)


def create_app(collection=None) -> FastAPI:
    """Build the API around *collection* (defaults to the configured backend)."""
    if collection is None:
        collection = build_collection()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: connect the collection and load every note."""
        logger.info("Connecting note collection...")
        try:
            await collection.connect()
        except Exception as e:
            logger.warning("Note collection unavailable, will retry on first use: %s", e)
        controller = NoteController(NoteStore(collection))
        try:
            await controller.reload()
            logger.info("Loaded %d notes", len(controller.notes.value))
        except StorageError as e:
            logger.warning("Initial note load failed, starting empty: %s", e)
        app.state.controller = controller
        app.state.backend = type(collection).__name__
        yield
        await collection.close()
        logger.info("Notepad shut down.")

    app = FastAPI(title="Notepad", version="1.0.0", lifespan=lifespan)
    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
