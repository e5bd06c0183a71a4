"""Pydantic models and color/tag helpers for notes."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_COLOR = "#FFFFFF"
FALLBACK_COLOR = "#D3D3D3"  # light gray, used when a stored color won't parse

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class Note(BaseModel):
    """A single note as stored in the remote collection.

    ``color_hex`` is kept exactly as written, valid or not. Use
    :func:`display_color` to get something renderable.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default="", description="UUID4 assigned by the store")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")
    color_hex: str = Field(
        default=DEFAULT_COLOR,
        alias="colorHex",
        description="#RRGGBB or #AARRGGBB",
    )
    tags: list[str] = Field(default_factory=list, description="Ordered tags")

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, tags: list[str]) -> list[str]:
        return [t.strip() for t in tags if t.strip()]


def is_valid_color(value: str | None) -> bool:
    """Return True if *value* is a ``#``-prefixed hex triplet or quad."""
    return bool(value) and _COLOR_RE.match(value) is not None


def display_color(note: Note) -> str:
    """Color to render *note* with; falls back instead of failing."""
    if is_valid_color(note.color_hex):
        return note.color_hex
    return FALLBACK_COLOR


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated tag string into trimmed, non-blank tags."""
    return [t.strip() for t in raw.split(",") if t.strip()]
