"""Theme family detection and syntax capture extraction.

A theme file holds a *family*: several themes (usually light and dark
variants) sharing one author. Each theme maps capture names to styles under
``style.syntax``. The v0.1.0 and v0.2.0 family formats differ in their UI
color keys but agree on this part, so one permissive model validates both.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from captally.config.constants import (
    THEME_SCHEMA_KEY,
    THEME_SCHEMA_V1_URL,
    THEME_SCHEMA_V2_URL,
)
from captally.corpus.models import ThemeSchema

log = structlog.get_logger()

_SCHEMA_MARKERS: dict[str, ThemeSchema] = {
    THEME_SCHEMA_V1_URL: ThemeSchema.V1,
    THEME_SCHEMA_V2_URL: ThemeSchema.V2,
}


class ThemeStyleContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    syntax: dict[str, Any] = Field(default_factory=dict)


class ThemeContent(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    appearance: str | None = None
    style: ThemeStyleContent = Field(default_factory=ThemeStyleContent)


class ThemeFamilyContent(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_url: str | None = Field(default=None, alias=THEME_SCHEMA_KEY)
    name: str
    author: str | None = None
    themes: list[ThemeContent]


@dataclass
class ThemeFileScan:
    """What one theme file contributed."""

    schema: ThemeSchema
    theme_names: list[str] = field(default_factory=list)
    captures: set[str] = field(default_factory=set)


def detect_schema(payload: Any) -> ThemeSchema:
    """Classify a parsed theme payload by its top-level $schema marker.

    Never raises: anything that is not a mapping carrying a known marker is
    INVALID.
    """
    if not isinstance(payload, dict):
        return ThemeSchema.INVALID
    marker = payload.get(THEME_SCHEMA_KEY)
    if not isinstance(marker, str):
        return ThemeSchema.INVALID
    return _SCHEMA_MARKERS.get(marker.strip(), ThemeSchema.INVALID)


def scan_theme_text(text: str, *, filename: str = "<theme>") -> ThemeFileScan:
    """Parse one theme file and collect its schema, theme names and captures.

    Only V1/V2 families that validate structurally contribute captures; a
    family with a known marker but a broken body keeps its schema bucket.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        log.warning("theme_unparsable", file=filename, error=str(e))
        return ThemeFileScan(ThemeSchema.INVALID)

    schema = detect_schema(payload)
    if schema is ThemeSchema.INVALID:
        log.debug("theme_schema_unknown", file=filename)
        return ThemeFileScan(schema)

    try:
        family = ThemeFamilyContent.model_validate(payload)
    except ValidationError as e:
        log.warning(
            "theme_invalid_structure",
            file=filename,
            schema=schema.value,
            errors=e.error_count(),
        )
        return ThemeFileScan(schema)

    scan = ThemeFileScan(schema)
    for theme in family.themes:
        scan.theme_names.append(theme.name)
        scan.captures.update(theme.style.syntax)
    return scan


def combine_schemas(schemas: list[ThemeSchema]) -> ThemeSchema:
    """Schema of a whole theme extension: the newest version any file uses."""
    if ThemeSchema.V2 in schemas:
        return ThemeSchema.V2
    if ThemeSchema.V1 in schemas:
        return ThemeSchema.V1
    return ThemeSchema.INVALID
