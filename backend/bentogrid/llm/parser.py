"""Parse layout-suggestion model output into LayoutSuggestion records."""

from __future__ import annotations

import json
import re

from pydantic import ValidationError

from bentogrid.models.grid import LayoutSuggestion, TileKind

FALLBACK_COLOR = "#333"
FALLBACK_ROW_SPAN = 4


class SuggestionParseError(ValueError):
    """Model output that is not a usable list of suggestions."""


def parse_suggestions(text: str) -> list[LayoutSuggestion]:
    """Parse a JSON array of suggestion records.

    Tolerates markdown fences, surrounding prose, and an object wrapping the
    array under a single key.
    """
    cleaned = re.sub(r"^```(?:json)?\s*\n?", "", text.strip())
    cleaned = re.sub(r"\n?```\s*$", "", cleaned)
    cleaned = cleaned.strip()

    array_match = re.search(r"\[[\s\S]*\]", cleaned)
    if array_match and not cleaned.startswith("{"):
        cleaned = array_match.group(0)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise SuggestionParseError(f"Invalid JSON: {e}") from e

    if isinstance(data, dict):
        lists = [v for v in data.values() if isinstance(v, list)]
        if len(lists) != 1:
            raise SuggestionParseError("Expected a JSON array of tiles")
        data = lists[0]
    if not isinstance(data, list):
        raise SuggestionParseError("Expected a JSON array of tiles")

    try:
        suggestions = [LayoutSuggestion.model_validate(item) for item in data]
    except ValidationError as e:
        raise SuggestionParseError(str(e)) from e

    if not suggestions:
        raise SuggestionParseError("Model returned no tiles")
    return suggestions


def fallback_suggestions(
    columns: int,
    message: str,
    rows: int | None = None,
) -> list[LayoutSuggestion]:
    """Single full-width tile carrying an error message, at most ``rows`` tall."""
    return [
        LayoutSuggestion(
            title="Error",
            content=message,
            col_span=columns,
            row_span=min(FALLBACK_ROW_SPAN, rows) if rows else FALLBACK_ROW_SPAN,
            kind=TileKind.TEXT,
            color_theme=FALLBACK_COLOR,
        )
    ]
