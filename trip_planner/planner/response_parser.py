"""
Response parser for the route planner.

Model output is not guaranteed to be pure JSON: it is often wrapped in
prose or markdown fences. Extraction is permissive about where the object
sits and strict about its shape once found:

1. Locate: a fenced ```json block, else the first balanced {...} span.
2. Parse: json.loads on the located text.
3. Validate: ``stops`` must be a non-empty list of names; everything else
   is optional and goes through the Route contract.

Failures are returned as ExtractionFailure values, never raised.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from trip_planner.shared.contracts.route_output import Route


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionFailure:
    """Outcome of a response that could not be turned into a Route."""

    reason: str
    snippet: Optional[str] = None


_FENCED_JSON_PATTERN = re.compile(r"```[ \t]*json[ \t]*\r?\n?([\s\S]*?)```", re.IGNORECASE)

# Accepted spellings for optional fields, first match wins
_FIELD_ALIASES = {
    "totalDistanceKm": ("totalDistanceKm", "total_distance_km", "totalDistance"),
    "durationLabel": ("durationLabel", "duration_label", "totalDuration"),
    "reasoning": ("reasoning", "summary"),
}

_SNIPPET_LENGTH = 200


def find_fenced_block(raw: str) -> Optional[str]:
    """
    Return the contents of the first ```json fenced block, or None.

    Args:
        raw: Raw model response

    Returns:
        Stripped block contents, or None when no json fence is present
    """
    match = _FENCED_JSON_PATTERN.search(raw)
    if match is None:
        return None
    return match.group(1).strip()


def find_first_object(text: str) -> Optional[str]:
    """
    Return the first balanced top-level ``{...}`` span in ``text``, or None.

    Braces inside JSON string literals (including escaped quotes) are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def locate_payload(raw: str) -> Optional[str]:
    """Stage 1: fenced block first, then the first brace-delimited object."""
    fenced = find_fenced_block(raw)
    if fenced is not None:
        return find_first_object(fenced) or fenced
    return find_first_object(raw)


def _normalize_stops(stops: Any) -> Optional[List[str]]:
    if not isinstance(stops, list) or not stops:
        return None

    names: List[str] = []
    for stop in stops:
        if isinstance(stop, str):
            names.append(stop)
        elif isinstance(stop, dict) and isinstance(stop.get("name"), str):
            names.append(stop["name"])
        else:
            return None
    return names


def _pick(data: Dict[str, Any], keys) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _snippet(text: str) -> str:
    return text[:_SNIPPET_LENGTH]


def extract_route(raw: Optional[str]) -> Union[Route, ExtractionFailure]:
    """
    Extract a Route from a raw model response.

    Args:
        raw: Raw response text (may be None or empty)

    Returns:
        A validated Route, or ExtractionFailure describing why not
    """
    if not raw or not raw.strip():
        return ExtractionFailure(reason="empty response")

    payload = locate_payload(raw)
    if payload is None:
        return ExtractionFailure(reason="no JSON object found", snippet=_snippet(raw))

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        return ExtractionFailure(reason=f"invalid JSON: {e}", snippet=_snippet(payload))

    if not isinstance(data, dict):
        return ExtractionFailure(
            reason=f"expected a JSON object, got {type(data).__name__}",
            snippet=_snippet(payload),
        )

    stops = _normalize_stops(data.get("stops"))
    if stops is None:
        return ExtractionFailure(
            reason="'stops' must be a non-empty list of names", snippet=_snippet(payload)
        )

    fields: Dict[str, Any] = {"stops": stops}
    for target, keys in _FIELD_ALIASES.items():
        value = _pick(data, keys)
        if value is not None:
            fields[target] = value

    try:
        route = Route.model_validate(fields)
    except ValidationError as e:
        return ExtractionFailure(
            reason=f"route validation failed: {e.error_count()} error(s)",
            snippet=_snippet(payload),
        )

    logger.debug(f"[parser] extracted route | stops={len(route.stops)}")
    return route
