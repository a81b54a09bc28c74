"""
Prompt builders for the route planner.

These functions construct the prompts sent to the model from a
PlanRequest and the known-locations list.
"""

from typing import Iterable, List

from trip_planner.planner.prompts.templates import (
    ROUTE_PROMPT_TEMPLATE,
    SYSTEM_PROMPTS,
    RoutePromptConfig,
)
from trip_planner.planner.schemas import Language, PlanRequest


MAX_KNOWN_LOCATIONS = 30


def truncate_locations(
    known_locations: Iterable[str],
    limit: int = MAX_KNOWN_LOCATIONS,
) -> List[str]:
    """
    Keep the first ``limit`` distinct, non-blank location names in order.

    Args:
        known_locations: Candidate names (typically the full gazetteer)
        limit: Maximum number of names to keep

    Returns:
        Bounded list of names
    """
    kept: List[str] = []
    seen = set()
    if limit <= 0:
        return kept
    for name in known_locations:
        cleaned = (name or "").strip()
        if not cleaned or cleaned.casefold() in seen:
            continue
        seen.add(cleaned.casefold())
        kept.append(cleaned)
        if len(kept) >= limit:
            break
    return kept


def build_system_prompt(language: Language) -> str:
    """System message for the given response language."""
    return SYSTEM_PROMPTS[Language(language).value]


def build_route_prompt(
    request: PlanRequest,
    known_locations: Iterable[str],
    limit: int = MAX_KNOWN_LOCATIONS,
) -> str:
    """
    Build the user prompt for a route planning request.

    Args:
        request: Planning parameters
        known_locations: Allowed location names; truncated to ``limit``
        limit: Cap on embedded location names

    Returns:
        Complete prompt string including the expected JSON shape
    """
    config = RoutePromptConfig(
        origin=request.origin_hub.value.capitalize(),
        duration=request.duration_label,
        travel_date=request.travel_date.isoformat(),
        interests=sorted(request.interest_tags),
        wishes=request.wish or None,
        language=request.language.value,
        locations=truncate_locations(known_locations, limit),
    )
    return config.format_prompt(ROUTE_PROMPT_TEMPLATE)
