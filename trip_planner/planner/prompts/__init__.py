"""Prompt templates and builders for route planning."""

from trip_planner.planner.prompts.builders import (
    MAX_KNOWN_LOCATIONS,
    build_route_prompt,
    build_system_prompt,
    truncate_locations,
)

__all__ = [
    "MAX_KNOWN_LOCATIONS",
    "build_route_prompt",
    "build_system_prompt",
    "truncate_locations",
]
