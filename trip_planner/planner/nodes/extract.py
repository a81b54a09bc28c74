"""
Extract node for the planner graph.

Parses the raw model response into a Route.
"""

import logging
from typing import Any, Dict

from trip_planner.planner.response_parser import ExtractionFailure, extract_route
from trip_planner.planner.schemas import PlannerGraphState


logger = logging.getLogger(__name__)


def extract_node(state: PlannerGraphState) -> Dict[str, Any]:
    """
    Extract a Route from ``raw_response``.

    An extracted route without a duration label inherits the request's.

    Args:
        state: Current planner state with raw_response populated

    Returns:
        Dictionary with state updates (route, or an error entry)
    """
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [node=extract] "

    result = extract_route(state.get("raw_response"))

    if isinstance(result, ExtractionFailure):
        logger.warning(f"{_log}Extraction failed | {result.reason}")
        logger.debug(f"{_log}Unparseable snippet: {result.snippet!r}")
        return {
            "route": None,
            "errors": [f"extraction: {result.reason}"],
            "messages": [
                {"role": "system", "agent": "extract", "content": "Response not usable"}
            ],
        }

    route = result
    if not route.duration_label:
        route = route.model_copy(update={"duration_label": state["request"].duration_label})

    logger.info(
        f"{_log}Route extracted | stops={len(route.stops)}, "
        f"distance={route.total_distance_km}km, {route.start} -> {route.end}"
    )
    return {
        "route": route,
        "served_by": "model",
        "messages": [
            {
                "role": "system",
                "agent": "extract",
                "content": f"Route planned with {len(route.stops)} stops",
            }
        ],
    }
