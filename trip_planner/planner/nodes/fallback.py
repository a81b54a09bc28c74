"""
Fallback node for the planner graph.

Serves the canned route for the request's origin hub.
"""

import logging
from typing import Any, Callable, Dict

from trip_planner.planner.fallback import FallbackCatalog, synthesize_fallback
from trip_planner.planner.schemas import PlannerGraphState


logger = logging.getLogger(__name__)


def make_fallback_node(
    catalog: FallbackCatalog,
) -> Callable[[PlannerGraphState], Dict[str, Any]]:
    """Create the node that substitutes the catalog route."""

    def fallback_node(state: PlannerGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id", "unknown")
        _log = f"[session={session_id}] [graph=planner] [node=fallback] "

        request = state["request"]
        route = synthesize_fallback(request, catalog)

        logger.info(
            f"{_log}Serving catalog route | origin={request.origin_hub.value}, "
            f"language={request.language.value}, errors={len(state.get('errors', []))}"
        )
        return {
            "route": route,
            "served_by": "fallback",
            "messages": [
                {
                    "role": "system",
                    "agent": "fallback",
                    "content": f"Best available route from {route.start}",
                }
            ],
        }

    return fallback_node
