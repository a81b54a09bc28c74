"""
Routing logic for the planner graph.

Any failure along the primary path routes to the fallback node.
"""

import logging
from typing import Literal

from trip_planner.planner.schemas import PlannerGraphState


logger = logging.getLogger(__name__)


def route_after_generate(state: PlannerGraphState) -> Literal["extract", "fallback"]:
    """Go to extraction when the call produced text, otherwise to fallback."""
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [router=after_generate] "

    if state.get("raw_response"):
        logger.info(f"{_log}Routing to 'extract'")
        return "extract"

    logger.info(f"{_log}Routing to 'fallback' | errors={len(state.get('errors', []))}")
    return "fallback"


def route_after_extract(state: PlannerGraphState) -> Literal["done", "fallback"]:
    """Finish when extraction produced a route, otherwise go to fallback."""
    session_id = state.get("session_id", "unknown")
    _log = f"[session={session_id}] [graph=planner] [router=after_extract] "

    if state.get("route") is not None:
        logger.info(f"{_log}Routing to END")
        return "done"

    logger.info(f"{_log}Routing to 'fallback' | extraction failed")
    return "fallback"
