"""
Request node for the planner graph.

Turns the PlanRequest into the prompt sent to the model.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict

from trip_planner.planner.prompts.builders import build_route_prompt
from trip_planner.planner.schemas import PlannerGraphState

if TYPE_CHECKING:
    from trip_planner.planner.graph.config import PlannerConfig


logger = logging.getLogger(__name__)


def make_build_request_node(
    config: "PlannerConfig",
) -> Callable[[PlannerGraphState], Dict[str, Any]]:
    """Create the node that builds the model prompt."""

    def build_request_node(state: PlannerGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id", "unknown")
        _log = f"[session={session_id}] [graph=planner] [node=build_request] "

        request = state["request"]
        prompt = build_route_prompt(
            request,
            state.get("known_locations", []),
            limit=config.max_known_locations,
        )

        logger.info(
            f"{_log}Prompt built | origin={request.origin_hub.value}, "
            f"language={request.language.value}, interests={len(request.interest_tags)}, "
            f"has_wish={bool(request.wish)}, prompt_chars={len(prompt)}"
        )
        return {"prompt": prompt}

    return build_request_node
