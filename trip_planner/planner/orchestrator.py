"""
Route planner orchestrator.

Composes prompt building, the deadline-raced and retried model call,
extraction and the fallback catalog into ``plan(request) -> Route``.
The only way ``plan`` fails is a PlanValidationError raised before any
call is attempted; every other failure ends in a catalog route.
"""

import logging
import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from trip_planner.planner.fallback import DEFAULT_CATALOG, FallbackCatalog, synthesize_fallback
from trip_planner.planner.gazetteer import DEFAULT_GAZETTEER, Gazetteer
from trip_planner.planner.graph.build import create_planner_graph
from trip_planner.planner.graph.config import DEFAULT_CONFIG, PlannerConfig
from trip_planner.planner.inference import InvokeFn, make_model_invoker
from trip_planner.planner.prompts.builders import truncate_locations
from trip_planner.planner.schemas import Language, PlanRequest
from trip_planner.shared.contracts.route_output import Route


logger = logging.getLogger(__name__)


class PlanOutcome(BaseModel):
    """Route plus how it was produced (for logs and diagnostics, not for users)."""

    session_id: str = Field(description="Planning session identifier")
    route: Route = Field(description="Structurally valid route")
    served_by: Literal["model", "fallback"] = Field(description="Which path produced the route")
    errors: List[str] = Field(default_factory=list, description="Failures along the way")


class RoutePlanner:
    """
    End-to-end planner.

    Collaborators are injected; defaults are the OpenAI-backed invoker, the
    built-in fallback catalog and the built-in gazetteer.
    """

    def __init__(
        self,
        invoke: Optional[InvokeFn] = None,
        config: Optional[PlannerConfig] = None,
        catalog: Optional[FallbackCatalog] = None,
        gazetteer: Optional[Gazetteer] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.invoke = invoke or make_model_invoker(self.config.model)
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER
        self._graph = create_planner_graph(self.invoke, self.config, self.catalog)

    async def run(self, request: PlanRequest, session_id: Optional[str] = None) -> PlanOutcome:
        """
        Plan a route and report which path produced it.

        Args:
            request: Planning parameters
            session_id: Optional identifier for log correlation

        Returns:
            PlanOutcome with a valid route

        Raises:
            PlanValidationError: If the request has no interests and no wish
        """
        session_id = session_id or str(uuid.uuid4())
        _log = f"[session={session_id}] [graph=planner] [api=run] "

        request.ensure_dispatchable()

        initial_state = {
            "request": request,
            "known_locations": self._lookup_locations(request.language, _log),
            "prompt": None,
            "raw_response": None,
            "route": None,
            "served_by": None,
            "errors": [],
            "messages": [],
            "session_id": session_id,
        }

        logger.info(
            f"{_log}Planning starting | origin={request.origin_hub.value}, "
            f"duration={request.duration_label}, language={request.language.value}"
        )

        try:
            final_state = await self._graph.ainvoke(
                initial_state, config={"recursion_limit": self.config.recursion_limit}
            )
        except Exception as e:
            logger.exception(f"{_log}Planner graph failed, serving catalog route: {e}")
            final_state = {"errors": [f"graph: {e}"]}

        route = final_state.get("route")
        served_by = final_state.get("served_by") or "fallback"
        if route is None:
            route = synthesize_fallback(request, self.catalog)
            served_by = "fallback"

        errors = final_state.get("errors", [])
        logger.info(
            f"{_log}Planning finished | served_by={served_by}, stops={len(route.stops)}, "
            f"errors={len(errors)}"
        )

        return PlanOutcome(
            session_id=session_id,
            route=route,
            served_by=served_by,
            errors=errors,
        )

    def _lookup_locations(self, language: Language, _log: str) -> List[str]:
        try:
            return self.gazetteer.list_known_locations(language)
        except Exception as e:
            logger.warning(f"{_log}Known locations unavailable, prompting without them: {e}")
            return []

    async def plan(self, request: PlanRequest) -> Route:
        """
        Plan a route for ``request``.

        Raises:
            PlanValidationError: If the request has no interests and no wish
        """
        outcome = await self.run(request)
        return outcome.route

    def known_locations(self, language: Language) -> List[str]:
        """Location names that would be embedded in a prompt for ``language``."""
        return truncate_locations(
            self.gazetteer.list_known_locations(language),
            self.config.max_known_locations,
        )
