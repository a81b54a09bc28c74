"""
FastAPI endpoints for the route planner.

Provides the API to plan a route, list the locations the planner may use
and accept a planned route into the booking flow.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Set

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from trip_planner.planner.booking import InMemoryTourStore, Tour, TourBookingSink
from trip_planner.planner.errors import PlanValidationError
from trip_planner.planner.graph.config import config_from_env
from trip_planner.planner.orchestrator import RoutePlanner
from trip_planner.planner.schemas import DEFAULT_HUB, Language, OriginHub, PlanRequest
from trip_planner.shared.contracts.route_output import Route


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/planner", tags=["planner"])

# Shared planner and tour store (replace the store with a DB in production)
_planner: Optional[RoutePlanner] = None
_tour_store = InMemoryTourStore()


def get_planner() -> RoutePlanner:
    """Get or create the shared planner instance."""
    global _planner
    if _planner is None:
        _planner = RoutePlanner(config=config_from_env())
    return _planner


def get_tour_store() -> InMemoryTourStore:
    return _tour_store


# ============================================================================
# Request/Response Models
# ============================================================================


class PlanRouteRequest(BaseModel):
    """Request to plan a route."""

    origin_hub: OriginHub = Field(default=DEFAULT_HUB, description="Start/finish hub")
    duration_label: str = Field(default="1 Day", description="Trip duration")
    interest_tags: Set[str] = Field(default_factory=set, description="Interest tags")
    free_text_wish: Optional[str] = Field(default=None, description="Free text wishes")
    language: Language = Field(default=Language.EN, description="Response language")
    travel_date: Optional[date] = Field(default=None, description="Travel date")

    def to_plan_request(self) -> PlanRequest:
        data = self.model_dump(exclude_none=True)
        return PlanRequest.model_validate(data)


class PlanRouteResponse(BaseModel):
    """Planned route. Never an error for model/parse failures."""

    session_id: str = Field(description="Planning session identifier")
    route: Route = Field(description="Planned route")


class LocationsResponse(BaseModel):
    language: Language
    locations: List[str]


class AcceptPlanRequest(BaseModel):
    """Commit to a planned route."""

    route: Route = Field(description="Route returned by /plan")
    travel_date: date = Field(description="Travel date")


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/plan", response_model=PlanRouteResponse)
async def plan_route(
    request: PlanRouteRequest,
    planner: RoutePlanner = Depends(get_planner),
):
    """
    Plan a route.

    Returns 422 only when the request has neither interests nor wishes;
    model and parsing failures are answered with the best available route.
    """
    session_id = str(uuid.uuid4())
    _log = f"[session={session_id}] [graph=planner] [api=plan] "

    plan_request = request.to_plan_request()
    logger.info(
        f"{_log}Plan requested | origin={plan_request.origin_hub.value}, "
        f"language={plan_request.language.value}"
    )

    try:
        outcome = await planner.run(plan_request, session_id=session_id)
    except PlanValidationError as e:
        logger.info(f"{_log}Plan rejected | {e.message}")
        raise HTTPException(
            status_code=422,
            detail={"field": e.field, "message": e.message},
        )

    return PlanRouteResponse(session_id=outcome.session_id, route=outcome.route)


@router.get("/locations", response_model=LocationsResponse)
async def list_locations(
    language: Language = Language.EN,
    planner: RoutePlanner = Depends(get_planner),
):
    """Locations the planner offers to the model for ``language``."""
    return LocationsResponse(language=language, locations=planner.known_locations(language))


@router.post("/accept", response_model=Tour, status_code=status.HTTP_201_CREATED)
async def accept_plan(
    request: AcceptPlanRequest,
    store: InMemoryTourStore = Depends(get_tour_store),
):
    """Turn an accepted route into a bookable tour."""
    sink = TourBookingSink(store)
    sink(request.route, request.travel_date.isoformat())
    return sink.last_tour


@router.get("/tours", response_model=List[Tour])
async def list_tours(store: InMemoryTourStore = Depends(get_tour_store)):
    """Tours created from accepted plans."""
    return store.list()
