"""
Booking boundary for accepted plans.

When a user commits to a planned route it is turned into a temporary tour
and handed to a tour store. Persistence itself belongs to the store.
"""

import logging
import math
import uuid
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from trip_planner.planner.gazetteer import DEFAULT_GAZETTEER, Gazetteer
from trip_planner.shared.contracts.route_output import Route


logger = logging.getLogger(__name__)


# Called once with the accepted route and the travel date (YYYY-MM-DD)
OnPlanAccepted = Callable[[Route, str], None]

DEFAULT_PRICE_PER_KM = 1.2
DEFAULT_BASE_PRICE = 30.0
MOUNTAIN_COEFF = 1.2


class Tour(BaseModel):
    """A bookable tour built from an accepted route."""

    id: str = Field(description="Tour identifier")
    title_en: str
    title_ru: str
    description: str = Field(default="")
    price: str = Field(description="Display price (e.g. 'From 186 GEL')")
    duration: str
    category: str = Field(default="AI_UNIQUE")
    route_stops: List[str] = Field(default_factory=list)
    itinerary: List[str] = Field(default_factory=list)
    travel_date: str = Field(description="Travel date (YYYY-MM-DD)")


class TourStore(Protocol):
    """Persistence collaborator for tours."""

    def save(self, tour: Tour) -> None: ...

    def list(self) -> List[Tour]: ...


class InMemoryTourStore:
    """Tour store kept in process memory (replace with a DB in production)."""

    def __init__(self):
        self._tours: Dict[str, Tour] = {}

    def save(self, tour: Tour) -> None:
        self._tours[tour.id] = tour

    def list(self) -> List[Tour]:
        return list(self._tours.values())


def estimate_price(
    route: Route,
    price_per_km: float = DEFAULT_PRICE_PER_KM,
    base_price: float = DEFAULT_BASE_PRICE,
    gazetteer: Optional[Gazetteer] = None,
) -> int:
    """
    Rough driver price for a route, rounded up.

    Routes passing through a mountainous known location are priced higher.
    """
    gazetteer = gazetteer if gazetteer is not None else DEFAULT_GAZETTEER
    complexity = 1.0
    for stop in route.stops:
        location = gazetteer.find(stop)
        if location is not None and location.is_mountainous:
            complexity = MOUNTAIN_COEFF
            break
    return math.ceil(route.total_distance_km * price_per_km * complexity + base_price)


def tour_from_route(
    route: Route,
    travel_date: str,
    price_per_km: float = DEFAULT_PRICE_PER_KM,
    base_price: float = DEFAULT_BASE_PRICE,
) -> Tour:
    """Build the temporary tour the booking flow works with."""
    price = estimate_price(route, price_per_km=price_per_km, base_price=base_price)
    return Tour(
        id=f"ai-tour-{uuid.uuid4().hex[:12]}",
        title_en=f"AI Trip: {route.start} -> {route.end}",
        title_ru=f"AI Тур: {route.start} -> {route.end}",
        description=route.reasoning or "",
        price=f"From {price} GEL",
        duration=route.duration_label,
        route_stops=list(route.stops),
        itinerary=[f"{i + 1}. {stop}" for i, stop in enumerate(route.stops)],
        travel_date=travel_date,
    )


class TourBookingSink:
    """``OnPlanAccepted`` implementation that saves a tour per accepted plan."""

    def __init__(self, store: TourStore):
        self.store = store
        self.last_tour: Optional[Tour] = None

    def __call__(self, route: Route, travel_date: str) -> None:
        tour = tour_from_route(route, travel_date)
        self.store.save(tour)
        self.last_tour = tour
        logger.info(
            f"[booking] Plan accepted | tour={tour.id}, date={travel_date}, "
            f"stops={len(route.stops)}, price='{tour.price}'"
        )
