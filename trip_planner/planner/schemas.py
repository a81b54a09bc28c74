"""
Schemas for the route planner.

Defines the planning request, its enums, the presentation phases and
the state schema for the LangGraph workflow.
"""

import operator
from datetime import date
from enum import Enum
from typing import Annotated, List, Optional, Set, TypedDict

from pydantic import BaseModel, Field, field_validator

from trip_planner.planner.errors import PlanValidationError
from trip_planner.shared.contracts.route_output import Route


class OriginHub(str, Enum):
    """Cities a planned route can start from."""

    TBILISI = "tbilisi"
    KUTAISI = "kutaisi"
    BATUMI = "batumi"


DEFAULT_HUB = OriginHub.TBILISI


class Language(str, Enum):
    EN = "EN"
    RU = "RU"


class PlannerPhase(str, Enum):
    """Presentation phases driven by the UI: INPUT -> LOADING -> RESULT."""

    INPUT = "INPUT"
    LOADING = "LOADING"
    RESULT = "RESULT"


_VALIDATION_MESSAGES = {
    Language.EN: "Pick at least one interest or describe your wishes.",
    Language.RU: "Выберите хотя бы один интерес или опишите свои пожелания.",
}


class PlanRequest(BaseModel):
    """
    Parameters of one planning request.

    The request may be held in an incomplete state while the user edits it;
    ``ensure_dispatchable`` enforces the dispatch invariant.
    """

    origin_hub: OriginHub = Field(default=DEFAULT_HUB, description="Start/finish hub")
    duration_label: str = Field(default="1 Day", description="Trip duration (e.g. '1 Day')")
    interest_tags: Set[str] = Field(default_factory=set, description="Interest tags")
    free_text_wish: Optional[str] = Field(default=None, description="Free text wishes")
    language: Language = Field(default=Language.EN, description="Response language")
    travel_date: date = Field(default_factory=date.today, description="Travel date")

    @field_validator("interest_tags")
    @classmethod
    def _strip_tags(cls, tags: Set[str]) -> Set[str]:
        return {tag.strip() for tag in tags if tag and tag.strip()}

    @property
    def wish(self) -> str:
        return (self.free_text_wish or "").strip()

    def is_dispatchable(self) -> bool:
        return bool(self.interest_tags) or bool(self.wish)

    def ensure_dispatchable(self) -> None:
        """
        Enforce the dispatch invariant.

        Raises:
            PlanValidationError: If there are no interest tags and no wish
        """
        if not self.is_dispatchable():
            raise PlanValidationError(_VALIDATION_MESSAGES[self.language])


class PlannerGraphState(TypedDict):
    """
    State schema for the planner graph.

    Carries one planning request through prompt building, the model call,
    extraction and (when needed) the fallback catalog. ``route`` stays None
    until extraction or the fallback node fills it; ``served_by`` records
    which one did (observability only).
    """

    # Input
    request: PlanRequest
    known_locations: List[str]

    # Pipeline slots
    prompt: Optional[str]
    raw_response: Optional[str]
    route: Optional[Route]
    served_by: Optional[str]

    # Tracking
    errors: Annotated[List[str], operator.add]
    messages: Annotated[List[dict], operator.add]
    session_id: Optional[str]
