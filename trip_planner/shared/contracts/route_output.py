"""
Route output contract.

Defines the structured route that the planner returns, whether it was
extracted from a model response or synthesized from the fallback catalog.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Route(BaseModel):
    """
    Contract for a planned multi-stop route.

    The first and last stops are the displayed endpoints of the plan and
    the order of ``stops`` is display order.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "stops": ["Kutaisi", "Prometheus Cave", "Martvili Canyon", "Kutaisi"],
                "totalDistanceKm": 130,
                "durationLabel": "5-6 Hours",
                "reasoning": "Caves and canyons close to Kutaisi.",
            }
        },
    )

    stops: List[str] = Field(
        min_length=2, description="Ordered stop names, start to finish"
    )
    total_distance_km: float = Field(
        default=0.0,
        ge=0,
        alias="totalDistanceKm",
        description="Total driving distance in kilometres",
    )
    duration_label: str = Field(
        default="", alias="durationLabel", description="Human readable duration"
    )
    reasoning: Optional[str] = Field(
        default=None, description="Short explanation of the route"
    )

    @field_validator("stops")
    @classmethod
    def _stops_not_blank(cls, stops: List[str]) -> List[str]:
        cleaned = [stop.strip() for stop in stops]
        if any(not stop for stop in cleaned):
            raise ValueError("stop names must not be blank")
        return cleaned

    @property
    def start(self) -> str:
        return self.stops[0]

    @property
    def end(self) -> str:
        return self.stops[-1]
