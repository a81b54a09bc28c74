"""
Typed prompt templates for the route planner.

Prompts are structured as Pydantic models for validation and testability.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


SYSTEM_PROMPTS = {
    "EN": (
        "You are a local driving-tour guide for Georgia. "
        "You plan one-day private driving routes and answer in English."
    ),
    "RU": (
        "Вы местный гид по автомобильным турам по Грузии. "
        "Вы планируете однодневные частные маршруты и отвечаете на русском языке."
    ),
}


# Literal example of the exact object the parser expects back
ROUTE_SHAPE_EXAMPLE = """{
  "stops": ["Start City", "Point 1", "Point 2", "Start City"],
  "totalDistanceKm": 150,
  "durationLabel": "6 Hours",
  "reasoning": "One or two sentences on why this route fits the wishes."
}"""


ROUTE_PROMPT_TEMPLATE = """Create a private driving route that starts and ends in {origin}.

TRIP PARAMETERS:
- Start / finish: {origin}
- Duration: {duration}
- Travel date: {travel_date}
- Interests: {interests}
- Wishes: {wishes}
- Answer language: {language}

ALLOWED LOCATIONS (use only these names for stops):
{locations}

OUTPUT REQUIREMENTS (strict):
Respond with ONLY one JSON object, no prose, in exactly this shape:
{shape}

Rules:
- "stops" is an ordered list of at least 2 location names (strings), first and last are the endpoints.
- "totalDistanceKm" is a non-negative number.
- "durationLabel" and "reasoning" are strings written in {language_name}.
"""


class RoutePromptConfig(BaseModel):
    """Validated inputs for the route prompt template."""

    origin: str = Field(description="Origin hub display name")
    duration: str = Field(description="Duration label")
    travel_date: str = Field(description="Travel date (YYYY-MM-DD)")
    interests: List[str] = Field(default_factory=list)
    wishes: Optional[str] = Field(default=None)
    language: str = Field(description="Language code")
    locations: List[str] = Field(default_factory=list)

    def format_prompt(self, template: str = ROUTE_PROMPT_TEMPLATE) -> str:
        interests_str = ", ".join(self.interests) if self.interests else "None specified"
        wishes_str = f'"{self.wishes}"' if self.wishes else "None specified"
        locations_str = ", ".join(self.locations) if self.locations else "Any well-known location"
        language_name = "Russian" if self.language == "RU" else "English"

        return template.format(
            origin=self.origin,
            duration=self.duration,
            travel_date=self.travel_date,
            interests=interests_str,
            wishes=wishes_str,
            language=self.language,
            language_name=language_name,
            locations=locations_str,
            shape=ROUTE_SHAPE_EXAMPLE,
        )
