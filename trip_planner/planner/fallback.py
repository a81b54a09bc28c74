"""
Fallback route catalog for the planner.

Produces a deterministic, structurally valid Route for a request without
any network access. Used whenever the model call or extraction fails, so
callers never have to special-case a failed plan.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from trip_planner.planner.schemas import DEFAULT_HUB, Language, OriginHub, PlanRequest
from trip_planner.shared.contracts.route_output import Route


@dataclass(frozen=True)
class FallbackEntry:
    """A canned route with per-language stop names and reasoning."""

    stops_en: Tuple[str, ...]
    stops_ru: Tuple[str, ...]
    total_distance_km: float
    duration_label: str
    reasoning_en: str
    reasoning_ru: str

    def to_route(self, language: Language) -> Route:
        is_ru = language is Language.RU
        return Route(
            stops=list(self.stops_ru if is_ru else self.stops_en),
            total_distance_km=self.total_distance_km,
            duration_label=self.duration_label,
            reasoning=self.reasoning_ru if is_ru else self.reasoning_en,
        )


class FallbackCatalog:
    """
    Read-only mapping from origin hub to canned route.

    Constructed once and injected; never mutated after construction.
    """

    def __init__(
        self,
        entries: Mapping[OriginHub, FallbackEntry],
        default_hub: OriginHub = DEFAULT_HUB,
    ):
        if default_hub not in entries:
            raise ValueError(f"default hub '{default_hub.value}' has no catalog entry")
        self._entries = MappingProxyType(dict(entries))
        self._default_hub = default_hub

    @property
    def default_hub(self) -> OriginHub:
        return self._default_hub

    def entry_for(self, hub: Optional[OriginHub]) -> FallbackEntry:
        """Entry for ``hub``, or the default hub's entry when absent."""
        if hub is not None and hub in self._entries:
            return self._entries[hub]
        return self._entries[self._default_hub]

    def __contains__(self, hub: object) -> bool:
        return hub in self._entries


_CLASSIC_REASONING_EN = "Classic route with the region's best-known sights."
_CLASSIC_REASONING_RU = "Классический маршрут по самым известным местам региона."

DEFAULT_CATALOG = FallbackCatalog(
    {
        OriginHub.TBILISI: FallbackEntry(
            stops_en=("Tbilisi", "Jvari Monastery", "Ananuri Fortress", "Tbilisi"),
            stops_ru=("Тбилиси", "Джвари", "Ананури", "Тбилиси"),
            total_distance_km=160,
            duration_label="5-6 Hours",
            reasoning_en=_CLASSIC_REASONING_EN,
            reasoning_ru=_CLASSIC_REASONING_RU,
        ),
        OriginHub.KUTAISI: FallbackEntry(
            stops_en=("Kutaisi", "Prometheus Cave", "Martvili Canyon", "Kutaisi"),
            stops_ru=("Кутаиси", "Пещера Прометея", "Каньон Мартвили", "Кутаиси"),
            total_distance_km=130,
            duration_label="5-6 Hours",
            reasoning_en=_CLASSIC_REASONING_EN,
            reasoning_ru=_CLASSIC_REASONING_RU,
        ),
        OriginHub.BATUMI: FallbackEntry(
            stops_en=("Batumi", "Botanical Garden", "Petra Fortress", "Batumi"),
            stops_ru=("Батуми", "Ботанический Сад", "Петра", "Батуми"),
            total_distance_km=50,
            duration_label="5-6 Hours",
            reasoning_en=_CLASSIC_REASONING_EN,
            reasoning_ru=_CLASSIC_REASONING_RU,
        ),
    },
    default_hub=OriginHub.TBILISI,
)


def synthesize_fallback(
    request: PlanRequest,
    catalog: FallbackCatalog = DEFAULT_CATALOG,
) -> Route:
    """
    Build the canned route for a request.

    Args:
        request: Planning request (origin hub and language are used)
        catalog: Catalog to read from

    Returns:
        A fresh Route localized to ``request.language``
    """
    return catalog.entry_for(request.origin_hub).to_route(request.language)
