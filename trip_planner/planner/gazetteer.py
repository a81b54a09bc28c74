"""
Static reference data: known locations the planner may route through.

Only a bounded prefix of the list is embedded in prompts to keep them small.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from trip_planner.planner.schemas import Language


@dataclass(frozen=True)
class KnownLocation:
    """A location with bilingual names."""

    id: str
    name_en: str
    name_ru: str
    lat: float
    lng: float
    is_mountainous: bool = False

    def name_for(self, language: Language) -> str:
        return self.name_ru if language is Language.RU else self.name_en


GEORGIAN_LOCATIONS: Tuple[KnownLocation, ...] = (
    KnownLocation("tbilisi", "Tbilisi", "Тбилиси", 41.7151, 44.8271),
    KnownLocation("kutaisi", "Kutaisi", "Кутаиси", 42.2662, 42.7180),
    KnownLocation("batumi", "Batumi", "Батуми", 41.6168, 41.6367),
    KnownLocation("mtskheta", "Mtskheta", "Мцхета", 41.8456, 44.7186),
    KnownLocation("jvari", "Jvari Monastery", "Джвари", 41.8384, 44.7335),
    KnownLocation("ananuri", "Ananuri Fortress", "Ананури", 42.1642, 44.7042, True),
    KnownLocation("gudauri", "Gudauri", "Гудаури", 42.4786, 44.4761, True),
    KnownLocation("kazbegi", "Kazbegi", "Казбеги", 42.6573, 44.6434, True),
    KnownLocation("gergeti", "Gergeti Trinity Church", "Гергети", 42.6627, 44.6200, True),
    KnownLocation("sighnaghi", "Sighnaghi", "Сигнахи", 41.6200, 45.9220),
    KnownLocation("telavi", "Telavi", "Телави", 41.9198, 45.4731),
    KnownLocation("kvareli", "Kvareli", "Кварели", 41.9545, 45.8092),
    KnownLocation("bodbe", "Bodbe Monastery", "Бодбе", 41.6066, 45.9330),
    KnownLocation("gori", "Gori", "Гори", 41.9842, 44.1158),
    KnownLocation("uplistsikhe", "Uplistsikhe", "Уплисцихе", 41.9672, 44.2072),
    KnownLocation("borjomi", "Borjomi", "Боржоми", 41.8386, 43.3790, True),
    KnownLocation("bakuriani", "Bakuriani", "Бакуриани", 41.7500, 43.5328, True),
    KnownLocation("vardzia", "Vardzia", "Вардзия", 41.3811, 43.2844, True),
    KnownLocation("akhaltsikhe", "Akhaltsikhe", "Ахалцихе", 41.6390, 42.9826),
    KnownLocation("prometheus", "Prometheus Cave", "Пещера Прометея", 42.3767, 42.6008),
    KnownLocation("sataplia", "Sataplia", "Сатаплия", 42.3111, 42.6742),
    KnownLocation("martvili", "Martvili Canyon", "Каньон Мартвили", 42.4573, 42.3776),
    KnownLocation("okatse", "Okatse Canyon", "Каньон Окаце", 42.4550, 42.5460),
    KnownLocation("gelati", "Gelati Monastery", "Гелати", 42.2946, 42.7681),
    KnownLocation("tskaltubo", "Tskaltubo", "Цхалтубо", 42.3264, 42.5981),
    KnownLocation("botanical_garden", "Botanical Garden", "Ботанический Сад", 41.6936, 41.7075),
    KnownLocation("petra", "Petra Fortress", "Петра", 41.7667, 41.7500),
    KnownLocation("gonio", "Gonio Fortress", "Гонио", 41.5727, 41.5729),
    KnownLocation("kobuleti", "Kobuleti", "Кобулети", 41.8214, 41.7792),
    KnownLocation("mestia", "Mestia", "Местиа", 43.0453, 42.7270, True),
    KnownLocation("ushguli", "Ushguli", "Ушгули", 42.9170, 43.0150, True),
    KnownLocation("zugdidi", "Zugdidi", "Зугдиди", 42.5088, 41.8709),
    KnownLocation("stepantsminda", "Stepantsminda", "Степанцминда", 42.6580, 44.6430, True),
    KnownLocation("david_gareja", "David Gareja", "Давид Гареджа", 41.4470, 45.3760),
    KnownLocation("tusheti", "Tusheti", "Тушети", 42.3850, 45.6270, True),
)


class Gazetteer:
    """Read-only lookup over a fixed set of known locations."""

    def __init__(self, locations: Optional[Iterable[KnownLocation]] = None):
        self._locations: Tuple[KnownLocation, ...] = (
            tuple(locations) if locations is not None else GEORGIAN_LOCATIONS
        )

    def list_known_locations(self, language: Language) -> List[str]:
        """Localized names of every known location, in catalog order."""
        return [location.name_for(language) for location in self._locations]

    def find(self, name: str) -> Optional[KnownLocation]:
        """Find a location by its id or either localized name (case-insensitive)."""
        key = name.strip().casefold()
        for location in self._locations:
            if key in (
                location.id.casefold(),
                location.name_en.casefold(),
                location.name_ru.casefold(),
            ):
                return location
        return None

    def __len__(self) -> int:
        return len(self._locations)


DEFAULT_GAZETTEER = Gazetteer()
