"""
Tests for turning accepted routes into tours.
"""

from trip_planner.planner.booking import (
    InMemoryTourStore,
    TourBookingSink,
    estimate_price,
    tour_from_route,
)
from trip_planner.shared.contracts.route_output import Route


def _make_route(stops, km=100.0):
    return Route(stops=stops, total_distance_km=km, duration_label="6 Hours", reasoning="Nice.")


class TestEstimatePrice:
    def test_flat_route(self):
        route = _make_route(["Tbilisi", "Mtskheta", "Tbilisi"], km=10)
        assert estimate_price(route, price_per_km=2.0, base_price=30.0) == 50

    def test_mountain_route_costs_more(self):
        flat = estimate_price(_make_route(["Tbilisi", "Mtskheta", "Tbilisi"]))
        mountain = estimate_price(_make_route(["Tbilisi", "Stepantsminda", "Tbilisi"]))
        assert mountain > flat

    def test_unknown_stops_are_priced_flat(self):
        assert estimate_price(_make_route(["Nowhere", "Elsewhere"], km=0)) == 30


class TestTourFromRoute:
    def test_tour_fields(self):
        route = _make_route(["Kutaisi", "Prometheus Cave", "Kutaisi"])
        tour = tour_from_route(route, "2025-07-01")
        assert tour.id.startswith("ai-tour-")
        assert tour.title_en == "AI Trip: Kutaisi -> Kutaisi"
        assert tour.route_stops == route.stops
        assert tour.itinerary == ["1. Kutaisi", "2. Prometheus Cave", "3. Kutaisi"]
        assert tour.travel_date == "2025-07-01"
        assert tour.duration == "6 Hours"
        assert tour.price.endswith("GEL")

    def test_ids_are_unique(self):
        route = _make_route(["A", "B"])
        assert tour_from_route(route, "2025-07-01").id != tour_from_route(route, "2025-07-01").id


class TestTourBookingSink:
    def test_saves_tour(self):
        store = InMemoryTourStore()
        sink = TourBookingSink(store)
        sink(_make_route(["Batumi", "Gonio Fortress", "Batumi"]), "2025-08-15")
        assert store.list() == [sink.last_tour]
        assert sink.last_tour.travel_date == "2025-08-15"
