"""
Tests for the planner graph and the RoutePlanner orchestrator.

The model service is replaced by a scripted invoker so every path through
the graph (model, retry, timeout, fatal, malformed) runs offline.
"""

import asyncio
import time

import pytest

from trip_planner.planner.errors import PlanValidationError
from trip_planner.planner.fallback import synthesize_fallback
from trip_planner.planner.gazetteer import Gazetteer, KnownLocation
from trip_planner.planner.graph.build import create_planner_graph
from trip_planner.planner.graph.config import PlannerConfig, get_config
from trip_planner.planner.graph.router import route_after_extract, route_after_generate
from trip_planner.planner.orchestrator import RoutePlanner
from trip_planner.planner.schemas import Language, OriginHub, PlanRequest
from trip_planner.shared.llm import client as llm_client
from trip_planner.shared.resilience.errors import ConfigurationError, TransientCallError


# ============================================================================
# Test Fixtures
# ============================================================================


VALID_RESPONSE = (
    "Here is your route:\n```json\n"
    '{"stops": ["Kutaisi", "Okatse Canyon", "Martvili Canyon", "Kutaisi"], '
    '"totalDistanceKm": 140, "durationLabel": "7 Hours", "reasoning": "Canyons and waterfalls."}'
    "\n```"
)


class FakeInvoker:
    """Scripted stand-in for the model service."""

    def __init__(self, *script, hang=False):
        self.script = list(script)
        self.hang = hang
        self.calls = []

    async def __call__(self, prompt, language):
        self.calls.append((prompt, language))
        if self.hang:
            await asyncio.Event().wait()
        step = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(step, BaseException):
            raise step
        return step


def _make_request(**overrides):
    data = {
        "origin_hub": OriginHub.KUTAISI,
        "interest_tags": {"nature"},
        "language": Language.EN,
    }
    data.update(overrides)
    return PlanRequest(**data)


def _fast_config(**overrides):
    data = {"deadline_ms": 500, "max_attempts": 2, "fixed_delay_ms": 0}
    data.update(overrides)
    return get_config(**data)


def _make_planner(invoker, **config_overrides):
    return RoutePlanner(invoke=invoker, config=_fast_config(**config_overrides))


# ============================================================================
# Router
# ============================================================================


class TestRouters:
    def test_generate_routes_to_extract_with_response(self):
        assert route_after_generate({"raw_response": "text"}) == "extract"

    def test_generate_routes_to_fallback_without_response(self):
        assert route_after_generate({"raw_response": None}) == "fallback"

    def test_extract_routes(self):
        request = _make_request()
        assert route_after_extract({"route": synthesize_fallback(request)}) == "done"
        assert route_after_extract({"route": None}) == "fallback"


# ============================================================================
# Graph
# ============================================================================


class TestPlannerGraph:
    def test_graph_compiles(self):
        graph = create_planner_graph(FakeInvoker(VALID_RESPONSE))
        assert graph is not None

    def test_graph_model_path(self):
        invoker = FakeInvoker(VALID_RESPONSE)
        graph = create_planner_graph(invoker, _fast_config())
        state = asyncio.run(
            graph.ainvoke(
                {
                    "request": _make_request(),
                    "known_locations": ["Kutaisi", "Okatse Canyon"],
                    "prompt": None,
                    "raw_response": None,
                    "route": None,
                    "served_by": None,
                    "errors": [],
                    "messages": [],
                    "session_id": "test",
                }
            )
        )
        assert state["served_by"] == "model"
        assert state["route"].stops[1] == "Okatse Canyon"
        assert "Okatse Canyon" in state["prompt"]
        agents = [m["agent"] for m in state["messages"]]
        assert agents == ["generate", "extract"]


# ============================================================================
# RoutePlanner
# ============================================================================


class TestRoutePlanner:
    def test_model_route_is_returned(self):
        invoker = FakeInvoker(VALID_RESPONSE)
        outcome = asyncio.run(_make_planner(invoker).run(_make_request()))
        assert outcome.served_by == "model"
        assert outcome.route.stops == ["Kutaisi", "Okatse Canyon", "Martvili Canyon", "Kutaisi"]
        assert outcome.route.total_distance_km == 140
        assert outcome.errors == []
        assert len(invoker.calls) == 1

    def test_prompt_and_language_reach_invoker(self):
        invoker = FakeInvoker(VALID_RESPONSE)
        asyncio.run(_make_planner(invoker).run(_make_request(language=Language.RU)))
        prompt, language = invoker.calls[0]
        assert language is Language.RU
        assert "Kutaisi" in prompt
        assert "nature" in prompt

    def test_hanging_call_falls_back_to_catalog(self):
        """A call that never settles ends in the hub's catalog route."""
        invoker = FakeInvoker(hang=True)
        planner = _make_planner(invoker, deadline_ms=50, max_attempts=1)

        start = time.perf_counter()
        route = asyncio.run(planner.plan(_make_request()))
        elapsed = time.perf_counter() - start

        assert route.stops == ["Kutaisi", "Prometheus Cave", "Martvili Canyon", "Kutaisi"]
        assert route.total_distance_km == 130
        assert elapsed < 1.0
        assert len(invoker.calls) == 1

    def test_timeouts_are_retried(self):
        invoker = FakeInvoker(hang=True)
        planner = _make_planner(invoker, deadline_ms=20, max_attempts=3)
        outcome = asyncio.run(planner.run(_make_request()))
        assert outcome.served_by == "fallback"
        assert len(invoker.calls) == 3
        assert outcome.errors[0].startswith("transient")

    def test_configuration_error_is_not_retried(self):
        invoker = FakeInvoker(ConfigurationError("OPENAI_API_KEY is not set"))
        outcome = asyncio.run(_make_planner(invoker, max_attempts=5).run(_make_request()))
        assert outcome.served_by == "fallback"
        assert len(invoker.calls) == 1
        assert outcome.errors[0].startswith("fatal")

    def test_transient_then_success(self):
        invoker = FakeInvoker(TransientCallError("503"), VALID_RESPONSE)
        outcome = asyncio.run(_make_planner(invoker).run(_make_request()))
        assert outcome.served_by == "model"
        assert len(invoker.calls) == 2

    def test_exhausted_transient_failures_fall_back(self):
        invoker = FakeInvoker(TransientCallError("503"))
        outcome = asyncio.run(_make_planner(invoker, max_attempts=2).run(_make_request()))
        assert outcome.served_by == "fallback"
        assert len(invoker.calls) == 2

    def test_malformed_response_falls_back(self):
        invoker = FakeInvoker("I'm sorry, I cannot plan that trip.")
        outcome = asyncio.run(_make_planner(invoker).run(_make_request()))
        assert outcome.served_by == "fallback"
        assert outcome.route == synthesize_fallback(_make_request())
        assert any(e.startswith("extraction") for e in outcome.errors)
        # A parse failure is not retried
        assert len(invoker.calls) == 1

    def test_empty_response_falls_back(self):
        invoker = FakeInvoker("")
        outcome = asyncio.run(_make_planner(invoker).run(_make_request()))
        assert outcome.served_by == "fallback"

    def test_missing_duration_label_is_filled_from_request(self):
        invoker = FakeInvoker('{"stops": ["Kutaisi", "Gelati Monastery", "Kutaisi"]}')
        request = _make_request(duration_label="Half Day")
        route = asyncio.run(_make_planner(invoker).plan(request))
        assert route.duration_label == "Half Day"
        assert route.total_distance_km == 0

    def test_fallback_is_localized(self):
        invoker = FakeInvoker("no json")
        route = asyncio.run(_make_planner(invoker).plan(_make_request(language=Language.RU)))
        assert route.stops[0] == "Кутаиси"

    def test_wish_alone_is_dispatchable(self):
        invoker = FakeInvoker(VALID_RESPONSE)
        request = _make_request(interest_tags=set(), free_text_wish="waterfalls")
        outcome = asyncio.run(_make_planner(invoker).run(request))
        assert outcome.served_by == "model"

    def test_validation_error_makes_no_call(self):
        invoker = FakeInvoker(VALID_RESPONSE)
        request = _make_request(interest_tags=set(), free_text_wish="   ")
        with pytest.raises(PlanValidationError) as exc_info:
            asyncio.run(_make_planner(invoker).plan(request))
        assert exc_info.value.field == "interest_tags"
        assert invoker.calls == []

    def test_session_id_is_kept(self):
        outcome = asyncio.run(
            _make_planner(FakeInvoker(VALID_RESPONSE)).run(_make_request(), session_id="abc")
        )
        assert outcome.session_id == "abc"

    def test_known_locations_are_capped(self):
        locations = [KnownLocation(f"loc-{i}", f"Place {i}", f"Место {i}", 42.0, 43.0) for i in range(40)]
        planner = RoutePlanner(
            invoke=FakeInvoker(VALID_RESPONSE),
            config=PlannerConfig(max_known_locations=5),
            gazetteer=Gazetteer(locations),
        )
        assert planner.known_locations(Language.EN) == [f"Place {i}" for i in range(5)]
        assert planner.known_locations(Language.RU)[0] == "Место 0"

    def test_repeated_plans_are_independent(self):
        invoker = FakeInvoker("garbage", VALID_RESPONSE)
        planner = _make_planner(invoker, max_attempts=1)
        first = asyncio.run(planner.run(_make_request()))
        second = asyncio.run(planner.run(_make_request()))
        assert first.served_by == "fallback"
        assert second.served_by == "model"
        assert second.errors == []


class _UnavailableGazetteer:
    """Gazetteer whose backing store is down."""

    def list_known_locations(self, language):
        raise ConnectionError("gazetteer backend down")


class TestFailingCollaborators:
    def test_gazetteer_failure_still_plans(self):
        """Planning continues with no allowed locations when the gazetteer fails."""
        invoker = FakeInvoker(VALID_RESPONSE)
        planner = RoutePlanner(
            invoke=invoker, config=_fast_config(), gazetteer=_UnavailableGazetteer()
        )
        outcome = asyncio.run(planner.run(_make_request()))
        assert outcome.served_by == "model"
        prompt, _ = invoker.calls[0]
        assert "Any well-known location" in prompt

    def test_gazetteer_failure_with_bad_response_falls_back(self):
        planner = RoutePlanner(
            invoke=FakeInvoker("not a route"),
            config=_fast_config(),
            gazetteer=_UnavailableGazetteer(),
        )
        route = asyncio.run(planner.plan(_make_request()))
        assert route.stops[0] == "Kutaisi"
        assert route.total_distance_km == 130

    def test_default_invoker_without_api_key_falls_back_after_one_attempt(self, monkeypatch):
        """Missing credentials short-circuit the retry loop on the real invoker."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        llm_client.reset_client()

        key_reads = []
        read_api_key = llm_client.read_api_key

        def _counting_read_api_key():
            key_reads.append(1)
            return read_api_key()

        monkeypatch.setattr(llm_client, "read_api_key", _counting_read_api_key)

        planner = RoutePlanner(config=_fast_config(max_attempts=3, fixed_delay_ms=0))
        try:
            outcome = asyncio.run(planner.run(_make_request()))
        finally:
            llm_client.reset_client()

        assert outcome.served_by == "fallback"
        assert outcome.route.stops == ["Kutaisi", "Prometheus Cave", "Martvili Canyon", "Kutaisi"]
        assert len(key_reads) == 1
        assert len(outcome.errors) == 1
        assert outcome.errors[0].startswith("fatal: ConfigurationError")
