"""
Tests for app logging setup and session transition logs.
"""

import logging

from trip_planner.shared.logging.config import (
    NOISY_LOGGERS,
    configure_logging,
    log_state_transition,
)


class TestLogStateTransition:
    def test_line_carries_session_fields(self, caplog):
        caplog.set_level(logging.INFO, logger="trip_planner.planner.session")
        log_state_transition(
            "plan_ready",
            {"session_id": "s-9", "phase": "RESULT", "origin_hub": "kutaisi", "served_by": "fallback"},
            extra={"stops": 4},
        )

        record = caplog.records[-1]
        assert record.name == "trip_planner.planner.session"
        assert "[session=s-9]" in record.getMessage()
        assert "[event=plan_ready]" in record.getMessage()
        assert "served_by=fallback" in record.getMessage()
        assert "stops=4" in record.getMessage()
        assert record.session_event == {
            "event": "plan_ready",
            "session_id": "s-9",
            "phase": "RESULT",
            "origin_hub": "kutaisi",
            "served_by": "fallback",
            "extra": {"stops": 4},
        }

    def test_missing_session_id(self, caplog):
        caplog.set_level(logging.INFO, logger="trip_planner.planner.session")
        log_state_transition("plan_reset", {"phase": "INPUT"})
        assert "[session=unknown]" in caplog.records[-1].getMessage()
        assert caplog.records[-1].session_event["served_by"] is None

    def test_custom_logger(self, caplog):
        logger = logging.getLogger("trip_planner.tests.custom")
        caplog.set_level(logging.INFO, logger="trip_planner.tests.custom")
        log_state_transition("plan_submitted", {"phase": "LOADING"}, logger=logger)
        assert caplog.records[-1].name == "trip_planner.tests.custom"


class TestConfigureLogging:
    def test_configures_root_and_quiets_noisy_loggers(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(logging.DEBUG)

        assert calls[0]["level"] == logging.DEBUG
        assert calls[0]["force"] is True
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
