"""
Logging configuration for the planner service.

``configure_logging`` sets up the process-wide handler used by the app
entry point. ``log_state_transition`` records planner session transitions
as one readable line; the same fields are attached to the record as
``session_event`` for handlers that want them structured.
"""

import logging
import sys
from typing import Any, Dict, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai")

_SNAPSHOT_FIELDS = ("phase", "origin_hub", "served_by")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging to stdout and quiet noisy third-party loggers."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_state_transition(
    event: str,
    snapshot: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a planner session transition.

    Args:
        event: Name of the event (e.g., "plan_submitted", "plan_ready")
        snapshot: Session snapshot; session_id, phase, origin_hub and
            served_by are read from it
        extra: Additional context appended to the line
        logger: Logger instance to use. Defaults to the session logger.
    """
    if logger is None:
        logger = logging.getLogger("trip_planner.planner.session")

    session_id = snapshot.get("session_id") or "unknown"
    summary = {field: snapshot.get(field) for field in _SNAPSHOT_FIELDS}
    details = ", ".join(f"{k}={v}" for k, v in {**summary, **(extra or {})}.items())

    logger.info(
        f"[session={session_id}] [graph=planner] [event={event}] {details}",
        extra={"session_event": {"event": event, "session_id": session_id, **summary, "extra": extra or {}}},
    )
