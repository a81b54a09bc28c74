"""
Presentation state machine for the planner.

The UI drives a session through INPUT -> LOADING -> RESULT and back to
INPUT on reset. Validation failures keep the session in INPUT with a
message; model or parse failures are invisible apart from an optional
informational notice shown with the substituted route.
"""

import logging
from typing import Any, Dict, Optional

from trip_planner.planner.booking import OnPlanAccepted
from trip_planner.planner.errors import InvalidTransitionError, PlanValidationError
from trip_planner.planner.fallback import synthesize_fallback
from trip_planner.planner.orchestrator import RoutePlanner
from trip_planner.planner.schemas import Language, PlannerPhase, PlanRequest
from trip_planner.shared.contracts.route_output import Route
from trip_planner.shared.logging.config import log_state_transition


logger = logging.getLogger(__name__)


_SUBSTITUTION_NOTICES = {
    Language.EN: "Still searching... here is the best available route for now.",
    Language.RU: "Всё ещё ищем... вот лучший доступный маршрут.",
}


class PlannerSession:
    """
    One user's planning session.

    Attributes:
        phase: Current presentation phase
        request: Request being edited (INPUT) or planned (LOADING/RESULT)
        route: Route held in RESULT, None otherwise
        notice: Informational message accompanying a substituted route
        validation_message: Message explaining why a submit was refused
    """

    def __init__(
        self,
        planner: RoutePlanner,
        request: Optional[PlanRequest] = None,
        on_plan_accepted: Optional[OnPlanAccepted] = None,
        session_id: Optional[str] = None,
    ):
        self.planner = planner
        self.request = request or PlanRequest()
        self.on_plan_accepted = on_plan_accepted
        self.session_id = session_id

        self.phase = PlannerPhase.INPUT
        self.route: Optional[Route] = None
        self.notice: Optional[str] = None
        self.validation_message: Optional[str] = None
        self._served_by: Optional[str] = None
        self._accepted = False

    def _snapshot(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "phase": self.phase.value,
            "origin_hub": self.request.origin_hub.value,
            "served_by": self._served_by,
        }

    def _require(self, phase: PlannerPhase, action: str) -> None:
        if self.phase is not phase:
            raise InvalidTransitionError(
                f"Cannot {action} in phase {self.phase.value} (expected {phase.value})"
            )

    def update(self, **fields: Any) -> PlanRequest:
        """
        Edit fields of the pending request.

        Raises:
            InvalidTransitionError: If not in INPUT
            pydantic.ValidationError: If a field value is invalid
        """
        self._require(PlannerPhase.INPUT, "edit the request")
        data = self.request.model_dump()
        data.update(fields)
        self.request = PlanRequest.model_validate(data)
        self.validation_message = None
        return self.request

    async def submit(self) -> Optional[Route]:
        """
        Plan the pending request.

        Returns:
            The route (phase RESULT), or None when validation refused the
            request (phase stays INPUT, validation_message set).

        Raises:
            InvalidTransitionError: If not in INPUT
        """
        self._require(PlannerPhase.INPUT, "submit")

        try:
            self.request.ensure_dispatchable()
        except PlanValidationError as e:
            self.validation_message = e.message
            log_state_transition(
                "plan_rejected", self._snapshot(), extra={"reason": e.message}
            )
            return None

        self.validation_message = None
        self.phase = PlannerPhase.LOADING
        log_state_transition("plan_submitted", self._snapshot())

        try:
            outcome = await self.planner.run(self.request, session_id=self.session_id)
            route, served_by, errors = outcome.route, outcome.served_by, outcome.errors
        except Exception as e:
            logger.exception(f"[session={self.session_id}] [graph=planner] Planner failed: {e}")
            route = synthesize_fallback(self.request, self.planner.catalog)
            served_by, errors = "fallback", [f"planner: {e}"]

        self.route = route
        self._served_by = served_by
        self._accepted = False
        if served_by == "fallback":
            self.notice = _SUBSTITUTION_NOTICES[self.request.language]
        else:
            self.notice = None

        self.phase = PlannerPhase.RESULT
        log_state_transition(
            "plan_ready",
            self._snapshot(),
            extra={"stops": len(self.route.stops), "errors": errors},
        )
        return self.route

    def accept(self, travel_date: Optional[str] = None) -> Route:
        """
        Commit to the held route and notify the booking boundary once.

        Args:
            travel_date: Date override (YYYY-MM-DD); defaults to the request's

        Raises:
            InvalidTransitionError: If not in RESULT or already accepted
        """
        self._require(PlannerPhase.RESULT, "accept a plan")
        if self._accepted:
            raise InvalidTransitionError("Plan already accepted")

        travel_date = travel_date or self.request.travel_date.isoformat()
        if self.on_plan_accepted is not None:
            self.on_plan_accepted(self.route, travel_date)
        self._accepted = True
        log_state_transition("plan_accepted", self._snapshot(), extra={"date": travel_date})
        return self.route

    def reset(self) -> None:
        """
        Return to INPUT and discard the held route.

        Raises:
            InvalidTransitionError: If not in RESULT
        """
        self._require(PlannerPhase.RESULT, "reset")
        self.route = None
        self.notice = None
        self._served_by = None
        self._accepted = False
        self.phase = PlannerPhase.INPUT
        log_state_transition("plan_reset", self._snapshot())
