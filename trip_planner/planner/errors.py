"""
Planner-level errors.

Call failures never leave the planner (they are routed to the fallback
catalog); only caller-side validation and state machine misuse do.
"""


class PlanValidationError(ValueError):
    """Raised when a plan request cannot be dispatched (no interests and no wish)."""

    def __init__(self, message: str, field: str = "interest_tags"):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidTransitionError(Exception):
    """Raised when a session action is not allowed in the current phase."""

    pass
