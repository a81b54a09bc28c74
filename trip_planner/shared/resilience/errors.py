"""
Error taxonomy for calls to the inference service.

Fatal errors are never retried; everything else is treated as transient.
"""


class FatalCallError(Exception):
    """Raised when retrying a call cannot help (bad credentials or settings)."""

    pass


class ConfigurationError(FatalCallError):
    """Raised when the required credential or a setting is missing or malformed."""

    pass


class TransientCallError(Exception):
    """Raised for call failures that are worth retrying."""

    pass


class CallTimeoutError(TimeoutError):
    """Raised when a call does not settle before its deadline."""

    def __init__(self, deadline_ms: int):
        super().__init__(f"Call did not settle within {deadline_ms}ms")
        self.deadline_ms = deadline_ms
