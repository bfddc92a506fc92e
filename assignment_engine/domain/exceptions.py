"""Engine exceptions.

Business outcomes (no eligible agent, low confidence, stale data) are not
exceptions: they are recorded on the Decision. Only I/O, lookups and
configuration validation raise.
"""


class AssignmentEngineError(Exception):
    """Base class for all engine errors."""


class ConfigInvalidError(AssignmentEngineError):
    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class UpstreamRateLimitedError(AssignmentEngineError):
    """Raised once the retry budget for HTTP 429 responses is exhausted."""

    def __init__(self, context: str, attempts: int):
        super().__init__(f"Upstream rate limit persisted after {attempts} attempts ({context})")
        self.context = context
        self.attempts = attempts


class TicketNotFoundError(AssignmentEngineError, LookupError):
    pass


class AgentNotFoundError(AssignmentEngineError, LookupError):
    pass


class DecisionNotFoundError(AssignmentEngineError, LookupError):
    pass


class UpstreamUnavailableError(AssignmentEngineError):
    """The ticketing system could not be reached or answered with an error."""
