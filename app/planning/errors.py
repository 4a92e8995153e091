## Error taxonomy for plan generation


class PlanningError(Exception):
    """Base class; every subclass surfaces to the caller as a 500 with its message."""


class ValidationError(PlanningError):
    """Malformed request, rejected before any outbound call."""


class UpstreamError(PlanningError):
    """Generative or content-search service unreachable or returned a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SchemaError(PlanningError):
    """Generative service returned JSON that does not match the plan shape."""


class PersistenceError(PlanningError):
    """A storage write failed."""
