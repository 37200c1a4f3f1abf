# content_analyst/errors.py


class AnalystError(Exception):
    """Base class for errors raised by the analysis service."""


class ValidationError(AnalystError):
    """Bad or missing input. Never retried."""


class StateTransitionError(ValidationError):
    """The requested analysis_status change would move a row backwards."""


class Unauthorized(AnalystError):
    """Missing or invalid principal."""


class NotFound(AnalystError):
    pass


class UpstreamUnavailable(AnalystError):
    """Search or completion provider failed (network error or non-success status)."""

    def __init__(self, message: str, status_code: int = None, body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PersistenceError(AnalystError):
    pass
