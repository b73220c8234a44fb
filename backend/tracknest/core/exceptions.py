"""
Application error taxonomy.

Services and the authorization core raise these; the HTTP layer translates
them into status codes and ``{"message": ...}`` bodies (see ``tracknest.main``).
"""


class TrackNestError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(TrackNestError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401
    default_message = "Authentication required"


class PolicyDenied(TrackNestError):
    """Caller is authenticated but not permitted."""

    status_code = 403
    default_message = "Access denied"


class NotFound(TrackNestError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(TrackNestError):
    status_code = 400
    default_message = "Invalid request"


class Conflict(TrackNestError):
    status_code = 409
    default_message = "Conflict"


class PersistenceError(TrackNestError):
    """Unexpected database failure. The message is never sent to clients."""

    status_code = 500
    default_message = "Database operation failed"
