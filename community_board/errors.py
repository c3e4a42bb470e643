"""
Domain error taxonomy shared by every service.

Each error carries the HTTP status the gateway maps it to, so route handlers
never have to translate them one by one.
"""

from typing import Dict


class CommunityBoardError(Exception):
    """Base class for all per-request failures raised by the domain."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message}


class ValidationError(CommunityBoardError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid input"


class AuthError(CommunityBoardError):
    """Missing or invalid credentials, or not logged in."""

    status_code = 401
    default_message = "Authentication required. Please log in."


class ForbiddenError(CommunityBoardError):
    """Authenticated, but not the owner of the target resource."""

    status_code = 403
    default_message = "Permission denied"


class NotFoundError(CommunityBoardError):
    status_code = 404
    default_message = "Not found"


class ConflictError(CommunityBoardError):
    """A unique field (e.g. email) is already taken."""

    status_code = 409
    default_message = "Conflict"


class StoreError(CommunityBoardError):
    """The store failed in a way retrying will not fix."""

    status_code = 500
    default_message = "Storage failure"
    retryable = False


class StoreUnavailableError(StoreError):
    """The store is unreachable or timed out; the caller may retry."""

    status_code = 503
    default_message = "Storage temporarily unavailable, please retry"
    retryable = True
