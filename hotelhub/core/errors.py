"""
Domain errors raised by the availability engine and the authorization gate.

Each error carries the HTTP status and the stable error code the API renders.
None of them is retried internally; the caller decides what to do next.
"""
from typing import Any, Dict, List, Optional


class HotelHubError(Exception):
    status_code = 400
    code = "error"
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class InvalidIntervalError(HotelHubError):
    status_code = 422
    code = "invalid_interval"
    default_message = "Check-out must be after check-in"


class InvalidHoldDurationError(HotelHubError):
    status_code = 422
    code = "invalid_hold_duration"
    default_message = "Hold duration must be positive"


class ConflictError(HotelHubError):
    status_code = 409
    code = "conflict"
    default_message = "Room is not available for the requested dates"

    def __init__(
        self,
        conflicts: List[Dict[str, Any]],
        message: Optional[str] = None,
        alternatives: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.conflicts = conflicts
        self.alternatives = alternatives or []

    @property
    def booking_ids(self) -> List[Any]:
        return [c["booking_id"] for c in self.conflicts]

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["conflicts"] = self.conflicts
        body["alternatives"] = self.alternatives
        return body


class NotFoundError(HotelHubError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InvalidStateError(HotelHubError):
    status_code = 409
    code = "invalid_state"
    default_message = "Illegal status transition"


class UnauthenticatedError(HotelHubError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Authentication required"


class AccessDeniedError(HotelHubError):
    """Base for authorization refusals; renders without any tenant detail."""

    status_code = 403
    code = "access_denied"
    default_message = "Access denied"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": AccessDeniedError.code, "message": AccessDeniedError.default_message}


class TenantMismatchError(AccessDeniedError):
    pass


class InsufficientRoleError(AccessDeniedError):
    pass
