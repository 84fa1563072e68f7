from __future__ import annotations

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"
    http_status = 400

    def __init__(self, message: str = "", *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.code, "message": self.message}
        payload.update(self.details)
        return payload


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    http_status = 404


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    http_status = 403


class StateConflictError(DomainError):
    """The requested transition is not allowed from the current state."""

    code = "STATE_CONFLICT"
    http_status = 409


class AlreadyCheckedIn(StateConflictError):
    code = "ALREADY_CHECKED_IN"


class AlreadyCheckedOut(StateConflictError):
    code = "ALREADY_CHECKED_OUT"


class NotCheckedIn(StateConflictError):
    code = "NOT_CHECKED_IN"


class CheckOutPrecedesCheckIn(StateConflictError):
    code = "CHECK_OUT_PRECEDES_CHECK_IN"


class AlreadyProcessed(StateConflictError):
    code = "ALREADY_PROCESSED"


class OverlappingRequest(StateConflictError):
    code = "OVERLAPPING_REQUEST"


class PayrollRunInProgress(StateConflictError):
    code = "PAYROLL_RUN_IN_PROGRESS"


class PolicyRejection(DomainError):
    code = "POLICY_REJECTED"
    http_status = 403


class LocationOutOfRange(PolicyRejection):
    code = "LOCATION_OUT_OF_RANGE"

    def __init__(self, *, distance: float, required: float):
        self.distance = int(round(distance))
        self.required = int(round(required))
        super().__init__(
            f"You are {self.distance}m away from office. Must be within {self.required}m to mark attendance.",
            details={"distance": self.distance, "required": self.required},
        )
