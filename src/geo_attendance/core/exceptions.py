from __future__ import annotations

from .enums import LocationErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFound(DomainError):
    """Raised when the requested employee, station or record does not exist."""


class PreconditionError(DomainError):
    """Raised when an attendance action is not allowed in the current state."""


class AlreadyCheckedIn(PreconditionError):
    def __init__(self, message: str = "You have already checked in today"):
        super().__init__(message)


class NoCheckInFound(PreconditionError):
    def __init__(self, message: str = "No check-in found for today"):
        super().__init__(message)


class AlreadyCheckedOut(NoCheckInFound):
    def __init__(self, message: str = "You have already checked out today"):
        super().__init__(message)


class ResourceUnavailable(DomainError):
    """Raised when an external collaborator (GPS, photo store) cannot serve a request."""


_LOCATION_MESSAGES = {
    LocationErrorKind.PERMISSION_DENIED: "Location permission denied. Please enable location access.",
    LocationErrorKind.POSITION_UNAVAILABLE: "Location information unavailable.",
    LocationErrorKind.TIMEOUT: "Location request timed out.",
}


class LocationUnavailable(ResourceUnavailable):
    """All GPS failures gate attendance the same way; only the message differs."""

    def __init__(self, reason: LocationErrorKind = LocationErrorKind.POSITION_UNAVAILABLE):
        self.reason = reason
        super().__init__(_LOCATION_MESSAGES[reason])


class UploadFailed(ResourceUnavailable):
    def __init__(self, message: str = "Could not upload the selfie. Please try again."):
        super().__init__(message)
