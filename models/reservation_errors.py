"""
Reservation engine exceptions.
Raised in the models and services, translated to JSON responses by the
application error handlers.
"""


class ReservationError(Exception):
    """Base exception for all reservation engine errors."""

    code = 'reservation_error'
    status_code = 400

    def __init__(self, message: str, reservation: dict = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.reservation = reservation
        self.details = details or {}

    def to_dict(self) -> dict:
        payload = {'code': self.code, 'error': self.message}
        if self.reservation is not None:
            # Tokens never leave through error payloads
            payload['reservation'] = {
                key: value for key, value in self.reservation.items() if key != 'token'
            }
        if self.details:
            payload['details'] = self.details
        return payload


class ValidationError(ReservationError):
    """Raised for malformed input (bad interval, hours, dates, outcomes)."""

    code = 'validation_error'
    status_code = 400


class MissingReasonError(ValidationError):
    """Raised when a rejection is submitted without a reason."""

    code = 'missing_reason'


class ConflictError(ReservationError):
    """Raised when a buffered overlap with an active reservation is detected."""

    code = 'conflict'
    status_code = 409

    def __init__(self, message: str, conflicts: list = None):
        super().__init__(message, details={'conflicts': conflicts or []})
        self.conflicts = conflicts or []


class NotFoundError(ReservationError):
    """Raised for an unknown token or id."""

    code = 'not_found'
    status_code = 404


class AlreadyDecidedError(ReservationError):
    """Raised when a decision conflicts with the one already stored."""

    code = 'already_decided'
    status_code = 409


class InvalidStateTransitionError(AlreadyDecidedError):
    """Raised when a transition leaves a terminal state."""

    code = 'invalid_transition'


class ClassifierUnavailableError(ReservationError):
    """Raised when the authorization gate cannot produce a verdict."""

    code = 'classifier_unavailable'
    status_code = 503


class StorageUnavailableError(ReservationError):
    """Raised when the authoritative store cannot be read or written."""

    code = 'storage_unavailable'
    status_code = 503


class TokenCollisionError(ReservationError):
    """Raised when a generated token already exists. Never overwritten."""

    code = 'token_collision'
    status_code = 500
