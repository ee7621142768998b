class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EventFull(ValidationError):
    """Raised when a registration would exceed the event capacity."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""


class EventNotFound(NotFoundError):
    pass


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthenticationRequired(AuthenticationError):
    """Raised when an action needs a signed-in user and there is none."""


class StoreError(DomainError):
    """Raised when the event store cannot complete a call."""


class PartialUpdateError(StoreError):
    """The attendance record changed but the attendee counter did not.

    Both step outcomes are kept so callers can tell this apart from a plain
    store failure.
    """

    def __init__(self, message: str, *, event_id: str, user_id: str, record_changed: bool, counter_changed: bool):
        super().__init__(message)
        self.event_id = event_id
        self.user_id = user_id
        self.record_changed = record_changed
        self.counter_changed = counter_changed
