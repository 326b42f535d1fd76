class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when pupil credentials are missing or rejected."""


class RecordsError(Exception):
    """Base exception for school-records client errors."""


class RecordsAuthError(RecordsError):
    """Login to the records service failed."""


class RecordsAPIError(RecordsError):
    """The records service answered with an unsuccessful response."""


class RecordsConnectionError(RecordsError):
    """Connection to the records service failed."""


class RecordsDataError(RecordsError):
    """The records service returned data that could not be parsed."""
