class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class DetectionError(Exception):
    """Base exception for absence detection runs."""


class DetectionLockedError(DetectionError):
    """Raised when another detection run holds the advisory lock."""


class DetectionTimeoutError(DetectionError):
    """Raised when a detection run exceeds its time budget."""


class DetectionTransactionAbortedError(DetectionError):
    """Raised when the database rolled back the detection transaction (e.g. deadlock)."""
