"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Every error carries an ErrorKind; route handlers map the kind (never the
message text) to an HTTP status code.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    EMAIL_IN_USE = "email_in_use"
    NOT_FOUND = "not_found"
    MISSING_ID = "missing_id"
    MISSING_EMAIL = "missing_email"
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"


class DomainError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind
    default_message = "Domain error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid data"


class InvalidInputError(ValidationError):
    """User data failed field validation. Carries every field violation."""

    def __init__(self, violations: list):
        self.violations = list(violations)
        joined = ", ".join(v.message for v in self.violations)
        super().__init__(f"Invalid data: {joined}")


class EmailInUseError(DomainError):
    """Another user already has this email."""

    kind = ErrorKind.EMAIL_IN_USE
    default_message = "Email already in use"


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class MissingIdError(DomainError):
    kind = ErrorKind.MISSING_ID
    default_message = "ID is required"


class MissingEmailError(DomainError):
    kind = ErrorKind.MISSING_EMAIL
    default_message = "Email is required"


class MissingCredentialsError(DomainError):
    kind = ErrorKind.MISSING_CREDENTIALS
    default_message = "Email and password are required"


class InvalidCredentialsError(DomainError):
    """Login failed. Deliberately vague: wrong password and unknown email look the same."""

    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"
