"""User data validation.

Checks name, email and password in a single pass and collects every field
violation instead of stopping at the first bad field. Within a field only the
first failing rule is reported. Fields other than these three are left alone.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 50

VALIDATED_FIELDS = ("name", "email", "password")

_LABELS = {"name": "Name", "email": "Email", "password": "Password"}


@dataclass(frozen=True)
class FieldViolation:
    """A single rule violation on one input field."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Normalized value when valid, otherwise the ordered field violations."""
    value: dict[str, Any] | None = None
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def _check_name(value: str) -> str:
    if len(value) < NAME_MIN_LENGTH:
        raise PydanticCustomError("name_too_short", f"Name must have at least {NAME_MIN_LENGTH} characters")
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError("name_too_long", f"Name must have at most {NAME_MAX_LENGTH} characters")
    return value


def _check_email(value: str) -> str:
    local, _, domain = value.rpartition("@")
    if not local or "." not in domain:
        raise PydanticCustomError("email_format", "Email must have a valid format")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email_format", "Email must have a valid format") from None
    # Stored as given (case-sensitive), not email-validator's normalized form
    return value


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError(
            "password_too_short", f"Password must have at least {PASSWORD_MIN_LENGTH} characters"
        )
    if len(value) > PASSWORD_MAX_LENGTH:
        raise PydanticCustomError(
            "password_too_long", f"Password must have at most {PASSWORD_MAX_LENGTH} characters"
        )
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"[0-9]", value)):
        raise PydanticCustomError(
            "password_strength",
            "Password must contain at least: 1 lowercase letter, 1 uppercase letter and 1 number",
        )
    return value


Name = Annotated[str, StringConstraints(strict=True, strip_whitespace=True), AfterValidator(_check_name)]
Email = Annotated[str, StringConstraints(strict=True, strip_whitespace=True), AfterValidator(_check_email)]
Password = Annotated[str, StringConstraints(strict=True), AfterValidator(_check_password)]


class _UserInput(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Name
    email: Email
    password: Password


class _UserPatch(BaseModel):
    # Defaults are never validated, so only fields present in the patch are checked
    model_config = ConfigDict(extra="ignore")

    name: Name = None
    email: Email = None
    password: Password = None


def _to_violations(exc: PydanticValidationError) -> list[FieldViolation]:
    violations = []
    for error in exc.errors():
        field_name = str(error["loc"][0]) if error["loc"] else "body"
        label = _LABELS.get(field_name, field_name.capitalize())
        if error["type"] == "missing":
            message = f"{label} is required"
        elif error["type"] == "string_type":
            message = f"{label} must be a string"
        else:
            message = error["msg"]
        violations.append(FieldViolation(field=field_name, message=message))
    return violations


def _not_an_object() -> ValidationResult:
    return ValidationResult(violations=[FieldViolation(field="body", message="User data must be an object")])


def validate_user(data: Mapping[str, Any] | None) -> ValidationResult:
    """Validate a complete user record (name, email, password).

    A missing field and an explicit null are both reported as required;
    an empty string is present and fails the length or format rule instead.
    """
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        return _not_an_object()

    candidate = {k: v for k, v in data.items() if not (k in _LABELS and v is None)}
    try:
        model = _UserInput.model_validate(candidate)
    except PydanticValidationError as e:
        return ValidationResult(violations=_to_violations(e))
    return ValidationResult(value=model.model_dump())


def validate_user_patch(patch: Mapping[str, Any] | None) -> ValidationResult:
    """Validate only the fields present in a partial update.

    The returned value keeps just the present, normalized name/email/password
    fields; every other key is dropped.
    """
    if patch is None:
        patch = {}
    if not isinstance(patch, Mapping):
        return _not_an_object()

    try:
        model = _UserPatch.model_validate(dict(patch))
    except PydanticValidationError as e:
        return ValidationResult(violations=_to_violations(e))
    return ValidationResult(value=model.model_dump(exclude_unset=True))
