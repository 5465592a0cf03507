"""User service — user lifecycle and credential business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
Every user leaving this module is a SafeUser (no password field).
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from domain.model.errors import (
    EmailInUseError,
    InvalidCredentialsError,
    InvalidInputError,
    MissingCredentialsError,
    MissingEmailError,
    MissingIdError,
    NotFoundError,
)
from domain.model.user import SafeUser
from domain.model.validation import validate_user, validate_user_patch
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

DUMMY_PASSWORD = "unknown-user-placeholder"


class UserService:
    """Create, read, update, delete and authenticate users.

    The repository does not enforce email uniqueness, so the check and the
    write happen together under a lock. Hashing stays outside the lock and
    runs only once validation and a first uniqueness check have passed.
    """

    def __init__(self, repo: UserRepository, hasher: PasswordHasher):
        self.repo = repo
        self.hasher = hasher
        self._email_lock = threading.Lock()
        self._dummy_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        # Unknown emails are checked against this so they cost as much as a real check
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(DUMMY_PASSWORD)
        return self._dummy_hash

    def _email_taken(self, email: str, user_id: str | None = None) -> bool:
        owner = self.repo.get_by_email(email)
        return owner is not None and owner.id != user_id

    # ── write operations ─────────────────────────────────────

    def create(self, data: Mapping[str, Any] | None) -> SafeUser:
        """Register a new user.

        Raises:
            InvalidInputError: one or more fields failed validation
            EmailInUseError: email already registered
        """
        result = validate_user(data)
        if not result.ok:
            raise InvalidInputError(result.violations)

        value = result.value
        email = value["email"]
        if self._email_taken(email):
            raise EmailInUseError()

        password_hash = self.hasher.hash(value["password"])

        with self._email_lock:
            # Another writer may have claimed the email while we were hashing
            if self._email_taken(email):
                raise EmailInUseError()
            user = self.repo.create(email=email, password_hash=password_hash, name=value["name"])

        logger.info("User created", extra={"userId": user.id, "email": email})
        return user.to_safe()

    def update(self, user_id: str, patch: Mapping[str, Any] | None) -> SafeUser:
        """Apply a partial update.

        Only fields present in the patch are validated and changed. A new
        password is hashed before it reaches the repository.

        Raises:
            MissingIdError, NotFoundError, InvalidInputError, EmailInUseError
        """
        if not user_id:
            raise MissingIdError()
        if not self.repo.get_by_id(user_id):
            raise NotFoundError()

        result = validate_user_patch(patch)
        if not result.ok:
            raise InvalidInputError(result.violations)

        fields = dict(result.value)
        email = fields.get("email")
        if email is not None and self._email_taken(email, user_id):
            raise EmailInUseError()

        if "password" in fields:
            fields["password_hash"] = self.hasher.hash(fields.pop("password"))

        with self._email_lock:
            if email is not None and self._email_taken(email, user_id):
                raise EmailInUseError()
            user = self.repo.update(user_id, **fields)

        if not user:
            # Deleted between the existence check and the write
            raise NotFoundError()

        logger.info("User updated", extra={"userId": user_id, "fields": sorted(result.value)})
        return user.to_safe()

    def delete(self, user_id: str) -> None:
        """Delete a user.

        Raises:
            MissingIdError, NotFoundError
        """
        if not user_id:
            raise MissingIdError()
        if not self.repo.delete(user_id):
            raise NotFoundError()
        logger.info("User deleted", extra={"userId": user_id})

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> SafeUser:
        if not user_id:
            raise MissingIdError()
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError()
        return user.to_safe()

    def get_by_email(self, email: str) -> SafeUser:
        if not email:
            raise MissingEmailError()
        user = self.repo.get_by_email(email)
        if not user:
            raise NotFoundError()
        return user.to_safe()

    def list_all(self) -> list[SafeUser]:
        return [user.to_safe() for user in self.repo.list_all()]

    # ── credentials ──────────────────────────────────────────

    def validate_credentials(self, email: str, password: str) -> bool:
        """Check an email/password pair. Never raises.

        Unknown email and wrong password both return False, with no detail.
        """
        if not isinstance(email, str) or not isinstance(password, str):
            return False
        user = self.repo.get_by_email(email)
        if not user:
            self.hasher.verify(password, self._unknown_user_hash())
            return False
        return self.hasher.verify(password, user.password_hash)

    def authenticate(self, email: str, password: str) -> SafeUser:
        """Authenticate a user by email and password.

        Doesn't reveal whether the email exists.

        Raises:
            MissingCredentialsError: email or password not supplied
            InvalidCredentialsError: invalid credentials (deliberately vague)
        """
        if not email or not password:
            raise MissingCredentialsError()

        if not self.validate_credentials(email, password):
            logger.info("Login rejected", extra={"email": email})
            raise InvalidCredentialsError()

        user = self.repo.get_by_email(email)
        if not user:
            raise InvalidCredentialsError()

        logger.info("User logged in", extra={"userId": user.id, "email": email})
        return user.to_safe()
