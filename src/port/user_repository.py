from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups on an unknown ID return None/False rather than raising;
    existence checks belong to the caller.
    """
    def create(self, email: str, password_hash: str, name: str) -> User:
        """Create a new user with a fresh ID and timestamps. Return the stored User."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email (exact match). Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(self, user_id: str, **fields) -> User | None:
        """Merge fields onto a user and refresh updated_at. Return None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a user was removed."""
        ...

    def list_all(self) -> list[User]:
        """Return every stored user, in no particular order."""
        ...

    def count(self) -> int:
        """Return the number of stored users."""
        ...
