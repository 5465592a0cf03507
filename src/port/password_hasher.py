"""Password hasher port — one-way salted hashing of user passwords."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for hashing and verifying passwords."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt."""
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """Return True if password matches the hash (salt is read from the hash)."""
        ...
