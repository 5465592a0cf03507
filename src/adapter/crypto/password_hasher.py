"""bcrypt implementation of PasswordHasher."""

import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)

# 2^10 = 1024 iterations; override with BCRYPT_ROUNDS (tests use the minimum, 4)
DEFAULT_BCRYPT_ROUNDS = 10


# bcrypt only reads 72 bytes and bcrypt>=5 raises past that. Passwords are
# pre-hashed to a 44-byte base64 SHA-256 digest so every byte counts.
def _encode(password: str) -> bytes:
    digest = hashlib.sha256(password.encode('utf-8')).digest()
    return base64.b64encode(digest)


class BcryptPasswordHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Bcrypt hashed password as string (salt embedded)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_encode(password), salt)
        return hashed.decode('utf-8')

    def verify(self, password: str, hashed: str) -> bool:
        """Verify password against hash.

        Args:
            password: Plain text password
            hashed: Bcrypt hashed password (string format)

        Returns:
            True if password matches, False otherwise (including malformed hashes)
        """
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode('utf-8'))
        except ValueError as e:
            logger.warning("Password hash could not be checked", extra={"error": str(e)})
            return False
