from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SafeUser:
    """User as exposed outside the service layer. Has no password field."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass
class User:
    """Domain model representing a stored user record."""
    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    def to_safe(self) -> SafeUser:
        return SafeUser(
            id=self.id,
            name=self.name,
            email=self.email,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
