"""In-memory implementation of UserRepository.

Single-process table keyed by user ID. Nothing survives a restart.
"""

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from domain.model.user import User

# Fields a caller may change through update(); id and timestamps are owned here
_MUTABLE_FIELDS = frozenset({'name', 'email', 'password_hash'})


class InMemoryUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self._lock = threading.RLock()

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> User:
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self.store[user_id] = user
        return user

    def update(self, user_id: str, **fields) -> User | None:
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        with self._lock:
            user = self.store.get(user_id)
            if not user:
                return None

            # updated_at must move forward even if the clock has not ticked
            now = datetime.now(timezone.utc)
            if now <= user.updated_at:
                now = user.updated_at + timedelta(microseconds=1)

            updated = replace(user, **fields, updated_at=now)
            self.store[user_id] = updated
            return updated

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        with self._lock:
            for user in self.store.values():
                if user.email == email:
                    return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self.store.get(user_id)

    def list_all(self) -> list[User]:
        with self._lock:
            return list(self.store.values())

    def count(self) -> int:
        with self._lock:
            return len(self.store)
