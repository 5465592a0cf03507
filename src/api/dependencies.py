import os

from fastapi import Request

from adapter.crypto.password_hasher import DEFAULT_BCRYPT_ROUNDS, BcryptPasswordHasher
from adapter.memory.user_repository import InMemoryUserRepository
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services.user_service import UserService


def build_user_service(
    repo: UserRepository | None = None,
    hasher: PasswordHasher | None = None,
) -> UserService:
    """Wire the user service. Missing collaborators get the default adapters."""
    if repo is None:
        repo = InMemoryUserRepository()
    if hasher is None:
        rounds = int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS))
        hasher = BcryptPasswordHasher(rounds=rounds)
    return UserService(repo, hasher)


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service
