"""User API routes.

Endpoints:
- POST /api/users: Create a user
- GET /api/users: List all users
- POST /api/users/login: Check credentials and return the user
- GET /api/users/{id}: Get a user
- PUT /api/users/{id}: Partially update a user
- DELETE /api/users/{id}: Delete a user

Handlers only translate between HTTP and UserService. Domain errors
propagate to the handlers in api.errors.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status

from api.dependencies import get_user_service
from api.models import (
    LoginRequest,
    MessageEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
)
from services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=UserEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: Optional[dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
):
    """Create a user from {name, email, password}."""
    user = service.create(payload)
    return UserEnvelope(data=UserResponse.from_domain(user), message="User created successfully")


@router.get("", response_model=UserListEnvelope, response_model_exclude_none=True)
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users."""
    users = [UserResponse.from_domain(u) for u in service.list_all()]
    return UserListEnvelope(data=users, count=len(users))


@router.post("/login", response_model=UserEnvelope, response_model_exclude_none=True)
async def login(
    request: Optional[LoginRequest] = None,
    service: UserService = Depends(get_user_service),
):
    """Validate credentials and return the user.

    Returns 400 when email or password is missing and 401 for any
    credential mismatch, whether or not the email exists.
    """
    request = request or LoginRequest()
    user = service.authenticate(request.email, request.password)
    return UserEnvelope(data=UserResponse.from_domain(user), message="Login successful")


@router.get("/{user_id}", response_model=UserEnvelope, response_model_exclude_none=True)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Get a user by ID."""
    user = service.get_by_id(user_id)
    return UserEnvelope(data=UserResponse.from_domain(user))


@router.put("/{user_id}", response_model=UserEnvelope, response_model_exclude_none=True)
async def update_user(
    user_id: str,
    payload: Optional[dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
):
    """Update the fields present in the body."""
    user = service.update(user_id, payload)
    return UserEnvelope(data=UserResponse.from_domain(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageEnvelope)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Delete a user."""
    service.delete(user_id)
    return MessageEnvelope(message="User deleted successfully")
