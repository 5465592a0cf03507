"""Pydantic models for API request/response.

Every response uses the envelope {success, data?, error?, message?, count?};
routes set response_model_exclude_none so unused keys are omitted.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.model.user import SafeUser


class UserResponse(BaseModel):
    """Response model for a user. There is no password field."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="User ID")
    name: str
    email: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_domain(cls, user: SafeUser) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginRequest(BaseModel):
    """Request model for login. Missing fields are reported by the service."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserEnvelope(BaseModel):
    success: bool = True
    data: UserResponse
    message: Optional[str] = None


class UserListEnvelope(BaseModel):
    success: bool = True
    data: list[UserResponse]
    count: int = Field(..., description="Number of users returned")


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
