"""
Pydantic schemas for users, registration and authentication.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=25)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=25)
    email: EmailStr

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class UserCreateRequest(UserRegisterRequest):
    """Request schema for an admin creating a user, possibly another admin."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial user update. Username and admin flag cannot change here."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, alias="firstName", min_length=1, max_length=25)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1, max_length=25)
    email: Optional[EmailStr] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("password", "first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """Fields may be left out, but not set to null."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class UserAuthRequest(BaseModel):
    """Request schema for login."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(BaseModel):
    user: UserResponse


class UserDetailEnvelope(BaseModel):
    user: UserDetailResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class UserTokenResponse(BaseModel):
    user: UserResponse
    token: str
