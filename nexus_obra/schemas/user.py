"""User and auth API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from nexus_obra.domain.enums import Role
from nexus_obra.schemas.base import CamelModel, RequestModel

TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class LoginRequest(RequestModel):
    username: TrimmedName
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    """Token plus a summary of the user for client convenience."""

    message: str = "Here is the token"
    auth_token: str
    user_id: str
    role: Role
    reset_password: bool
    client_id: str | None = None


class SignupRequest(RequestModel):
    """Request body for POST /users/signup. Role defaults to user; resetPassword to true."""

    username: TrimmedName
    password: str = Field(..., min_length=1)
    role: Role = Role.USER
    reset_password: bool = True


class ResetPasswordRequest(RequestModel):
    new_password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """User read model. The password hash is never serialized."""

    id: str
    username: str
    role: Role
    client_id: str | None = None
    reset_password: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SignupResponse(CamelModel):
    message: str = "User created successfully."
    user: UserResponse
