"""User API: login, signup, password reset and scoped listing."""

from typing import Annotated

from fastapi import APIRouter, Depends

from nexus_obra.api.dependencies import (
    CurrentContext,
    ManagerContext,
    get_authenticator,
    get_user_service,
    get_user_service_for_write,
)
from nexus_obra.application.services import Authenticator, UserService
from nexus_obra.core.limiter import limit_auth
from nexus_obra.schemas.base import MessageResponse
from nexus_obra.schemas.user import (
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    SignupRequest,
    SignupResponse,
    UserResponse,
)

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    ctx: CurrentContext,
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    """masterAdmin: every user. Others: users of their own client."""
    return await user_svc.list_users(ctx)


@router.get("/me", response_model=UserResponse)
async def get_me(
    ctx: CurrentContext,
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    return await user_svc.get_me(ctx)


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=201,
    dependencies=[Depends(limit_auth)],
)
async def signup(
    body: SignupRequest,
    ctx: ManagerContext,
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Create a user. Admins create users inside their own client only."""
    user = await user_svc.signup(
        ctx,
        body.username,
        body.password,
        body.role,
        reset_password=body.reset_password,
    )
    return SignupResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=LoginResponse, dependencies=[Depends(limit_auth)])
async def login(
    body: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
):
    """Exchange username and password for a signed token (valid 10 days)."""
    result = await authenticator.login(body.username, body.password)
    return LoginResponse(
        auth_token=result.token,
        user_id=result.user_id,
        role=result.role,
        reset_password=result.reset_password,
        client_id=result.client_id,
    )


@router.patch(
    "/resetpassword/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(limit_auth)],
)
async def reset_password(
    user_id: str,
    body: ResetPasswordRequest,
    ctx: CurrentContext,
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Set a new password for self, or for a user in scope of a masterAdmin/Admin."""
    await user_svc.reset_password(ctx, user_id, body.new_password)
    return MessageResponse(message="Password updated successfully.")
