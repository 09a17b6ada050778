"""Auth Routes - register, login, and the current principal.

Invariants:
    - Passwords never appear in responses or logs
    - /me reflects whichever authenticator accepted the token (demo or session)
"""

from fastapi import APIRouter, Depends, status

from marketplace.api.dependencies import get_account_service, get_current_principal
from marketplace.config import Settings, get_settings
from marketplace.core.repository_protocols import Principal
from marketplace.schemas.auth import (
    AuthResponse, LoginRequest, RegisterRequest, UserResponse,
)
from marketplace.services.accounts import AccountService
from marketplace.services.authenticators import issue_session_token

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
):
    principal = await accounts.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        university=body.university,
        student_id=body.student_id,
    )
    return AuthResponse(
        token=issue_session_token(principal.user_id, settings),
        user=UserResponse(**principal.to_public()),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    result = await accounts.login(body.email, body.password)
    return AuthResponse(
        token=result.token, user=UserResponse(**result.principal.to_public()),
    )


@router.get("/me", response_model=UserResponse)
async def me(principal: Principal = Depends(get_current_principal)):
    return UserResponse(**principal.to_public())
