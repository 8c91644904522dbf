"""Authentication API routes.

Provides endpoints for registration, login, token refresh, logout and the
caller's profile. Failures propagate as auth errors and are rendered by the
application's exception handlers.
"""

from fastapi import APIRouter, status

from inkpress.infrastructure.api.dependencies import AuthenticatedAccount, AuthServiceDep
from inkpress.infrastructure.api.schemas import (
    AccountResponse,
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenRefreshResponse,
)

router = APIRouter()


def _auth_response(result) -> AuthResponse:
    return AuthResponse(
        token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=result.expires_in,
        account=AccountResponse.model_validate(result.account),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email or username already exists"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Register a new account and open its first session.

    Returns an access token and a refresh token for immediate use.
    """
    result = await auth_service.register(
        email=request.email,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return _auth_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Authenticate with email and password.

    Unknown email and wrong password produce the same 401 message.
    """
    result = await auth_service.login(email=request.email, password=request.password)
    return _auth_response(result)


@router.post(
    "/refresh-token",
    response_model=TokenRefreshResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Refresh token missing"},
        401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"},
    },
)
async def refresh_token(
    request: RefreshRequest, auth_service: AuthServiceDep
) -> TokenRefreshResponse:
    """Exchange a refresh token for a new access token.

    The refresh token is not rotated and remains valid.
    """
    result = await auth_service.refresh(request.refresh_token)
    return TokenRefreshResponse(token=result.access_token, expires_in=result.expires_in)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth_service: AuthServiceDep, request: LogoutRequest | None = None
) -> MessageResponse:
    """Revoke a refresh token. Always succeeds."""
    await auth_service.logout(request.refresh_token if request else None)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/profile",
    response_model=AccountResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid access token"},
        404: {"model": ErrorResponse, "description": "Account no longer exists"},
    },
)
async def get_profile(
    current_account: AuthenticatedAccount, auth_service: AuthServiceDep
) -> AccountResponse:
    """Return the authenticated account's public fields."""
    account = await auth_service.get_profile(current_account.account_id)
    return AccountResponse.model_validate(account)
