"""Router for account maintenance.

Profile updates for the caller, plus admin-only role and status changes.
"""

from fastapi import APIRouter

from inkpress.core.logging import get_logger
from inkpress.infrastructure.api.dependencies import (
    AccountServiceDep,
    AdminAccount,
    AuthenticatedAccount,
)
from inkpress.infrastructure.api.schemas import (
    AccountResponse,
    ErrorResponse,
    UpdateProfileRequest,
    UpdateRoleRequest,
    UpdateStatusRequest,
)

router = APIRouter()
logger = get_logger(__name__)


@router.put(
    "/profile",
    response_model=AccountResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    current_account: AuthenticatedAccount,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """Update the caller's names and/or username."""
    account = await account_service.update_profile(
        current_account.account_id,
        first_name=request.first_name,
        last_name=request.last_name,
        username=request.username,
    )
    return AccountResponse.model_validate(account)


@router.patch(
    "/{account_id}/role",
    response_model=AccountResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown role"},
        403: {"model": ErrorResponse, "description": "Admin access required"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
async def update_role(
    account_id: str,
    request: UpdateRoleRequest,
    admin: AdminAccount,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """Change an account's role (admin only)."""
    logger.info("Role change requested", admin_id=admin.account_id, account_id=account_id)
    account = await account_service.set_role(account_id, request.role)
    return AccountResponse.model_validate(account)


@router.patch(
    "/{account_id}/status",
    response_model=AccountResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Admin access required"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
async def update_status(
    account_id: str,
    request: UpdateStatusRequest,
    admin: AdminAccount,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """Activate or deactivate an account (admin only).

    Deactivation revokes every refresh token the account holds.
    """
    logger.info("Status change requested", admin_id=admin.account_id, account_id=account_id)
    account = await account_service.set_active(account_id, request.is_active)
    return AccountResponse.model_validate(account)
