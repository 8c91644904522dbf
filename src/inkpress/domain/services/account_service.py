"""Account service for profile, status and role maintenance."""

from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.core.errors import BadRequestError, ConflictError, NotFoundError
from inkpress.core.logging import get_logger
from inkpress.domain.entities import ROLES, Account
from inkpress.domain.services.password_validator import validate_name, validate_username
from inkpress.infrastructure.persistence.models import AccountModel
from inkpress.infrastructure.persistence.repositories import (
    AccountRepository,
    SessionRepository,
)

logger = get_logger(__name__)


class AccountService:
    """Service for account maintenance business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the account service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.account_repo = AccountRepository(session)
        self.session_repo = SessionRepository(session)

    async def _get_or_404(self, account_id: str) -> AccountModel:
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return account

    async def update_profile(
        self,
        account_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        username: str | None = None,
    ) -> Account:
        """Update an account's names and/or username.

        Args:
            account_id: Account ID.
            first_name: New first name, or None to keep.
            last_name: New last name, or None to keep.
            username: New username, or None to keep.

        Returns:
            The updated account.

        Raises:
            BadRequestError: If a value breaks a profile rule.
            NotFoundError: If the account does not exist.
            ConflictError: If the username belongs to another account.
        """
        if username is not None:
            username = username.strip()
        issues = [
            *(validate_username(username) if username is not None else []),
            *validate_name("first_name", first_name),
            *validate_name("last_name", last_name),
        ]
        if issues:
            raise BadRequestError(
                "Validation error", errors=[issue.as_dict() for issue in issues]
            )

        account = await self._get_or_404(account_id)
        if username is not None and username != account.username:
            if await self.account_repo.username_exists(username, exclude_id=account_id):
                raise ConflictError("Username already taken")

        await self.account_repo.update_profile(
            account, first_name=first_name, last_name=last_name, username=username
        )
        await self.session.commit()
        logger.info("Profile updated", account_id=account_id)
        return Account.from_model(account)

    async def set_active(self, account_id: str, active: bool) -> Account:
        """Activate or deactivate an account.

        Deactivation also revokes every refresh token the account holds.

        Raises:
            NotFoundError: If the account does not exist.
        """
        account = await self._get_or_404(account_id)
        await self.account_repo.set_active(account, active)
        revoked = 0
        if not active:
            revoked = await self.session_repo.revoke_all_for_account(account_id)
        await self.session.commit()
        logger.info(
            "Account status changed",
            account_id=account_id,
            is_active=active,
            sessions_revoked=revoked,
        )
        return Account.from_model(account)

    async def set_role(self, account_id: str, role: str) -> Account:
        """Change an account's role.

        Raises:
            BadRequestError: If the role is not a known role.
            NotFoundError: If the account does not exist.
        """
        if role not in ROLES:
            raise BadRequestError(
                f"Role must be one of: {', '.join(sorted(ROLES))}",
                errors=[{"field": "role", "message": "Unknown role", "code": "role_invalid"}],
            )
        account = await self._get_or_404(account_id)
        await self.account_repo.set_role(account, role)
        await self.session.commit()
        logger.info("Account role changed", account_id=account_id, role=role)
        return Account.from_model(account)
