"""Account repository for database operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.infrastructure.persistence.database import utcnow
from inkpress.infrastructure.persistence.models import AccountModel


class AccountRepository:
    """Repository for account database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, account: AccountModel) -> AccountModel:
        """Insert a new account and flush it.

        Uniqueness of email and username is enforced by the database; a
        violation surfaces as ``IntegrityError`` from the flush.

        Args:
            account: Account model to create.

        Returns:
            Created account model.
        """
        self.session.add(account)
        await self.session.flush()
        return account

    async def get_by_id(self, account_id: str) -> AccountModel | None:
        """Get an account by ID."""
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> AccountModel | None:
        """Get an account by email address."""
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.email == email)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> AccountModel | None:
        """Get an account by username."""
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.username == username)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(AccountModel.id).where(AccountModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def username_exists(self, username: str, exclude_id: str | None = None) -> bool:
        """Check if a username is already taken.

        Args:
            username: Username to check.
            exclude_id: Account ID to ignore (the account being updated).
        """
        stmt = select(AccountModel.id).where(AccountModel.username == username)
        if exclude_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def update_password_hash(self, account_id: str, password_hash: str) -> None:
        """Replace the stored password hash."""
        await self.session.execute(
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(password_hash=password_hash, updated_at=utcnow())
        )
        await self.session.flush()

    async def update_profile(
        self,
        account: AccountModel,
        first_name: str | None = None,
        last_name: str | None = None,
        username: str | None = None,
    ) -> AccountModel:
        """Apply profile changes; fields left as None are unchanged."""
        if first_name is not None:
            account.first_name = first_name
        if last_name is not None:
            account.last_name = last_name
        if username is not None:
            account.username = username
        account.updated_at = utcnow()
        await self.session.flush()
        return account

    async def set_active(self, account: AccountModel, active: bool) -> AccountModel:
        """Set the account's active flag."""
        account.is_active = active
        account.updated_at = utcnow()
        await self.session.flush()
        return account

    async def set_role(self, account: AccountModel, role: str) -> AccountModel:
        """Set the account's role tag."""
        account.role = role
        account.updated_at = utcnow()
        await self.session.flush()
        return account
