import pytest
from sqlalchemy.exc import IntegrityError

from inkpress.infrastructure.persistence.models import AccountModel
from inkpress.infrastructure.persistence.repositories import AccountRepository


def make_account(email="alice@example.com", username="alice") -> AccountModel:
    return AccountModel(email=email, username=username, password_hash="$argon2id$placeholder")


@pytest.mark.asyncio
async def test_create_applies_defaults(db_session):
    repo = AccountRepository(db_session)

    account = await repo.create(make_account())

    assert len(account.id) == 36
    assert account.is_active is True
    assert account.is_verified is False
    assert account.role == "user"
    assert account.created_at is not None
    assert account.updated_at is not None


@pytest.mark.asyncio
async def test_lookups(db_session):
    repo = AccountRepository(db_session)
    account = await repo.create(make_account())

    assert (await repo.get_by_id(account.id)).email == "alice@example.com"
    assert (await repo.get_by_email("alice@example.com")).id == account.id
    assert (await repo.get_by_username("alice")).id == account.id
    assert await repo.get_by_id("missing") is None
    assert await repo.email_exists("alice@example.com")
    assert not await repo.email_exists("bob@example.com")
    assert await repo.username_exists("alice")
    assert not await repo.username_exists("alice", exclude_id=account.id)


@pytest.mark.asyncio
async def test_duplicate_email_violates_constraint(db_session):
    repo = AccountRepository(db_session)
    await repo.create(make_account())

    with pytest.raises(IntegrityError):
        await repo.create(make_account(username="other"))


@pytest.mark.asyncio
async def test_duplicate_username_violates_constraint(db_session):
    repo = AccountRepository(db_session)
    await repo.create(make_account())

    with pytest.raises(IntegrityError):
        await repo.create(make_account(email="other@example.com"))


@pytest.mark.asyncio
async def test_mutations(db_session):
    repo = AccountRepository(db_session)
    account = await repo.create(make_account())
    created_updated_at = account.updated_at

    await repo.update_profile(account, first_name="Alice", username="alice2")
    await repo.set_role(account, "admin")
    await repo.set_active(account, False)

    reloaded = await repo.get_by_id(account.id)
    assert reloaded.first_name == "Alice"
    assert reloaded.last_name is None
    assert reloaded.username == "alice2"
    assert reloaded.role == "admin"
    assert reloaded.is_active is False
    assert reloaded.updated_at >= created_updated_at
