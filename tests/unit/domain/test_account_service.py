from datetime import timedelta

import pytest
import pytest_asyncio

from inkpress.core.errors import BadRequestError, ConflictError, NotFoundError
from inkpress.domain.services import AccountService
from inkpress.infrastructure.persistence.models import AccountModel
from inkpress.infrastructure.persistence.repositories import SessionRepository

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest_asyncio.fixture
async def alice(db_session) -> AccountModel:
    account = AccountModel(
        email="alice@example.com", username="alice", password_hash="$argon2id$placeholder"
    )
    db_session.add(account)
    await db_session.commit()
    return account


@pytest.mark.asyncio
async def test_update_profile(db_session, alice):
    service = AccountService(db_session)

    updated = await service.update_profile(alice.id, first_name="Alice", username="alice_l")

    assert updated.first_name == "Alice"
    assert updated.last_name is None
    assert updated.username == "alice_l"
    assert updated.updated_at >= updated.created_at


@pytest.mark.asyncio
async def test_update_profile_keeping_own_username(db_session, alice):
    updated = await AccountService(db_session).update_profile(alice.id, username="alice")
    assert updated.username == "alice"


@pytest.mark.asyncio
async def test_update_profile_username_taken(db_session, alice):
    db_session.add(
        AccountModel(email="bob@example.com", username="bob", password_hash="$argon2id$placeholder")
    )
    await db_session.commit()

    with pytest.raises(ConflictError) as exc_info:
        await AccountService(db_session).update_profile(alice.id, username="bob")
    assert exc_info.value.message == "Username already taken"


@pytest.mark.asyncio
async def test_update_profile_validation(db_session, alice):
    with pytest.raises(BadRequestError) as exc_info:
        await AccountService(db_session).update_profile(alice.id, username="no spaces", last_name="x" * 101)
    assert {error["field"] for error in exc_info.value.errors} == {"username", "last_name"}


@pytest.mark.asyncio
async def test_missing_account_is_not_found(db_session):
    service = AccountService(db_session)
    with pytest.raises(NotFoundError):
        await service.update_profile(MISSING_ID, first_name="x")
    with pytest.raises(NotFoundError):
        await service.set_active(MISSING_ID, False)
    with pytest.raises(NotFoundError):
        await service.set_role(MISSING_ID, "admin")


@pytest.mark.asyncio
async def test_deactivation_revokes_sessions(db_session, alice):
    sessions = SessionRepository(db_session)
    await sessions.create(alice.id, "tok-1", timedelta(days=30))
    await sessions.create(alice.id, "tok-2", timedelta(days=30))
    await db_session.commit()

    updated = await AccountService(db_session).set_active(alice.id, False)

    assert updated.is_active is False
    assert await sessions.count_active_for_account(alice.id) == 0
    assert (await sessions.get_by_token("tok-1")).is_revoked is True


@pytest.mark.asyncio
async def test_reactivation_does_not_restore_sessions(db_session, alice):
    sessions = SessionRepository(db_session)
    await sessions.create(alice.id, "tok-1", timedelta(days=30))
    service = AccountService(db_session)

    await service.set_active(alice.id, False)
    updated = await service.set_active(alice.id, True)

    assert updated.is_active is True
    assert await sessions.count_active_for_account(alice.id) == 0


@pytest.mark.asyncio
async def test_set_role(db_session, alice):
    service = AccountService(db_session)

    assert (await service.set_role(alice.id, "admin")).role == "admin"
    with pytest.raises(BadRequestError):
        await service.set_role(alice.id, "superuser")
