from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from inkpress.infrastructure.persistence.models import AccountModel
from inkpress.infrastructure.persistence.repositories import (
    SessionConflictError,
    SessionRepository,
)

LIFETIME = timedelta(days=30)


@pytest_asyncio.fixture
async def account(db_session):
    model = AccountModel(
        email="owner@example.com",
        username="owner",
        password_hash="$argon2id$placeholder",
    )
    db_session.add(model)
    await db_session.flush()
    return model


@pytest.mark.asyncio
async def test_create_stores_digest_not_token(db_session, account):
    repo = SessionRepository(db_session)

    record = await repo.create(account.id, "raw-token-value", LIFETIME)

    assert record.token_hash == SessionRepository.hash_token("raw-token-value")
    assert record.token_hash != "raw-token-value"
    assert record.is_revoked is False
    assert record.expires_at - record.created_at == LIFETIME


@pytest.mark.asyncio
async def test_get_by_token(db_session, account):
    repo = SessionRepository(db_session)
    await repo.create(account.id, "tok-1", LIFETIME)

    found = await repo.get_by_token("tok-1")

    assert found is not None
    assert found.account_id == account.id
    assert await repo.get_by_token("unknown") is None


@pytest.mark.asyncio
async def test_duplicate_token_is_a_conflict(db_session, account):
    repo = SessionRepository(db_session)
    await repo.create(account.id, "same-token", LIFETIME)

    with pytest.raises(SessionConflictError):
        await repo.create(account.id, "same-token", LIFETIME)


@pytest.mark.asyncio
async def test_validity_window(db_session, account):
    repo = SessionRepository(db_session)
    created = datetime(2026, 1, 1, tzinfo=timezone.utc)
    record = await repo.create(account.id, "tok-window", LIFETIME, now=created)

    assert repo.is_valid(record, created)
    assert repo.is_valid(record, created + LIFETIME - timedelta(microseconds=1))
    assert not repo.is_valid(record, created + LIFETIME)
    assert not repo.is_valid(record, created + LIFETIME + timedelta(days=1))


@pytest.mark.asyncio
async def test_validity_window_survives_round_trip(session_factory, account, db_session):
    created = datetime(2026, 1, 1, tzinfo=timezone.utc)
    await SessionRepository(db_session).create(account.id, "tok-rt", LIFETIME, now=created)
    await db_session.commit()

    async with session_factory() as other:
        record = await SessionRepository(other).get_by_token("tok-rt")

    assert SessionRepository.is_valid(record, created + LIFETIME - timedelta(seconds=1))
    assert not SessionRepository.is_valid(record, created + LIFETIME)


@pytest.mark.asyncio
async def test_revoke_is_idempotent(db_session, account):
    repo = SessionRepository(db_session)
    record = await repo.create(account.id, "tok-revoke", LIFETIME)

    await repo.revoke("tok-revoke")
    await repo.revoke("tok-revoke")
    await repo.revoke("never-issued")

    found = await repo.get_by_token("tok-revoke")
    assert found.is_revoked is True
    assert not repo.is_valid(record)


@pytest.mark.asyncio
async def test_revoke_all_and_count_active(db_session, account):
    repo = SessionRepository(db_session)
    now = datetime.now(timezone.utc)
    await repo.create(account.id, "tok-a", LIFETIME, now=now)
    await repo.create(account.id, "tok-b", LIFETIME, now=now)
    await repo.create(account.id, "tok-old", timedelta(days=1), now=now - timedelta(days=2))

    assert await repo.count_active_for_account(account.id, now) == 2

    revoked = await repo.revoke_all_for_account(account.id)

    assert revoked == 3
    assert await repo.count_active_for_account(account.id, now) == 0
    assert await repo.revoke_all_for_account(account.id) == 0


@pytest.mark.asyncio
async def test_lone_surrogate_token_matches_nothing(db_session, account):
    repo = SessionRepository(db_session)
    await repo.create(account.id, "tok-1", LIFETIME)

    assert len(SessionRepository.hash_token("\ud800")) == 64
    assert await repo.get_by_token("\ud800") is None
    await repo.revoke("\ud800")
    assert (await repo.get_by_token("tok-1")).is_revoked is False
