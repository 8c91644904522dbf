import pytest
from httpx import AsyncClient

API = "/api/v1/auth"
PASSWORD = "Passw0rd!"


async def register(client: AsyncClient, email="a@example.com", username="alice", password=PASSWORD):
    return await client.post(
        f"{API}/register",
        json={"email": email, "username": username, "password": password},
    )


@pytest.mark.asyncio
async def test_end_to_end_flow(client: AsyncClient):
    """Register -> Login -> Refresh keeps the refresh token usable."""
    reg = await register(client, email="a@x.com")
    assert reg.status_code == 201
    registered = reg.json()
    assert registered["account"]["email"] == "a@x.com"
    assert registered["account"]["username"] == "alice"
    assert "password_hash" not in registered["account"]
    assert "password" not in registered["account"]

    login = await client.post(f"{API}/login", json={"email": "a@x.com", "password": PASSWORD})
    assert login.status_code == 200
    session = login.json()
    assert session["token"] != registered["token"]

    first = await client.post(f"{API}/refresh-token", json={"refresh_token": session["refresh_token"]})
    assert first.status_code == 200
    assert first.json()["token"]
    assert "refresh_token" not in first.json()

    second = await client.post(f"{API}/refresh-token", json={"refresh_token": session["refresh_token"]})
    assert second.status_code == 200


@pytest.mark.asyncio
async def test_register_conflict_hides_which_field(client: AsyncClient):
    assert (await register(client)).status_code == 201

    by_email = await register(client, username="someone")
    by_username = await register(client, email="b@example.com")

    for response in (by_email, by_username):
        assert response.status_code == 409
        assert response.json() == {
            "error": "Conflict",
            "message": "User with this email or username already exists",
        }


@pytest.mark.asyncio
async def test_register_validation_errors(client: AsyncClient):
    weak = await register(client, password="weak")
    assert weak.status_code == 400
    body = weak.json()
    assert body["error"] == "Bad request"
    assert {d["field"] for d in body["details"]} == {"password"}

    bad_email = await register(client, email="not-an-email")
    assert bad_email.status_code == 400
    assert any(d["field"] == "email" for d in bad_email.json()["details"])


@pytest.mark.asyncio
async def test_login_does_not_reveal_account_existence(client: AsyncClient):
    await register(client)

    unknown = await client.post(f"{API}/login", json={"email": "nobody@example.com", "password": PASSWORD})
    wrong = await client.post(f"{API}/login", json={"email": "a@example.com", "password": "Wr0ng-pass!"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {
        "error": "Unauthorized",
        "message": "Invalid email or password",
    }
    assert unknown.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_refresh_requires_token(client: AsyncClient):
    response = await client.post(f"{API}/refresh-token", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Refresh token is required"


@pytest.mark.asyncio
async def test_refresh_with_access_token_fails(client: AsyncClient):
    access_token = (await register(client)).json()["token"]

    response = await client.post(f"{API}/refresh-token", json={"refresh_token": access_token})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token"


@pytest.mark.asyncio
async def test_logout_revokes_and_is_idempotent(client: AsyncClient):
    refresh_token = (await register(client)).json()["refresh_token"]

    for _ in range(2):
        response = await client.post(f"{API}/logout", json={"refresh_token": refresh_token})
        assert response.status_code == 200
    assert (await client.post(f"{API}/logout", json={"refresh_token": "never-issued"})).status_code == 200
    assert (await client.post(f"{API}/logout")).status_code == 200

    response = await client.post(f"{API}/refresh-token", json={"refresh_token": refresh_token})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_profile_requires_valid_access_token(client: AsyncClient):
    registered = (await register(client)).json()

    ok = await client.get(f"{API}/profile", headers={"Authorization": f"Bearer {registered['token']}"})
    assert ok.status_code == 200
    assert ok.json()["id"] == registered["account"]["id"]
    assert "password_hash" not in ok.json()

    missing = await client.get(f"{API}/profile")
    assert missing.status_code == 401
    assert missing.json()["message"] == "Access token required"

    for header in ("Bearer not-a-token", "Basic abc", f"Bearer {registered['refresh_token']}"):
        bad = await client.get(f"{API}/profile", headers={"Authorization": header})
        assert bad.status_code == 401
        assert bad.json()["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Correlation-ID": "cid_test123"})
    assert response.headers["X-Correlation-ID"] == "cid_test123"

    generated = await client.get("/live")
    assert generated.headers["X-Correlation-ID"].startswith("cid_")


@pytest.mark.asyncio
async def test_unencodable_refresh_token_is_just_unknown(client: AsyncClient):
    # A lone surrogate is valid JSON but cannot be encoded as UTF-8.
    body = b'{"refresh_token": "\\ud800"}'
    headers = {"Content-Type": "application/json"}

    response = await client.post(f"{API}/logout", content=body, headers=headers)
    assert response.status_code == 200

    response = await client.post(f"{API}/refresh-token", content=body, headers=headers)
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token"
