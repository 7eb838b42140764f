from sqlalchemy import delete

from splitboard.models.user import User
from splitboard.services import user_service


async def test_register_sets_session_cookie(make_client):
    client = make_client()
    res = await client.post(
        "/api/v1/users/register",
        json={"email": "alice@example.com", "password": "pw-123456", "nickname": "Alice"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Registered successfully"
    assert body["user"]["nickname"] == "Alice"

    me = await client.get("/api/v1/users/me")
    assert me.status_code == 200
    assert me.json()["email"] == "alice@example.com"


async def test_existing_email_logs_in(register, make_client):
    await register("Alice", password="pw-123456")

    client = make_client()
    res = await client.post(
        "/api/v1/users/register",
        json={"email": "alice@example.com", "password": "pw-123456"},
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Logged in successfully"


async def test_wrong_password_is_rejected(register, make_client):
    await register("Alice", password="pw-123456")

    client = make_client()
    res = await client.post(
        "/api/v1/users/register",
        json={"email": "alice@example.com", "password": "nope"},
    )
    assert res.status_code == 401
    assert (await client.get("/api/v1/users/me")).status_code == 401


async def test_register_mode_rejects_existing_user(register, make_client):
    await register("Alice")

    res = await make_client().post(
        "/api/v1/users/register",
        json={"email": "alice@example.com", "password": "x", "nickname": "A", "mode": "register"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "User already exists. Please login."


async def test_login_mode_rejects_unknown_user(make_client):
    res = await make_client().post(
        "/api/v1/users/register",
        json={"email": "ghost@example.com", "password": "x", "mode": "login"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "User not found. Please register."


async def test_registration_needs_nickname(make_client):
    res = await make_client().post(
        "/api/v1/users/register",
        json={"email": "bob@example.com", "password": "x"},
    )
    assert res.status_code == 400


async def test_logout_clears_session(register):
    client, _ = await register("Alice")

    res = await client.post("/api/v1/users/logout")
    assert res.status_code == 200

    assert (await client.get("/api/v1/users/me")).status_code == 401


async def test_me_requires_authentication(make_client):
    assert (await make_client().get("/api/v1/users/me")).status_code == 401


async def test_tampered_cookie_is_rejected(make_client):
    client = make_client()
    client.cookies.set("splitboard_session", "not-a-jwt")

    assert (await client.get("/api/v1/users/me")).status_code == 401


async def test_vanished_user_gets_cookie_cleared(register, session_factory):
    client, ghost = await register("Ghost")

    async with session_factory() as session:
        await session.execute(delete(User).where(User.id == ghost["id"]))
        await session.commit()

    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "User not found"
    assert "splitboard_session=" in res.headers["set-cookie"]

    again = await client.get("/api/v1/users/me")
    assert again.json()["detail"] == "Not authenticated"


async def test_racing_registration_is_rejected(register, make_client, monkeypatch):
    await register("Alice")

    async def not_found_yet(db, email):
        return None

    # the second request checked before the first one committed
    monkeypatch.setattr(user_service, "get_user_by_email", not_found_yet)

    res = await make_client().post(
        "/api/v1/users/register",
        json={"email": "alice@example.com", "password": "x", "nickname": "Alice"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "User already exists. Please login."
