from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fittrack.app import create_app
from fittrack.infrastructure.db import SessionLocal, session_scope
from fittrack.infrastructure.db.models import User, UserSession

pytestmark = pytest.mark.usefixtures("database")

ALICE = {
    "username": "alice",
    "name": "Alice",
    "lastName": "Liddell",
    "email": "alice@example.com",
    "password": "supersecret",
}


def test_create_login_change_password_logout_flow() -> None:
    app = create_app()

    with app.test_client() as client:
        created = client.post("/users", json=ALICE)
        assert created.status_code == 201
        user_id = created.get_json()["data"]["id"]

        login = client.post("/auth/login", json={"username": "alice", "password": "supersecret"})
        assert login.status_code == 200
        assert login.get_json()["data"]["username"] == "alice"
        assert "password" not in login.get_json()["data"]
        cookie = client.get_cookie("session").value
        assert "." in cookie

        me = client.get("/users/me")
        assert me.status_code == 200
        assert me.get_json()["data"]["email"] == "alice@example.com"

        listing = client.get("/users?page=1&limit=10&search=ali")
        assert listing.status_code == 200
        assert listing.get_json()["page"]["totalElements"] == 1

        changed = client.patch(
            "/users/update-password",
            json={"username": "alice", "password": "supersecret", "newPassword": "brand-new"},
        )
        assert changed.status_code == 200
        assert changed.get_json()["data"]["firstLogin"] is False

        logout = client.post(f"/auth/logout/{user_id}")
        assert logout.status_code == 200

        # A copy of the old cookie must not work once the session is gone.
        client.set_cookie("session", cookie)
        assert client.get("/users/me").status_code == 401

        relogin = client.post("/auth/login", json={"username": "alice", "password": "brand-new"})
        assert relogin.status_code == 200

    session = SessionLocal()
    try:
        stored = session.query(User).one()
        assert stored.password_hash != "brand-new"
        assert stored.password_hash.count(":") == 1
        assert session.query(UserSession).count() == 1
        # Only the digest of the token is ever persisted.
        assert cookie.rpartition(".")[0] not in {row.id for row in session.query(UserSession)}
    finally:
        session.close()


def test_duplicate_user_is_conflict() -> None:
    app = create_app()

    with app.test_client() as client:
        assert client.post("/users", json=ALICE).status_code == 201
        again = client.post("/users", json={**ALICE, "email": "other@example.com"})

    assert again.status_code == 409
    assert again.get_json()["errorMessage"] == "User already exists"


def test_list_users_paginates_25_rows() -> None:
    app = create_app()

    with app.test_client() as client:
        for i in range(25):
            response = client.post(
                "/users",
                json={**ALICE, "username": f"member{i:02d}", "email": f"m{i}@example.com"},
            )
            assert response.status_code == 201

        client.post("/auth/login", json={"username": "member00", "password": "supersecret"})
        listing = client.get("/users?page=1&limit=10&sortBy=username&sortDirection=desc")

    body = listing.get_json()
    assert listing.status_code == 200
    assert body["page"] == {"size": 10, "totalElements": 25, "totalPages": 3, "number": 1}
    usernames = [row["username"] for row in body["data"]]
    assert usernames == sorted(usernames, reverse=True)
    assert usernames[0] == "member24"


def test_purge_sessions_command() -> None:
    app = create_app()
    with app.test_client() as client:
        client.post("/users", json=ALICE)
        client.post("/auth/login", json={"username": "alice", "password": "supersecret"})

    with session_scope() as session:
        for row in session.query(UserSession):
            row.expires_at = datetime.now(UTC) - timedelta(days=1)

    result = app.test_cli_runner().invoke(args=["purge-sessions"])

    assert result.exit_code == 0
    assert "Removed 1 expired sessions" in result.output
