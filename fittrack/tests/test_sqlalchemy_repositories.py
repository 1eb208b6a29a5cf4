from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.orm import Query

from fittrack.application.services.session_tokens import SessionTokenCodec
from fittrack.domain.users.entities import User, UserType
from fittrack.domain.users.exceptions import UserAlreadyExistsError
from fittrack.infrastructure.db import session_scope
from fittrack.infrastructure.db.models import UserSession
from fittrack.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)

pytestmark = pytest.mark.usefixtures("database")


@pytest.fixture()
def user_repo() -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository()


@pytest.fixture()
def session_repo(codec: SessionTokenCodec) -> SqlAlchemySessionRepository:
    return SqlAlchemySessionRepository(codec, timedelta(days=30))


def _user(username: str = "alice", email: str | None = None) -> User:
    return User(
        id=0,
        username=username,
        name="Alice",
        last_name="Liddell",
        email=email or f"{username}@example.com",
        password_hash="salt:key",
    )


def test_add_and_find(user_repo) -> None:
    created = user_repo.add(_user())

    assert created.id > 0
    assert created.type is UserType.USER
    assert created.first_login is True
    assert created.created_at is not None and created.created_at.tzinfo is not None
    assert user_repo.find_by_username("alice") == created
    assert user_repo.find_by_id(created.id) == created
    assert user_repo.find_by_id(created.id + 1) is None


def test_add_duplicate_is_conflict(user_repo) -> None:
    user_repo.add(_user())

    with pytest.raises(UserAlreadyExistsError):
        user_repo.add(_user("alice", "fresh@example.com"))
    with pytest.raises(UserAlreadyExistsError):
        user_repo.add(_user("bob", "alice@example.com"))


def test_add_maps_unique_violation_to_conflict(user_repo, monkeypatch: pytest.MonkeyPatch) -> None:
    original = user_repo.add(_user())
    # Blind the existence check so only the unique constraint can object.
    monkeypatch.setattr(Query, "first", lambda self: None)

    with pytest.raises(UserAlreadyExistsError):
        user_repo.add(_user("alice", "fresh@example.com"))

    monkeypatch.undo()
    assert user_repo.find_by_username("alice") == original
    assert user_repo.find_by_id(original.id + 1) is None


def test_update_password_clears_first_login(user_repo) -> None:
    created = user_repo.add(_user())

    updated = user_repo.update_password(created.id, "salt2:key2")

    assert updated.password_hash == "salt2:key2"
    assert updated.first_login is False
    assert updated.updated_at >= created.updated_at


def test_session_lifecycle(user_repo, session_repo, codec) -> None:
    user = user_repo.add(_user())
    token = codec.generate_token()

    record = session_repo.create(token, user.id)
    found = session_repo.find_by_id(codec.derive_id(token))

    assert record.id == codec.derive_id(token)
    assert found is not None
    assert found.user_id == user.id
    assert found.username == "alice"
    assert found.user_type is UserType.USER
    assert found.expires_at - datetime.now(UTC) > timedelta(days=29)


def test_invalidate_all_for_user(user_repo, session_repo, codec) -> None:
    alice = user_repo.add(_user())
    bob = user_repo.add(_user("bob"))
    tokens = [codec.generate_token() for _ in range(3)]
    for token in tokens[:2]:
        session_repo.create(token, alice.id)
    session_repo.create(tokens[2], bob.id)

    assert session_repo.invalidate_all_for_user(alice.id) == 2
    assert session_repo.invalidate_all_for_user(alice.id) == 0
    assert session_repo.find_by_id(codec.derive_id(tokens[0])) is None
    assert session_repo.find_by_id(codec.derive_id(tokens[2])) is not None


def test_expired_sessions_are_absent_and_purgeable(user_repo, session_repo, codec) -> None:
    user = user_repo.add(_user())
    token = codec.generate_token()
    session_repo.create(token, user.id)
    with session_scope() as session:
        row = session.get(UserSession, codec.derive_id(token))
        row.expires_at = datetime.now(UTC) - timedelta(minutes=1)

    assert session_repo.find_by_id(codec.derive_id(token)) is None
    assert session_repo.purge_expired() == 1
    assert session_repo.purge_expired() == 0
