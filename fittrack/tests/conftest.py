from __future__ import annotations

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

# Settings are read once at import time, so the environment has to be in
# place before anything from ``fittrack`` is imported.
_DB_DIR = Path(tempfile.mkdtemp(prefix="fittrack-tests-"))
os.environ["APP_ENV"] = "test"
os.environ["SESSION_COOKIE_SECRET"] = "test-cookie-secret"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'fittrack-test.db'}"
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ.pop("ADMIN_USERNAME", None)

import pytest  # noqa: E402

from fittrack.application.services.session_tokens import SessionTokenCodec  # noqa: E402
from fittrack.domain.pagination import ListParams, Page  # noqa: E402
from fittrack.domain.users.entities import SessionRecord, User  # noqa: E402
from fittrack.domain.users.exceptions import (  # noqa: E402
    UserAlreadyExistsError,
    UserNotFoundError,
)
from fittrack.domain.users.repositories import (  # noqa: E402
    PasswordHasher,
    SessionRepository,
    UserRepository,
)

SECRET = "test-cookie-secret"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        for existing in self._users.values():
            if existing.username == user.username or existing.email == user.email:
                raise UserAlreadyExistsError()
        now = datetime.now(UTC)
        stored = replace(user, id=self._seq, created_at=now, updated_at=now)
        self._users[stored.id] = stored
        self._seq += 1
        return stored

    def update_password(self, user_id: int, password_hash: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError("User Not found")
        updated = replace(
            user, password_hash=password_hash, first_login=False, updated_at=datetime.now(UTC)
        )
        self._users[user_id] = updated
        return updated

    def list_users(self, params: ListParams) -> Page:
        rows = [
            {"id": u.id, "username": u.username, "name": u.name, "last_name": u.last_name,
             "email": u.email, "type": u.type, "first_login": u.first_login}
            for u in sorted(self._users.values(), key=lambda u: u.id)
        ]
        start = (params.page - 1) * params.limit
        return Page(
            rows=rows[start:start + params.limit],
            total_count=len(rows),
            total_pages=-(-len(rows) // params.limit),
            page=params.page,
            size=params.limit,
        )

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemorySessionRepository(SessionRepository):
    def __init__(
        self,
        codec: SessionTokenCodec,
        users: InMemoryUserRepository,
        lifetime: timedelta = timedelta(days=30),
    ) -> None:
        self._codec = codec
        self._users = users
        self._lifetime = lifetime
        self.records: dict[str, SessionRecord] = {}

    def create(self, token: str, user_id: int) -> SessionRecord:
        record = SessionRecord(
            id=self._codec.derive_id(token),
            user_id=user_id,
            expires_at=datetime.now(UTC) + self._lifetime,
        )
        self.records[record.id] = record
        return record

    def find_by_id(self, session_id: str) -> SessionRecord | None:
        record = self.records.get(session_id)
        if record is None or record.is_expired(datetime.now(UTC)):
            return None
        user = self._users.find_by_id(record.user_id)
        if user is None:
            return None
        return replace(record, username=user.username, user_type=user.type)

    def invalidate_all_for_user(self, user_id: int) -> int:
        doomed = [sid for sid, r in self.records.items() if r.user_id == user_id]
        for sid in doomed:
            del self.records[sid]
        return len(doomed)

    def purge_expired(self) -> int:
        now = datetime.now(UTC)
        doomed = [sid for sid, r in self.records.items() if r.is_expired(now)]
        for sid in doomed:
            del self.records[sid]
        return len(doomed)


class PlainHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"plain:{password}"

    def verify(self, hashed: str, password: str) -> bool:
        return hashed == f"plain:{password}"


@pytest.fixture()
def codec() -> SessionTokenCodec:
    return SessionTokenCodec(SECRET)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions(codec: SessionTokenCodec, users: InMemoryUserRepository) -> InMemorySessionRepository:
    return InMemorySessionRepository(codec, users)


@pytest.fixture()
def hasher() -> PlainHasher:
    return PlainHasher()


@pytest.fixture()
def database():
    from fittrack.infrastructure.db import ENGINE, Base, SessionLocal, models  # noqa: F401

    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def make_user(users: InMemoryUserRepository, hasher: PlainHasher):
    def _make(username: str = "alice", password: str = "supersecret", **overrides) -> User:
        return users.add(
            User(
                id=0,
                username=username,
                name=username.capitalize(),
                last_name="Tester",
                email=f"{username}@example.com",
                password_hash=hasher.hash(password),
                **overrides,
            )
        )

    return _make
