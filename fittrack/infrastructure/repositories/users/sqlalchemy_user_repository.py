# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from fittrack.application.services.session_tokens import SessionTokenCodec
from fittrack.domain.users.entities import SessionRecord
from fittrack.domain.users.entities import User as DomainUser
from fittrack.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from fittrack.domain.pagination import ListParams, Page
from fittrack.domain.users.repositories import SessionRepository, UserRepository
from fittrack.infrastructure.db.models import User, UserSession
from fittrack.infrastructure.db.session import session_scope
from fittrack.infrastructure.query.users import USER_LIST_QUERY
from fittrack.shared.logging import logger


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        name=row.name,
        last_name=row.last_name,
        email=row.email,
        password_hash=row.password_hash,
        type=row.type,
        first_login=bool(row.first_login),
        created_at=as_utc(row.created_at) if row.created_at else None,
        updated_at=as_utc(row.updated_at) if row.updated_at else None,
        height=row.height,
        weight=row.weight,
        target_weight=row.target_weight,
        country=row.country,
        city=row.city,
        phone=row.phone,
        occupation=row.occupation,
        date_of_birth=row.date_of_birth,
        gender=row.gender,
        activity_level=row.activity_level,
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_username(self, username: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.username == username).first()
            return to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return to_domain_user(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        """Insert ``user`` unless its username or email is taken.

        The pre-check gives a clean error in the common case; the unique
        constraints are what actually guarantee no duplicates under races.
        """

        try:
            with session_scope() as session:
                existing = (
                    session.query(User.id)
                    .filter(or_(User.username == user.username, User.email == user.email))
                    .first()
                )
                if existing:
                    raise UserAlreadyExistsError()

                row = User(
                    username=user.username,
                    name=user.name,
                    last_name=user.last_name,
                    email=user.email,
                    password_hash=user.password_hash,
                    type=user.type,
                    first_login=user.first_login,
                    height=user.height,
                    weight=user.weight,
                    target_weight=user.target_weight,
                    country=user.country,
                    city=user.city,
                    phone=user.phone,
                    occupation=user.occupation,
                    date_of_birth=user.date_of_birth,
                    gender=user.gender,
                    activity_level=user.activity_level,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return to_domain_user(row)
        except IntegrityError as exc:
            logger.warning(f"users.add: unique constraint rejected username={user.username}")
            raise UserAlreadyExistsError() from exc

    def update_password(self, user_id: int, password_hash: str) -> DomainUser:
        with session_scope() as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError("User Not found")
            row.password_hash = password_hash
            row.first_login = False
            row.updated_at = datetime.now(UTC)
            session.flush()
            return to_domain_user(row)

    def list_users(self, params: ListParams) -> Page:
        with session_scope() as session:
            return USER_LIST_QUERY.execute(session, params)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, codec: SessionTokenCodec, lifetime: timedelta) -> None:
        self._codec = codec
        self._lifetime = lifetime

    def create(self, token: str, user_id: int) -> SessionRecord:
        session_id = self._codec.derive_id(token)
        expires_at = datetime.now(UTC) + self._lifetime
        with session_scope() as session:
            session.add(UserSession(id=session_id, user_id=user_id, expires_at=expires_at))
        logger.info(
            f"sessions.create: user={user_id} session={session_id[:8]}… "
            f"exp={expires_at.isoformat()}"
        )
        return SessionRecord(id=session_id, user_id=user_id, expires_at=expires_at)

    def find_by_id(self, session_id: str) -> SessionRecord | None:
        now = datetime.now(UTC)
        with session_scope() as session:
            row = (
                session.query(UserSession, User.username, User.type)
                .join(User, UserSession.user_id == User.id)
                .filter(UserSession.id == session_id, UserSession.expires_at > now)
                .first()
            )
            if row is None:
                return None
            record, username, user_type = row
            return SessionRecord(
                id=record.id,
                user_id=record.user_id,
                expires_at=as_utc(record.expires_at),
                username=username,
                user_type=user_type,
            )

    def invalidate_all_for_user(self, user_id: int) -> int:
        with session_scope() as session:
            deleted = (
                session.query(UserSession)
                .filter(UserSession.user_id == user_id)
                .delete(synchronize_session=False)
            )
        logger.info(f"sessions.invalidate: user={user_id} removed={deleted}")
        return int(deleted or 0)

    def purge_expired(self) -> int:
        now = datetime.now(UTC)
        with session_scope() as session:
            deleted = (
                session.query(UserSession)
                .filter(UserSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
        logger.info(f"sessions.purge_expired: removed={deleted}")
        return int(deleted or 0)
