# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Resolve a session cookie into an authenticated identity."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import NoReturn

from fittrack.application.services.session_tokens import SessionTokenCodec
from fittrack.domain.users.entities import AuthenticatedIdentity, UserType
from fittrack.domain.users.repositories import SessionRepository
from fittrack.shared.errors import ForbiddenError, UnauthorizedError
from fittrack.shared.logging import logger


class RejectionReason(str, Enum):
    NO_COOKIE = "no-cookie"
    BAD_SIGNATURE = "bad-signature"
    NO_SESSION = "no-session"


class AuthenticationGate:
    """Turns the raw ``session`` cookie into an ``AuthenticatedIdentity``.

    Every failure raises the same ``UnauthorizedError``; which step failed is
    only visible in the logs.
    """

    def __init__(self, *, codec: SessionTokenCodec, sessions: SessionRepository) -> None:
        self._codec = codec
        self._sessions = sessions

    def authenticate(self, cookie_value: str | None) -> AuthenticatedIdentity:
        if not cookie_value:
            self._reject(RejectionReason.NO_COOKIE)

        token = self._codec.verify_cookie(cookie_value)
        if token is None:
            self._reject(RejectionReason.BAD_SIGNATURE)

        session_id = self._codec.derive_id(token)
        record = self._sessions.find_by_id(session_id)
        if (
            record is None
            or record.is_expired(datetime.now(UTC))
            or record.username is None
            or record.user_type is None
        ):
            self._reject(RejectionReason.NO_SESSION, session_id)

        logger.debug(f"auth.gate: ok user={record.user_id} session={session_id[:8]}…")
        return AuthenticatedIdentity(
            id=record.user_id,
            username=record.username,
            type=record.user_type,
            session=record,
        )

    @staticmethod
    def _reject(reason: RejectionReason, session_id: str | None = None) -> NoReturn:
        suffix = f" session={session_id[:8]}…" if session_id else ""
        logger.warning(f"auth.gate: rejected reason={reason.value}{suffix}")
        raise UnauthorizedError()


def require_role(identity: AuthenticatedIdentity, role: UserType) -> AuthenticatedIdentity:
    if not identity.has_role(role):
        logger.warning(
            f"auth.role: denied user={identity.id} has={identity.type.value} needs={role.value}"
        )
        raise ForbiddenError()
    return identity


__all__ = ["AuthenticationGate", "RejectionReason", "require_role"]
