# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from dataclasses import dataclass

from fittrack.application.services.session_tokens import SessionTokenCodec
from fittrack.domain.users.entities import User
from fittrack.domain.users.exceptions import InvalidCredentialsError
from fittrack.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from fittrack.shared.logging import logger


@dataclass(frozen=True, slots=True)
class LoginResult:
    user: User
    cookie_value: str


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        codec: SessionTokenCodec,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._codec = codec
        self._password_hasher = password_hasher
        self._decoy_hash: str | None = None

    def execute(self, username: str, password: str) -> LoginResult:
        user = self._users.find_by_username(username)
        if user is None:
            # Unknown usernames still pay for one verification.
            self._password_hasher.verify(self._decoy(), password)
        if user is None or not self._password_hasher.verify(user.password_hash, password):
            logger.info(f"auth.login: rejected username={username}")
            raise InvalidCredentialsError()

        # One new session per login; other devices keep theirs.
        token = self._codec.generate_token()
        self._sessions.create(token, user.id)
        return LoginResult(user=user, cookie_value=self._codec.cookie_value(token))

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash(secrets.token_hex(16))
        return self._decoy_hash
