# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fittrack.domain.users.entities import AuthenticatedIdentity, User
from fittrack.domain.users.exceptions import (
    ForeignPasswordChangeError,
    UserNotFoundError,
    WrongCurrentPasswordError,
)
from fittrack.domain.users.repositories import PasswordHasher, UserRepository
from fittrack.shared.logging import logger


class ChangePasswordUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        identity: AuthenticatedIdentity,
        *,
        username: str,
        password: str,
        new_password: str,
    ) -> User:
        if identity.username != username:
            logger.warning(
                f"users.password: user={identity.id} tried to change password of {username}"
            )
            raise ForeignPasswordChangeError()

        user = self._users.find_by_id(identity.id)
        if user is None:
            raise UserNotFoundError("User Not found")

        if not self._password_hasher.verify(user.password_hash, password):
            raise WrongCurrentPasswordError()

        updated = self._users.update_password(user.id, self._password_hasher.hash(new_password))
        logger.info(f"users.password: updated user_id={user.id}")
        return updated
