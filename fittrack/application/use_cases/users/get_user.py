# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fittrack.domain.users.entities import AuthenticatedIdentity, User
from fittrack.domain.users.exceptions import UserNotFoundError
from fittrack.domain.users.repositories import UserRepository
from fittrack.shared.errors import UnauthorizedError


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, identity: AuthenticatedIdentity) -> User:
        user = self._users.find_by_id(identity.id)
        if user is None:
            # Session outlived its user row.
            raise UnauthorizedError("Sorry Not Authorized to See this")
        return user


class GetUserByIdUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
