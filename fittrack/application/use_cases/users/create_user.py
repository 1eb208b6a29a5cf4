# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from fittrack.domain.users.entities import User, UserType
from fittrack.domain.users.repositories import PasswordHasher, UserRepository
from fittrack.shared.logging import logger


@dataclass(frozen=True, slots=True)
class CreateUserCommand:
    username: str
    name: str
    last_name: str
    email: str
    password: str
    type: UserType = UserType.USER
    first_login: bool = True
    date_of_birth: date | None = None


class CreateUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, command: CreateUserCommand) -> User:
        candidate = User(
            id=0,
            username=command.username,
            name=command.name,
            last_name=command.last_name,
            email=command.email,
            password_hash=self._password_hasher.hash(command.password),
            type=command.type,
            first_login=command.first_login,
            date_of_birth=command.date_of_birth,
        )
        user = self._users.add(candidate)
        logger.info(f"users.create: ok user_id={user.id} type={user.type.value}")
        return user
