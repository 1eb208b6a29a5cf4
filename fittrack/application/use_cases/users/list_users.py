# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fittrack.domain.pagination import ListParams, Page
from fittrack.domain.users.repositories import UserRepository


class ListUsersUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, params: ListParams) -> Page:
        return self._users.list_users(params)


__all__ = ["ListUsersUseCase"]
