# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from ..pagination import ListParams, Page
from .entities import SessionRecord, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update_password(self, user_id: int, password_hash: str) -> User: ...
    def list_users(self, params: ListParams) -> Page: ...


class SessionRepository(Protocol):
    def create(self, token: str, user_id: int) -> SessionRecord: ...
    def find_by_id(self, session_id: str) -> SessionRecord | None: ...
    def invalidate_all_for_user(self, user_id: int) -> int: ...
    def purge_expired(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, hashed: str, password: str) -> bool: ...
