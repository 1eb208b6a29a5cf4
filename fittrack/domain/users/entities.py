# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class UserType(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class ActivityLevel(str, Enum):
    SEDENTARY = "SEDENTARY"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    VERY_ACTIVE = "VERY_ACTIVE"
    EXTREME = "EXTREME"


@dataclass(slots=True, frozen=True)
class User:
    id: int
    username: str
    name: str
    last_name: str
    email: str
    password_hash: str = field(repr=False)
    type: UserType = UserType.USER
    first_login: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    height: float | None = None
    weight: float | None = None
    target_weight: float | None = None
    country: str | None = None
    city: str | None = None
    phone: str | None = None
    occupation: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None


@dataclass(slots=True, frozen=True)
class SessionRecord:
    """Persisted login session keyed by the digest of its token."""

    id: str
    user_id: int
    expires_at: datetime
    username: str | None = None
    user_type: UserType | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(slots=True, frozen=True)
class AuthenticatedIdentity:
    """Request-scoped identity resolved from a valid session cookie."""

    id: int
    username: str
    type: UserType
    session: SessionRecord

    def has_role(self, role: UserType) -> bool:
        return self.type == role
