# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import (
    ActivityLevel,
    AuthenticatedIdentity,
    Gender,
    SessionRecord,
    User,
    UserType,
)

__all__ = [
    "ActivityLevel",
    "AuthenticatedIdentity",
    "Gender",
    "SessionRecord",
    "User",
    "UserType",
]
