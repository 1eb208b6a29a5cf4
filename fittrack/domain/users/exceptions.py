# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fittrack.shared.errors.base import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)


class UserAlreadyExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__("User already exists", details={"code": "user_already_exists"})


class InvalidCredentialsError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Username or Password invalid")


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class WrongCurrentPasswordError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("Username or password wrong")


class ForeignPasswordChangeError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Sorry you cannot change someone else password")


class ForeignLogoutError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("You can only logout from your own account")
