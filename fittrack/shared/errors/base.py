# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL_SERVER = "internal_server"

    @property
    def status(self) -> HTTPStatus:
        return _KIND_STATUS[self]


_KIND_STATUS: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.BAD_REQUEST: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
    ErrorKind.TOO_MANY_REQUESTS: HTTPStatus.TOO_MANY_REQUESTS,
    ErrorKind.INTERNAL_SERVER: HTTPStatus.INTERNAL_SERVER_ERROR,
}


@dataclass(slots=True, eq=False)
class AppError(Exception):
    kind: ErrorKind
    message: str
    details: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    @property
    def status(self) -> HTTPStatus:
        return self.kind.status

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "errorMessage": self.message,
            "errorCode": int(self.status),
        }
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class BadRequestError(AppError):
    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(kind=ErrorKind.BAD_REQUEST, message=message, details=details)


class UnauthorizedError(AppError):
    def __init__(
        self,
        message: str = "Please login to continue",
        *,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(kind=ErrorKind.UNAUTHORIZED, message=message, details=details)


class ForbiddenError(AppError):
    def __init__(
        self,
        message: str = "You are not authorized to perform this action",
        *,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(kind=ErrorKind.FORBIDDEN, message=message, details=details)


class NotFoundError(AppError):
    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(kind=ErrorKind.NOT_FOUND, message=message, details=details)


class ConflictError(AppError):
    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(kind=ErrorKind.CONFLICT, message=message, details=details)


class RateLimitedError(AppError):
    def __init__(self, *, limit: int, window_seconds: float) -> None:
        super().__init__(
            kind=ErrorKind.TOO_MANY_REQUESTS,
            message="Too many requests. Please try again later.",
            details={"limit": limit, "window": window_seconds},
        )


class InternalServerError(AppError):
    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(kind=ErrorKind.INTERNAL_SERVER, message=message)
