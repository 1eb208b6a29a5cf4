# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""View decorators that resolve and check the caller's identity.

``auth_required`` hands the resolved ``AuthenticatedIdentity`` to the view
as the ``identity`` keyword argument; nothing is stashed on ``flask.g``.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import request

from fittrack.application.services.authentication import AuthenticationGate, require_role
from fittrack.domain.users.entities import UserType
from fittrack.shared.config import load_config
from fittrack.shared.logging import logger


class Guards:
    def __init__(self, gate: AuthenticationGate) -> None:
        self._gate = gate
        self._cookie_name = load_config().session.cookie_name

    def auth_required(self, func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            identity = self._gate.authenticate(request.cookies.get(self._cookie_name))
            logger.debug(f"auth: user={identity.id} {request.method} {request.path}")
            kwargs["identity"] = identity
            return func(*args, **kwargs)

        return wrapper

    def role_required(self, role: UserType) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                identity = self._gate.authenticate(request.cookies.get(self._cookie_name))
                kwargs["identity"] = require_role(identity, role)
                return func(*args, **kwargs)

            return wrapper

        return decorator

    def admin_required(self, func: Callable[..., Any]) -> Callable[..., Any]:
        return self.role_required(UserType.ADMIN)(func)


__all__ = ["Guards"]
