# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for login and logout."""

from __future__ import annotations

from flask import Blueprint, Response, request
from pydantic import ValidationError

from fittrack.application.use_cases.users.login_user import LoginUserUseCase
from fittrack.application.use_cases.users.logout_user import LogoutUserUseCase
from fittrack.domain.users.entities import AuthenticatedIdentity
from fittrack.interfaces.http.dto.auth import LoginRequestDTO
from fittrack.interfaces.http.dto.users import UserPublicDTO
from fittrack.interfaces.http.guards import Guards
from fittrack.interfaces.http.responses import json_response
from fittrack.shared.config import load_config
from fittrack.shared.errors.validation import raise_validation_error
from fittrack.shared.logging import logger
from fittrack.shared.middleware.rate_limit import rate_limit


def set_session_cookie(response: Response, value: str, *, max_age: int) -> None:
    config = load_config()
    response.set_cookie(
        config.session.cookie_name,
        value,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite=config.security.cookie_samesite,
        secure=config.security.cookie_secure,
    )


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        guards: Guards,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._guards = guards

    @rate_limit()
    def login(self):
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.username, dto.password)

        response, status = json_response(
            data=UserPublicDTO.render(result.user),
            message="You have been logged in",
        )
        set_session_cookie(
            response, result.cookie_value, max_age=load_config().session.lifetime_seconds
        )
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, status

    def logout(self, id: str, identity: AuthenticatedIdentity):
        removed = self._logout_use_case.execute(identity, id)

        response, status = json_response(message="You have been logged out")
        set_session_cookie(response, "", max_age=0)
        logger.info(f"auth.logout: ok user_id={identity.id} sessions={removed}")
        return response, status

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/logout/<id>",
            view_func=self._guards.auth_required(self.logout),
            methods=["POST"],
            endpoint="logout",
        )
        return bp
