# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for user accounts."""

from __future__ import annotations

from flask import Blueprint, request
from pydantic import ValidationError

from fittrack.application.use_cases.users.change_password import ChangePasswordUseCase
from fittrack.application.use_cases.users.create_user import (
    CreateUserCommand,
    CreateUserUseCase,
)
from fittrack.application.use_cases.users.get_user import (
    GetCurrentUserUseCase,
    GetUserByIdUseCase,
)
from fittrack.application.use_cases.users.list_users import ListUsersUseCase
from fittrack.domain.users.entities import AuthenticatedIdentity
from fittrack.interfaces.http.dto.users import (
    ChangePasswordRequestDTO,
    CreateUserRequestDTO,
    ListUsersQueryDTO,
    UserPublicDTO,
)
from fittrack.interfaces.http.guards import Guards
from fittrack.interfaces.http.responses import json_response, resource_created, resource_list
from fittrack.shared.errors.validation import raise_validation_error
from fittrack.shared.logging import logger
from fittrack.shared.middleware.rate_limit import rate_limit


class UsersController:
    def __init__(
        self,
        *,
        create_user: CreateUserUseCase,
        current_user: GetCurrentUserUseCase,
        user_by_id: GetUserByIdUseCase,
        list_users: ListUsersUseCase,
        change_password: ChangePasswordUseCase,
        guards: Guards,
    ) -> None:
        self._create_user = create_user
        self._current_user = current_user
        self._user_by_id = user_by_id
        self._list_users = list_users
        self._change_password = change_password
        self._guards = guards

    @rate_limit()
    def create(self):
        try:
            dto = CreateUserRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._create_user.execute(
            CreateUserCommand(
                username=dto.username,
                name=dto.name,
                last_name=dto.last_name,
                email=dto.email,
                password=dto.password,
                type=dto.type,
                first_login=dto.first_login,
                date_of_birth=dto.date_of_birth,
            )
        )
        return resource_created(UserPublicDTO.render(user), "User created successfully")

    def me(self, identity: AuthenticatedIdentity):
        user = self._current_user.execute(identity)
        return json_response(data=UserPublicDTO.render(user), message="OK")

    def get_by_id(self, user_id: int, identity: AuthenticatedIdentity):
        user = self._user_by_id.execute(user_id)
        logger.info(f"users.get: admin={identity.id} target={user_id}")
        return json_response(data=UserPublicDTO.render(user), message="OK")

    def list_users(self, identity: AuthenticatedIdentity):
        try:
            query = ListUsersQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        page = self._list_users.execute(query.to_params())
        logger.info(
            f"users.list: user={identity.id} page={page.page} size={page.size} "
            f"total={page.total_count}"
        )
        return resource_list([UserPublicDTO.render(row) for row in page.rows], page)

    def update_password(self, identity: AuthenticatedIdentity):
        try:
            dto = ChangePasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._change_password.execute(
            identity,
            username=dto.username,
            password=dto.password,
            new_password=dto.new_password,
        )
        return json_response(data=UserPublicDTO.render(user), message="Password has been updated")

    def as_blueprint(self) -> Blueprint:
        guards = self._guards
        bp = Blueprint("users", __name__, url_prefix="/users")
        bp.add_url_rule("", view_func=self.create, methods=["POST"], endpoint="create")
        bp.add_url_rule(
            "", view_func=guards.auth_required(self.list_users), methods=["GET"], endpoint="list"
        )
        bp.add_url_rule(
            "/me", view_func=guards.auth_required(self.me), methods=["GET"], endpoint="me"
        )
        bp.add_url_rule(
            "/<int:user_id>",
            view_func=guards.admin_required(self.get_by_id),
            methods=["GET"],
            endpoint="get_by_id",
        )
        bp.add_url_rule(
            "/update-password",
            view_func=guards.auth_required(self.update_password),
            methods=["PATCH"],
            endpoint="update_password",
        )
        return bp
