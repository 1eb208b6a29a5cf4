# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from fittrack.application.services.authentication import AuthenticationGate
from fittrack.application.services.password_hashing import ScryptPasswordHasher
from fittrack.application.services.session_tokens import SessionTokenCodec
from fittrack.application.use_cases.users.change_password import ChangePasswordUseCase
from fittrack.application.use_cases.users.create_user import CreateUserUseCase
from fittrack.application.use_cases.users.get_user import (
    GetCurrentUserUseCase,
    GetUserByIdUseCase,
)
from fittrack.application.use_cases.users.list_users import ListUsersUseCase
from fittrack.application.use_cases.users.login_user import LoginUserUseCase
from fittrack.application.use_cases.users.logout_user import LogoutUserUseCase
from fittrack.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from fittrack.interfaces.http.controllers.auth_controller import AuthController
from fittrack.interfaces.http.controllers.users_controller import UsersController
from fittrack.interfaces.http.guards import Guards
from fittrack.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> ScryptPasswordHasher:
        return ScryptPasswordHasher()

    @cached_property
    def session_codec(self) -> SessionTokenCodec:
        return SessionTokenCodec(self._config.session.cookie_secret)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(
            self.session_codec,
            timedelta(days=self._config.session.lifetime_days),
        )

    @cached_property
    def authentication_gate(self) -> AuthenticationGate:
        return AuthenticationGate(codec=self.session_codec, sessions=self.session_repository)

    @cached_property
    def guards(self) -> Guards:
        return Guards(self.authentication_gate)

    # Use cases

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            codec=self.session_codec,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository, password_hasher=self.password_hasher
        )

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository)

    @cached_property
    def get_user_by_id_use_case(self) -> GetUserByIdUseCase:
        return GetUserByIdUseCase(users=self.user_repository)

    @cached_property
    def list_users_use_case(self) -> ListUsersUseCase:
        return ListUsersUseCase(users=self.user_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            guards=self.guards,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            create_user=self.create_user_use_case,
            current_user=self.get_current_user_use_case,
            user_by_id=self.get_user_by_id_use_case,
            list_users=self.list_users_use_case,
            change_password=self.change_password_use_case,
            guards=self.guards,
        )


container = Container()
