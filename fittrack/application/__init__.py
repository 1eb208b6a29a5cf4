# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.change_password import ChangePasswordUseCase
from .use_cases.users.create_user import CreateUserCommand, CreateUserUseCase
from .use_cases.users.get_user import GetCurrentUserUseCase, GetUserByIdUseCase
from .use_cases.users.list_users import ListUsersUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase

__all__ = [
    "ChangePasswordUseCase",
    "CreateUserCommand",
    "CreateUserUseCase",
    "GetCurrentUserUseCase",
    "GetUserByIdUseCase",
    "ListUsersUseCase",
    "LoginResult",
    "LoginUserUseCase",
    "LogoutUserUseCase",
]
