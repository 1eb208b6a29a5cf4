from __future__ import annotations

import pytest

from fittrack.domain.users.entities import User, UserType
from fittrack.infrastructure import admin_setup
from fittrack.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from fittrack.shared.config import load_config

pytestmark = pytest.mark.usefixtures("database")


def _add(username: str) -> User:
    return SqlAlchemyUserRepository().add(
        User(
            id=0,
            username=username,
            name="Admin",
            last_name="Person",
            email=f"{username}@example.com",
            password_hash="salt:key",
        )
    )


def _configure(monkeypatch: pytest.MonkeyPatch, username: str | None) -> None:
    config = load_config().model_copy(update={"admin_username": username})
    monkeypatch.setattr(admin_setup, "load_config", lambda: config)


def test_promote_existing_user(monkeypatch: pytest.MonkeyPatch) -> None:
    user = _add("root")
    _configure(monkeypatch, "root")

    admin_setup.setup_admin_user()

    assert SqlAlchemyUserRepository().find_by_id(user.id).type is UserType.ADMIN
    assert admin_setup.promote_admin("root") is True


def test_missing_admin_user_aborts_startup(monkeypatch: pytest.MonkeyPatch) -> None:
    _configure(monkeypatch, "ghost")

    with pytest.raises(SystemExit):
        admin_setup.setup_admin_user()


def test_no_admin_configured_is_a_noop(monkeypatch: pytest.MonkeyPatch) -> None:
    user = _add("plain")
    _configure(monkeypatch, None)

    admin_setup.setup_admin_user()

    assert SqlAlchemyUserRepository().find_by_id(user.id).type is UserType.USER
