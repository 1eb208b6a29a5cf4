# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import sys

from sqlalchemy.exc import SQLAlchemyError

from fittrack.domain.users.entities import UserType
from fittrack.infrastructure.db.models import User
from fittrack.infrastructure.db.session import session_scope
from fittrack.shared.config import load_config
from fittrack.shared.logging import logger


class AdminSetupError(Exception):
    pass


def promote_admin(username: str) -> bool:
    """Make ``username`` an ADMIN. Returns ``False`` when the user does not exist."""

    try:
        with session_scope() as session:
            user = session.query(User).filter(User.username == username).first()
            if user is None:
                return False
            if user.type is UserType.ADMIN:
                logger.info(f"admin_setup: user '{username}' already has admin privileges")
                return True
            user.type = UserType.ADMIN
        logger.info(f"admin_setup: granted admin privileges to user '{username}'")
        return True
    except SQLAlchemyError as exc:
        logger.error(f"admin_setup: failed to promote '{username}': {exc}")
        raise AdminSetupError(f"Failed to setup admin user: {exc}") from exc


def setup_admin_user() -> None:
    config = load_config()
    if not config.admin_username:
        logger.info("admin_setup: no ADMIN_USERNAME configured, skipping admin setup")
        return

    if not promote_admin(config.admin_username):
        error_msg = (
            f"ADMIN_USERNAME '{config.admin_username}' not found in database. "
            f"Please create this user first or update ADMIN_USERNAME."
        )
        logger.error(f"admin_setup: {error_msg}")
        print(f"\n❌ ADMIN SETUP ERROR: {error_msg}\n", file=sys.stderr)
        sys.exit(1)


__all__ = ["AdminSetupError", "promote_admin", "setup_admin_user"]
