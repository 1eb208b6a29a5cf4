"""Use-case for ending every session of the calling user."""

from __future__ import annotations

from fittrack.domain.users.entities import AuthenticatedIdentity
from fittrack.domain.users.exceptions import ForeignLogoutError
from fittrack.domain.users.repositories import SessionRepository
from fittrack.shared.errors import BadRequestError
from fittrack.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, identity: AuthenticatedIdentity, target_id: str) -> int:
        try:
            user_id = int(target_id)
        except (TypeError, ValueError):
            raise BadRequestError("Invalid user id", details={"id": target_id}) from None

        if user_id != identity.id:
            logger.warning(f"auth.logout: user={identity.id} tried to log out user={user_id}")
            raise ForeignLogoutError()

        return self._sessions.invalidate_all_for_user(identity.id)
