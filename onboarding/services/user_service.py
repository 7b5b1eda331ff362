import logging

from onboarding.core.exceptions import NotFoundError
from onboarding.core.permissions import Capability, Role, authorize, ensure_allowed
from onboarding.repositories.user_repo import UserRepository
from onboarding.schemas.auth_schema import Session

logger = logging.getLogger(__name__)


class UserService:
    """Employee administration. Every mutation re-checks the actor's session."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def list_users(self) -> list[dict]:
        return await self.user_repo.list_all()

    async def get_user(self, user_id: int) -> dict:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    async def set_role(self, actor: Session, user_id: int, role: Role) -> dict:
        ensure_allowed(authorize(actor, Capability.MANAGE_EMPLOYEES, target_user_id=user_id))
        updated = await self.user_repo.update_role(user_id, role.value)
        if updated is None:
            raise NotFoundError("User not found.")
        logger.info("%s set role of user %s to %s", actor.email, user_id, role.value)
        return updated

    async def set_role_by_email(self, actor: Session, email: str, role: Role) -> dict:
        ensure_allowed(authorize(actor, Capability.MANAGE_EMPLOYEES))
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found with the provided email.")
        return await self.set_role(actor, user["id"], role)

    async def delete_user(self, actor: Session, user_id: int) -> None:
        ensure_allowed(authorize(actor, Capability.MANAGE_EMPLOYEES, target_user_id=user_id))
        if not await self.user_repo.delete(user_id):
            raise NotFoundError("User not found.")
        logger.warning("%s deleted user %s", actor.email, user_id)
