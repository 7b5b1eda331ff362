from typing import List

from fastapi import APIRouter, Depends

from onboarding.api.deps import get_user_service, require_capability
from onboarding.core.permissions import Capability
from onboarding.schemas.auth_schema import Session
from onboarding.schemas.user_schema import MessageOut, RoleUpdateIn, SetRoleIn, UserOut
from onboarding.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["users"])

require_admin = require_capability(Capability.MANAGE_EMPLOYEES)


@router.get("/users", response_model=List[UserOut])
async def list_users(_: Session = Depends(require_admin),
                     user_svc: UserService = Depends(get_user_service)):
    return await user_svc.list_users()


@router.get("/users/{user_id}", response_model=UserOut)
async def get_user(user_id: int,
                   _: Session = Depends(require_admin),
                   user_svc: UserService = Depends(get_user_service)):
    return await user_svc.get_user(user_id)


@router.patch("/users/{user_id}", response_model=UserOut)
async def update_user_role(user_id: int, body: RoleUpdateIn,
                           session: Session = Depends(require_admin),
                           user_svc: UserService = Depends(get_user_service)):
    return await user_svc.set_role(session, user_id, body.role)


@router.delete("/users/{user_id}", response_model=MessageOut)
@router.delete("/users/{user_id}/delete", response_model=MessageOut)
async def delete_user(user_id: int,
                      session: Session = Depends(require_admin),
                      user_svc: UserService = Depends(get_user_service)):
    await user_svc.delete_user(session, user_id)
    return MessageOut(message="User deleted successfully")


@router.post("/set-role", response_model=MessageOut)
async def set_role(body: SetRoleIn,
                   session: Session = Depends(require_admin),
                   user_svc: UserService = Depends(get_user_service)):
    updated = await user_svc.set_role_by_email(session, body.email, body.role)
    return MessageOut(
        message=f"User role for {updated['email']} updated successfully to {updated['role']}"
    )
