from pydantic import EmailStr
from datetime import datetime
from typing import Optional

from onboarding.core.permissions import Role
from onboarding.schemas.base import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    national_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role
    created_at: datetime
    updated_at: datetime


class RegisteredEmployeeOut(CamelModel):
    message: str
    user: UserOut


class RoleUpdateIn(CamelModel):
    role: Role


class SetRoleIn(CamelModel):
    email: EmailStr
    role: Role


class MessageOut(CamelModel):
    message: str
