from datetime import datetime
from pydantic import Field, field_validator, model_validator
from typing import Optional

from onboarding.core.config import settings
from onboarding.core.permissions import Role
from onboarding.schemas.base import CamelModel

PASSWORD_MAX_LENGTH = 40
# the default password is the last name plus a suffix and must still fit a password
LAST_NAME_MAX_LENGTH = PASSWORD_MAX_LENGTH - len(settings.DEFAULT_PASSWORD_SUFFIX)


class SessionOut(CamelModel):
    user_id: int
    email: str
    name: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class Session(SessionOut):
    """Authenticated identity for one request."""
    session_id: str


class SignInIn(CamelModel):
    last_name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class SignInOut(CamelModel):
    token: str
    token_type: str = "bearer"
    session: SessionOut


class ChangePasswordIn(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=PASSWORD_MAX_LENGTH)

    @model_validator(mode="after")
    def check_differs(self):
        if self.current_password == self.new_password:
            raise ValueError("New password must be different from current password")
        return self


class RegisterEmployeeIn(CamelModel):
    first_name: str = Field(..., min_length=2, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=LAST_NAME_MAX_LENGTH, pattern=r"^[A-Za-z][A-Za-z'\-]*$")
    national_id: str = Field(..., min_length=5, max_length=20)
    phone: str = Field(..., min_length=9, max_length=20)
    address: Optional[str] = Field(None, max_length=120)
    role: Role = Role.USER

    @field_validator("middle_name", "address", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
