import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError

from onboarding.repositories.user_repo import UserRepository
from onboarding.repositories.session_repo import SessionRepository
from onboarding.schemas.auth_schema import RegisterEmployeeIn, Session
from onboarding.core.permissions import Role
from onboarding.core.security import (
    hash_password,
    verify_password,
    create_session_token,
    decode_session_token,
    employee_email,
    default_password,
    new_session_id,
    utcnow,
)
from onboarding.core.config import settings
from onboarding.core.exceptions import (
    DuplicateKeyError,
    ForbiddenError,
    InvalidCredentialsException,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    def __init__(self, user_repo: UserRepository, session_repo: SessionRepository):
        self.user_repo = user_repo
        self.session_repo = session_repo

    # ------------------ Employee accounts ------------------ #

    async def register_employee(self, employee_in: RegisterEmployeeIn) -> dict:
        email = employee_email(employee_in.last_name)
        if await self.user_repo.get_by_email(email):
            raise DuplicateKeyError(f"User with email {email} already exists.")

        name = " ".join(
            part for part in (employee_in.first_name, employee_in.middle_name, employee_in.last_name) if part
        )
        user_data = {
            "name": name,
            "email": email,
            "first_name": employee_in.first_name,
            "middle_name": employee_in.middle_name,
            "last_name": employee_in.last_name,
            "national_id": employee_in.national_id,
            "phone": employee_in.phone,
            "address": employee_in.address,
            "role": employee_in.role.value,
            "hashed_password": hash_password(default_password(employee_in.last_name)),
        }
        user = await self.user_repo.create(user_in=user_data)
        logger.info("Registered employee %s with role %s", email, employee_in.role.value)
        return user

    async def authenticate(self, last_name: str, password: str) -> Optional[dict]:
        user = await self.user_repo.get_by_email(employee_email(last_name))
        if not user:
            return None
        if not verify_password(password, user.get("hashed_password", "")):
            return None
        return user

    async def change_password(self, session: Session, current_password: str, new_password: str) -> None:
        user = await self.user_repo.get_by_id(session.user_id)
        if not user:
            raise NotFoundError("User not found.")
        if not verify_password(current_password, user.get("hashed_password", "")):
            raise ValidationError("Current password is incorrect.")
        if current_password == new_password:
            raise ValidationError("New password must be different from current password")
        await self.user_repo.update_password(user["id"], hash_password(new_password))
        logger.info("Password changed for %s", user["email"])

    # ------------------ Sessions ------------------ #

    async def sign_in(
        self,
        last_name: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> tuple[Session, str]:
        user = await self.authenticate(last_name, password)
        if not user:
            logger.warning("Failed sign-in for last name %r", last_name)
            raise InvalidCredentialsException()
        if user["role"] == Role.BANNED.value:
            logger.warning("Banned account %s attempted to sign in", user["email"])
            raise ForbiddenError("This account has been banned.")

        issued_at = utcnow().replace(microsecond=0)
        expires_at = issued_at + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
        session_id = new_session_id()
        await self.session_repo.create(
            session_id=session_id,
            user_id=user["id"],
            created_at=issued_at,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:255] or None,
        )
        token = create_session_token(session_id, user["id"], issued_at, expires_at - issued_at)
        logger.info("Signed in %s", user["email"])
        return self._to_session(session_id, user, issued_at, expires_at), token

    async def resolve_session(self, token: Optional[str]) -> Optional[Session]:
        """Session for ``token``, or None when it is missing, invalid, expired or revoked."""
        if not token:
            return None
        try:
            payload = decode_session_token(token)
        except JWTError:
            return None
        session_id = payload.get("sid")
        if not session_id:
            return None

        row = await self.session_repo.get(session_id)
        if row is None:
            return None
        if _as_utc(row["expires_at"]) <= utcnow():
            await self.session_repo.delete(session_id)
            return None

        user = await self.user_repo.get_by_id(row["user_id"])
        if user is None:
            return None
        return self._to_session(session_id, user, _as_utc(row["created_at"]), _as_utc(row["expires_at"]))

    async def sign_out(self, session: Session) -> None:
        await self.session_repo.delete(session.session_id)
        logger.info("Signed out %s", session.email)

    @staticmethod
    def _to_session(session_id: str, user: dict, issued_at: datetime, expires_at: datetime) -> Session:
        return Session(
            session_id=session_id,
            user_id=user["id"],
            email=user["email"],
            name=user["name"],
            role=Role(user["role"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )
