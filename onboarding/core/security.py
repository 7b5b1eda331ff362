from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from typing import Optional
from onboarding.core.config import settings
import hashlib
import secrets

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    password_bytes = password.encode("utf-8")
    digest = hashlib.sha256(password_bytes).hexdigest()
    return pwd_context.hash(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    digest = hashlib.sha256(plain_password.encode("utf-8")).hexdigest()
    return pwd_context.verify(digest, hashed_password)


def employee_email(last_name: str) -> str:
    """Staff log in with their last name; the email is derived from it."""
    return f"{last_name.strip().lower()}@{settings.BANK_EMAIL_DOMAIN}"


def default_password(last_name: str) -> str:
    return f"{last_name.strip()}{settings.DEFAULT_PASSWORD_SUFFIX}"


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def create_session_token(
    session_id: str,
    user_id: int,
    issued_at: datetime,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user_id),
        "sid": session_id,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
