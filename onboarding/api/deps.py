from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, Request
from asyncpg import Connection

from onboarding.core.config import settings
from onboarding.core.exceptions import UnauthorizedError
from onboarding.core.permissions import Capability, authorize, ensure_allowed
from onboarding.core.storage import Storage, storage_from_settings
from onboarding.db.session import get_db_connection
from onboarding.repositories.user_repo import UserRepository
from onboarding.repositories.session_repo import SessionRepository
from onboarding.repositories.customer_repo import (
    CompanyCustomerRepository,
    PersonalCustomerRepository,
)
from onboarding.schemas.auth_schema import Session
from onboarding.services.auth_services import AuthService
from onboarding.services.customer_service import CompanyCustomerService, PersonalCustomerService
from onboarding.services.upload_service import UploadService
from onboarding.services.user_service import UserService


# ------------------ Repositories ------------------ #

def get_user_repo(conn: Connection = Depends(get_db_connection)) -> UserRepository:
    return UserRepository(conn)

def get_session_repo(conn: Connection = Depends(get_db_connection)) -> SessionRepository:
    return SessionRepository(conn)

def get_personal_customer_repo(conn: Connection = Depends(get_db_connection)) -> PersonalCustomerRepository:
    return PersonalCustomerRepository(conn)

def get_company_customer_repo(conn: Connection = Depends(get_db_connection)) -> CompanyCustomerRepository:
    return CompanyCustomerRepository(conn)

@lru_cache
def get_storage() -> Storage:
    return storage_from_settings(settings)


# ------------------ Services ------------------ #

def get_auth_service(
        user_repo: UserRepository = Depends(get_user_repo),
        session_repo: SessionRepository = Depends(get_session_repo),
) -> AuthService:
    return AuthService(user_repo, session_repo)

def get_user_service(user_repo: UserRepository = Depends(get_user_repo)) -> UserService:
    return UserService(user_repo)

def get_personal_customer_service(
        repo: PersonalCustomerRepository = Depends(get_personal_customer_repo),
) -> PersonalCustomerService:
    return PersonalCustomerService(repo)

def get_company_customer_service(
        repo: CompanyCustomerRepository = Depends(get_company_customer_repo),
) -> CompanyCustomerService:
    return CompanyCustomerService(repo)

def get_upload_service(storage: Storage = Depends(get_storage)) -> UploadService:
    return UploadService(storage, settings.UPLOAD_MAX_BYTES)


# ------------------ Session / Authorization ------------------ #

def get_session_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_session(
        token: Optional[str] = Depends(get_session_token),
        auth_svc: AuthService = Depends(get_auth_service),
) -> Optional[Session]:
    return await auth_svc.resolve_session(token)


async def require_session(session: Optional[Session] = Depends(get_session)) -> Session:
    if session is None:
        raise UnauthorizedError()
    return session


def require_capability(capability: Capability) -> Callable:
    async def dependency(session: Optional[Session] = Depends(get_session)) -> Session:
        ensure_allowed(authorize(session, capability))
        return session

    return dependency
