from fastapi import APIRouter, Depends, Request, Response, status

from onboarding.api.deps import get_auth_service, require_capability, require_session
from onboarding.core.config import settings
from onboarding.core.permissions import Capability
from onboarding.schemas.auth_schema import (
    ChangePasswordIn,
    RegisterEmployeeIn,
    Session,
    SignInIn,
    SignInOut,
)
from onboarding.schemas.user_schema import MessageOut, RegisteredEmployeeOut
from onboarding.services.auth_services import AuthService

router = APIRouter(tags=["auth"], prefix="/api/auth")


@router.post("/sign-in", response_model=SignInOut)
async def sign_in(body: SignInIn, request: Request, response: Response,
                  auth_svc: AuthService = Depends(get_auth_service)):
    session, token = await auth_svc.sign_in(
        body.last_name,
        body.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return SignInOut(token=token, session=session)


@router.post("/sign-out", response_model=MessageOut)
async def sign_out(response: Response,
                   session: Session = Depends(require_session),
                   auth_svc: AuthService = Depends(get_auth_service)):
    await auth_svc.sign_out(session)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageOut(message="Signed out successfully")


@router.post("/register", response_model=RegisteredEmployeeOut, status_code=status.HTTP_201_CREATED)
async def register_employee(body: RegisterEmployeeIn,
                            _: Session = Depends(require_capability(Capability.MANAGE_EMPLOYEES)),
                            auth_svc: AuthService = Depends(get_auth_service)):
    user = await auth_svc.register_employee(body)
    return {
        "message": (
            "Employee registered successfully! The default password is their last name "
            f"followed by {settings.DEFAULT_PASSWORD_SUFFIX}"
        ),
        "user": user,
    }


@router.post("/change-password", response_model=MessageOut)
async def change_password(body: ChangePasswordIn,
                          session: Session = Depends(require_session),
                          auth_svc: AuthService = Depends(get_auth_service)):
    await auth_svc.change_password(session, body.current_password, body.new_password)
    return MessageOut(message="Password changed successfully!")
