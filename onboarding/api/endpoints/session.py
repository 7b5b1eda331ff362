from fastapi import APIRouter, Depends

from onboarding.api.deps import require_session
from onboarding.schemas.auth_schema import Session, SessionOut

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/session", response_model=SessionOut)
async def read_session(session: Session = Depends(require_session)):
    return session
