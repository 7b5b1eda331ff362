# onboarding/api/routers.py
from fastapi import APIRouter
from onboarding.api.endpoints import (
    auth,
    company_customers,
    customers,
    session,
    upload,
    users,
)

router = APIRouter()

router.include_router(auth.router)
router.include_router(session.router)
router.include_router(users.router)
router.include_router(customers.router)
router.include_router(company_customers.router)
router.include_router(upload.router)
