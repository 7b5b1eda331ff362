from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from onboarding.api.deps import get_personal_customer_service, require_capability
from onboarding.core.config import settings
from onboarding.core.permissions import Capability
from onboarding.schemas.auth_schema import Session
from onboarding.schemas.customer_schema import (
    PersonalCustomerCreate,
    PersonalCustomerOut,
    PersonalCustomerPatch,
    PersonalCustomerQuery,
    PersonalCustomerReplace,
    PersonalCustomerResult,
)
from onboarding.schemas.user_schema import MessageOut
from onboarding.services.customer_service import PersonalCustomerService

router = APIRouter(prefix="/api", tags=["customers"])

can_view = require_capability(Capability.VIEW_CUSTOMERS)
can_manage = require_capability(Capability.MANAGE_CUSTOMERS)


@router.post("/customers", response_model=PersonalCustomerResult, status_code=status.HTTP_201_CREATED)
async def create_customer(body: PersonalCustomerCreate,
                          _: Session = Depends(can_manage),
                          svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    customer = await svc.create(body.model_dump())
    return {"message": "Customer created successfully", "data": customer}


@router.get("/customers", response_model=PersonalCustomerQuery)
async def get_customers(customer_number: Optional[str] = Query(None, alias="customerNumber"),
                        _: Session = Depends(can_view),
                        svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    if customer_number:
        return {"data": await svc.get_by_customer_number(customer_number.strip())}
    return {"data": await svc.list_recent(settings.CUSTOMER_PAGE_SIZE)}


@router.put("/customers", response_model=PersonalCustomerResult)
async def replace_customer(body: PersonalCustomerReplace,
                           _: Session = Depends(can_manage),
                           svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    customer = await svc.update(body.id, body.model_dump(exclude={"id"}))
    return {"message": "Customer updated successfully", "data": customer}


@router.patch("/customers", response_model=PersonalCustomerResult)
async def patch_customer(body: PersonalCustomerPatch,
                         _: Session = Depends(can_manage),
                         svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    customer = await svc.update(body.id, body.changes())
    return {"message": "Customer updated successfully", "data": customer}


@router.delete("/customers", response_model=MessageOut)
async def delete_customer(id: int = Query(...),
                          _: Session = Depends(can_manage),
                          svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    await svc.delete(id)
    return MessageOut(message="Customer deleted successfully")


@router.get("/company", response_model=List[PersonalCustomerOut])
async def list_customers_bare(_: Session = Depends(can_view),
                              svc: PersonalCustomerService = Depends(get_personal_customer_service)):
    """Dashboard list view: personal customers as a bare array."""
    return await svc.list_recent(settings.CUSTOMER_PAGE_SIZE)
