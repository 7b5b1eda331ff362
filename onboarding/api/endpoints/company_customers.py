from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from onboarding.api.deps import get_company_customer_service, require_capability
from onboarding.core.config import settings
from onboarding.core.exceptions import NotFoundError, ValidationError
from onboarding.core.permissions import Capability
from onboarding.schemas.auth_schema import Session
from onboarding.schemas.customer_schema import (
    CompanyCustomerCreate,
    CompanyCustomerOut,
    CompanyCustomerPatch,
    CompanyCustomerQuery,
    CompanyCustomerReplace,
    CompanyCustomerResult,
)
from onboarding.schemas.user_schema import MessageOut
from onboarding.services.customer_service import CompanyCustomerService

router = APIRouter(prefix="/api", tags=["company-customers"])

can_view = require_capability(Capability.VIEW_CUSTOMERS)
can_manage = require_capability(Capability.MANAGE_CUSTOMERS)

CORS_OPEN = {"Access-Control-Allow-Origin": "*"}


@router.post("/company-customers", response_model=CompanyCustomerResult, status_code=status.HTTP_201_CREATED)
async def create_company_customer(body: CompanyCustomerCreate,
                                  _: Session = Depends(can_manage),
                                  svc: CompanyCustomerService = Depends(get_company_customer_service)):
    customer = await svc.create(body.model_dump())
    return {"message": "Company customer created successfully", "data": customer}


@router.get("/company-customers", response_model=CompanyCustomerQuery)
async def get_company_customers(
        customer_number: Optional[str] = Query(None, alias="customerNumber"),
        company_name: Optional[str] = Query(None, alias="companyName"),
        tin_number: Optional[str] = Query(None, alias="tinNumber"),
        _: Session = Depends(can_view),
        svc: CompanyCustomerService = Depends(get_company_customer_service),
):
    if customer_number:
        return {"data": await svc.get_by_customer_number(customer_number.strip())}
    if company_name:
        return {"data": await svc.search_by_name(company_name, settings.COMPANY_SEARCH_LIMIT)}
    if tin_number:
        return {"data": await svc.get_by_tin(tin_number.strip())}
    return {"data": await svc.list_recent(settings.CUSTOMER_PAGE_SIZE)}


@router.put("/company-customers", response_model=CompanyCustomerResult)
async def replace_company_customer(body: CompanyCustomerReplace,
                                   _: Session = Depends(can_manage),
                                   svc: CompanyCustomerService = Depends(get_company_customer_service)):
    customer = await svc.update(body.id, body.model_dump(exclude={"id"}))
    return {"message": "Company customer updated successfully", "data": customer}


@router.patch("/company-customers", response_model=CompanyCustomerResult)
async def patch_company_customer(body: CompanyCustomerPatch,
                                 _: Session = Depends(can_manage),
                                 svc: CompanyCustomerService = Depends(get_company_customer_service)):
    customer = await svc.update(body.id, body.changes())
    return {"message": "Company customer updated successfully", "data": customer}


@router.delete("/company-customers", response_model=MessageOut)
async def delete_company_customer(id: int = Query(...),
                                  _: Session = Depends(can_manage),
                                  svc: CompanyCustomerService = Depends(get_company_customer_service)):
    await svc.delete(id)
    return MessageOut(message="Company customer deleted successfully")


@router.get("/company-loan", response_model=CompanyCustomerOut)
async def company_loan_lookup(response: Response,
                              customer_number: Optional[str] = Query(None, alias="customerNumber"),
                              svc: CompanyCustomerService = Depends(get_company_customer_service)):
    """Lookup used by the loan origination front end; open to any origin."""
    if not customer_number or not customer_number.strip():
        raise ValidationError("customerNumber is required", headers=CORS_OPEN)
    try:
        customer = await svc.get_by_customer_number(customer_number.strip())
    except NotFoundError:
        raise NotFoundError("Customer not found", headers=CORS_OPEN)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return customer
