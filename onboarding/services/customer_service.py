# onboarding/services/customer_service.py

import enum
import logging
import time
from typing import Optional

from onboarding.core.exceptions import NotFoundError, ValidationError
from onboarding.repositories.customer_repo import (
    CustomerRepository,
    CompanyCustomerRepository,
    PersonalCustomerRepository,
)

logger = logging.getLogger(__name__)


def generate_customer_number(prefix: str, now_ms: Optional[int] = None) -> str:
    """``<prefix>`` followed by the last six digits of the millisecond clock."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{prefix}{str(now_ms)[-6:]}"


def _db_values(data: dict) -> dict:
    return {k: (v.value if isinstance(v, enum.Enum) else v) for k, v in data.items()}


class CustomerService:
    prefix: str = ""
    label: str = "Customer"
    document_fields: tuple[str, str] = ("", "")

    def __init__(self, repo: CustomerRepository):
        self.repo = repo

    async def create(self, data: dict) -> dict:
        data = _db_values(data)
        if not data.get("customer_number"):
            data["customer_number"] = generate_customer_number(self.prefix)
        record = await self.repo.create(data)
        logger.info("%s %s created", self.label, record["customer_number"])
        return record

    async def get_by_customer_number(self, customer_number: str) -> dict:
        record = await self.repo.get_by_customer_number(customer_number)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    async def list_recent(self, limit: int) -> list[dict]:
        return await self.repo.list_recent(limit)

    async def update(self, customer_id: int, fields: dict) -> dict:
        existing = await self.repo.get_by_id(customer_id)
        if existing is None:
            raise NotFoundError(f"{self.label} not found")

        fields = _db_values(fields)
        first, second = self.document_fields
        merged_first = fields.get(first, existing.get(first))
        merged_second = fields.get(second, existing.get(second))
        if bool(merged_first) != bool(merged_second):
            raise ValidationError("Both documents must be attached, or neither.")

        updated = await self.repo.update(customer_id, fields)
        if updated is None:
            # deleted between the lookup and the write
            raise NotFoundError(f"{self.label} not found")
        logger.info("%s %s updated (%s)", self.label, updated["customer_number"], ", ".join(sorted(fields)) or "-")
        return updated

    async def delete(self, customer_id: int) -> None:
        if not await self.repo.delete(customer_id):
            raise NotFoundError(f"{self.label} not found")
        logger.info("%s id=%s deleted", self.label, customer_id)


class PersonalCustomerService(CustomerService):
    prefix = "CUST"
    label = "Customer"
    document_fields = ("national_id_url", "agreement_form_url")

    def __init__(self, repo: PersonalCustomerRepository):
        super().__init__(repo)


class CompanyCustomerService(CustomerService):
    prefix = "COMP"
    label = "Company customer"
    document_fields = ("business_license_url", "agreement_form_url")

    def __init__(self, repo: CompanyCustomerRepository):
        super().__init__(repo)
        self.repo: CompanyCustomerRepository = repo

    async def get_by_tin(self, tin_number: str) -> dict:
        record = await self.repo.get_by_tin(tin_number)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    async def search_by_name(self, company_name: str, limit: int) -> list[dict]:
        return await self.repo.search_by_name(company_name.strip(), limit)
