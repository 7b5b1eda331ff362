# onboarding/schemas/customer_schema.py

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, ClassVar, Optional, Union

from pydantic import (
    AfterValidator,
    EmailStr,
    Field,
    StringConstraints,
    field_serializer,
    field_validator,
    model_validator,
)

from onboarding.schemas.base import CamelModel

MIN_CUSTOMER_AGE = 18


class CustomerStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"


def years_ago(years: int, today: Optional[date] = None) -> date:
    today = today or date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:  # Feb 29 -> Feb 28
        return today.replace(year=today.year - years, day=28)


def _check_adult(value: date) -> date:
    if value > years_ago(MIN_CUSTOMER_AGE):
        raise ValueError(f"Must be at least {MIN_CUSTOMER_AGE} years old")
    return value


def _check_not_future(value: date) -> date:
    if value > date.today():
        raise ValueError("Date cannot be in the future")
    return value


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
PersonalCustomerNumber = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^CUST\d{6,16}$")]
CompanyCustomerNumber = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^COMP\d{6,16}$")]
NationalId = Annotated[str, StringConstraints(pattern=r"^\d{12}$")]
Phone = Annotated[str, StringConstraints(min_length=10, max_length=13, pattern=r"^\+?\d+$")]
DocumentUrl = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
AdultBirthDate = Annotated[date, AfterValidator(_check_adult)]
PastDate = Annotated[date, AfterValidator(_check_not_future)]

_COMPANY_OPTIONAL_FIELDS = (
    "business_type", "contact_person_name", "contact_person_position", "phone", "email",
    "region", "zone", "city", "subcity", "woreda", "business_license_url",
    "agreement_form_url", "account_type",
)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _check_document_pair(first: Optional[str], second: Optional[str], names: str) -> None:
    if bool(first) != bool(second):
        raise ValueError(f"Both {names} documents are required")


# ------------------ Personal customers ------------------ #

class PersonalCustomerFields(CamelModel):
    tin_number: Optional[str] = Field(None, max_length=20)
    first_name: Text
    middle_name: Optional[Text] = None
    last_name: Text
    mothers_name: Text
    gender: Text
    marital_status: Text
    date_of_birth: AdultBirthDate
    national_id: NationalId
    phone: Phone
    email: Optional[EmailStr] = None
    region: Text
    zone: Text
    city: Text
    subcity: Text
    woreda: Text
    monthly_income: Decimal = Field(..., ge=100, max_digits=15, decimal_places=2)
    account_type: Text
    national_id_url: Optional[DocumentUrl] = None
    agreement_form_url: Optional[DocumentUrl] = None
    status: CustomerStatus = CustomerStatus.PENDING

    @field_validator("tin_number", "middle_name", "email", "national_id_url", "agreement_form_url", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_documents(self):
        _check_document_pair(self.national_id_url, self.agreement_form_url, "the national ID and agreement form")
        return self


class PersonalCustomerCreate(PersonalCustomerFields):
    customer_number: Optional[PersonalCustomerNumber] = None


class PersonalCustomerReplace(PersonalCustomerFields):
    id: int
    customer_number: PersonalCustomerNumber


class PersonalCustomerPatch(CamelModel):
    """Partial update; only the keys sent are written."""
    id: int
    customer_number: Optional[PersonalCustomerNumber] = None
    tin_number: Optional[str] = Field(None, max_length=20)
    first_name: Optional[Text] = None
    middle_name: Optional[Text] = None
    last_name: Optional[Text] = None
    mothers_name: Optional[Text] = None
    gender: Optional[Text] = None
    marital_status: Optional[Text] = None
    date_of_birth: Optional[AdultBirthDate] = None
    national_id: Optional[NationalId] = None
    phone: Optional[Phone] = None
    email: Optional[EmailStr] = None
    region: Optional[Text] = None
    zone: Optional[Text] = None
    city: Optional[Text] = None
    subcity: Optional[Text] = None
    woreda: Optional[Text] = None
    monthly_income: Optional[Decimal] = Field(None, ge=100, max_digits=15, decimal_places=2)
    account_type: Optional[Text] = None
    national_id_url: Optional[DocumentUrl] = None
    agreement_form_url: Optional[DocumentUrl] = None
    status: Optional[CustomerStatus] = None

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "customer_number", "first_name", "last_name", "mothers_name", "gender",
        "marital_status", "date_of_birth", "national_id", "phone", "region", "zone",
        "city", "subcity", "woreda", "monthly_income", "account_type", "status",
    )

    @field_validator("tin_number", "middle_name", "email", "national_id_url", "agreement_form_url", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_required_not_cleared(self):
        cleared = [f for f in self.REQUIRED_FIELDS if f in self.model_fields_set and getattr(self, f) is None]
        if cleared:
            raise ValueError(f"Required fields cannot be cleared: {', '.join(cleared)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_unset=True)


class PersonalCustomerOut(CamelModel):
    id: int
    customer_number: str
    tin_number: Optional[str] = None
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    mothers_name: str
    gender: str
    marital_status: str
    date_of_birth: date
    national_id: str
    phone: str
    email: Optional[str] = None
    region: str
    zone: str
    city: str
    subcity: str
    woreda: str
    monthly_income: Decimal
    account_type: str
    national_id_url: Optional[str] = None
    agreement_form_url: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("monthly_income", when_used="json")
    def money_as_float(self, v: Decimal) -> float:
        return float(v)


class PersonalCustomerResult(CamelModel):
    message: str
    data: PersonalCustomerOut


class PersonalCustomerQuery(CamelModel):
    data: Union[PersonalCustomerOut, list[PersonalCustomerOut]]


# ------------------ Company customers ------------------ #

class CompanyCustomerFields(CamelModel):
    tin_number: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]
    company_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    business_type: Optional[Text] = None
    registration_number: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
    registration_date: Optional[PastDate] = None
    number_of_employees: Optional[int] = Field(None, ge=0)
    contact_person_name: Optional[Annotated[str, StringConstraints(max_length=200)]] = None
    contact_person_position: Optional[Text] = None
    phone: Optional[Annotated[str, StringConstraints(max_length=20)]] = None
    email: Optional[EmailStr] = None
    region: Optional[Text] = None
    zone: Optional[Text] = None
    city: Optional[Text] = None
    subcity: Optional[Text] = None
    woreda: Optional[Text] = None
    annual_revenue: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    business_license_url: Optional[DocumentUrl] = None
    agreement_form_url: Optional[DocumentUrl] = None
    account_type: Optional[Text] = None
    status: CustomerStatus = CustomerStatus.PENDING

    @field_validator(*_COMPANY_OPTIONAL_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_documents(self):
        _check_document_pair(self.business_license_url, self.agreement_form_url, "the business license and agreement form")
        return self


class CompanyCustomerCreate(CompanyCustomerFields):
    customer_number: Optional[CompanyCustomerNumber] = None


class CompanyCustomerReplace(CompanyCustomerFields):
    id: int
    customer_number: CompanyCustomerNumber


class CompanyCustomerPatch(CamelModel):
    """Partial update; only the keys sent are written."""
    id: int
    customer_number: Optional[CompanyCustomerNumber] = None
    tin_number: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]] = None
    company_name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]] = None
    business_type: Optional[Text] = None
    registration_number: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]] = None
    registration_date: Optional[PastDate] = None
    number_of_employees: Optional[int] = Field(None, ge=0)
    contact_person_name: Optional[Annotated[str, StringConstraints(max_length=200)]] = None
    contact_person_position: Optional[Text] = None
    phone: Optional[Annotated[str, StringConstraints(max_length=20)]] = None
    email: Optional[EmailStr] = None
    region: Optional[Text] = None
    zone: Optional[Text] = None
    city: Optional[Text] = None
    subcity: Optional[Text] = None
    woreda: Optional[Text] = None
    annual_revenue: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    business_license_url: Optional[DocumentUrl] = None
    agreement_form_url: Optional[DocumentUrl] = None
    account_type: Optional[Text] = None
    status: Optional[CustomerStatus] = None

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("customer_number", "tin_number", "company_name", "registration_number", "status")

    @field_validator(*_COMPANY_OPTIONAL_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_required_not_cleared(self):
        cleared = [f for f in self.REQUIRED_FIELDS if f in self.model_fields_set and getattr(self, f) is None]
        if cleared:
            raise ValueError(f"Required fields cannot be cleared: {', '.join(cleared)}")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude={"id"}, exclude_unset=True)


class CompanyCustomerOut(CamelModel):
    id: int
    customer_number: str
    tin_number: str
    company_name: str
    business_type: Optional[str] = None
    registration_number: str
    registration_date: Optional[date] = None
    number_of_employees: Optional[int] = None
    contact_person_name: Optional[str] = None
    contact_person_position: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    region: Optional[str] = None
    zone: Optional[str] = None
    city: Optional[str] = None
    subcity: Optional[str] = None
    woreda: Optional[str] = None
    annual_revenue: Optional[Decimal] = None
    business_license_url: Optional[str] = None
    agreement_form_url: Optional[str] = None
    account_type: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("annual_revenue", when_used="json")
    def money_as_float(self, v: Optional[Decimal]) -> Optional[float]:
        return float(v) if v is not None else None


class CompanyCustomerResult(CamelModel):
    message: str
    data: CompanyCustomerOut


class CompanyCustomerQuery(CamelModel):
    data: Union[CompanyCustomerOut, list[CompanyCustomerOut]]
