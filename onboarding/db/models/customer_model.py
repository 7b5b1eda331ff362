from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, func
from onboarding.db.base import Base


class PersonalCustomer(Base):
    __tablename__ = "personal_customers"

    id = Column(Integer, primary_key=True, index=True)
    customer_number = Column(String(20), unique=True, nullable=False, index=True)
    tin_number = Column(String(20), nullable=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)
    mothers_name = Column(String(100), nullable=False)
    gender = Column(String(20), nullable=False)
    marital_status = Column(String(20), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    national_id = Column(String(12), unique=True, nullable=False)
    phone = Column(String(13), unique=True, nullable=False)
    email = Column(String(120), unique=True, nullable=True)
    region = Column(String(100), nullable=False)
    zone = Column(String(100), nullable=False)
    city = Column(String(100), nullable=False)
    subcity = Column(String(100), nullable=False)
    woreda = Column(String(100), nullable=False)
    monthly_income = Column(Numeric(15, 2), nullable=False)
    account_type = Column(String(50), nullable=False)
    national_id_url = Column(String(500), nullable=True)
    agreement_form_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<PersonalCustomer(number={self.customer_number})>"


class CompanyCustomer(Base):
    __tablename__ = "company_customers"

    id = Column(Integer, primary_key=True, index=True)
    customer_number = Column(String(20), unique=True, nullable=False, index=True)
    tin_number = Column(String(20), unique=True, nullable=False, index=True)
    company_name = Column(String(200), nullable=False, index=True)
    business_type = Column(String(100), nullable=True)
    registration_number = Column(String(50), unique=True, nullable=False)
    registration_date = Column(Date, nullable=True)
    number_of_employees = Column(Integer, nullable=True)
    contact_person_name = Column(String(200), nullable=True)
    contact_person_position = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(120), nullable=True)
    region = Column(String(100), nullable=True)
    zone = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    subcity = Column(String(100), nullable=True)
    woreda = Column(String(100), nullable=True)
    annual_revenue = Column(Numeric(18, 2), nullable=True)
    business_license_url = Column(String(500), nullable=True)
    agreement_form_url = Column(String(500), nullable=True)
    account_type = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<CompanyCustomer(number={self.customer_number}, tin={self.tin_number})>"
