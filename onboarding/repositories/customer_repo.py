from typing import Optional
from asyncpg import Connection, UniqueViolationError

from onboarding.core.exceptions import DuplicateKeyError


class CustomerRepository:
    """Shared CRUD SQL for the customer tables; subclasses name the table and columns."""

    table: str = ""
    columns: tuple[str, ...] = ()
    duplicate_message: str = "Customer already exists"

    def __init__(self, conn: Connection):
        self.conn = conn

    def _checked_columns(self, data: dict) -> list[str]:
        unknown = set(data) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown {self.table} columns: {sorted(unknown)}")
        return [c for c in self.columns if c in data]

    # ------------------ Retrieval Methods ------------------ #

    async def get_by_id(self, customer_id: int) -> Optional[dict]:
        sql = f"SELECT * FROM {self.table} WHERE id = $1;"
        record = await self.conn.fetchrow(sql, customer_id)
        return dict(record) if record else None

    async def get_by_customer_number(self, customer_number: str) -> Optional[dict]:
        sql = f"SELECT * FROM {self.table} WHERE customer_number = $1;"
        record = await self.conn.fetchrow(sql, customer_number)
        return dict(record) if record else None

    async def list_recent(self, limit: int) -> list[dict]:
        sql = f"SELECT * FROM {self.table} ORDER BY created_at DESC, id DESC LIMIT $1;"
        records = await self.conn.fetch(sql, limit)
        return [dict(r) for r in records]

    # ------------------ Creation ------------------ #

    async def create(self, data: dict) -> dict:
        cols = self._checked_columns(data)
        placeholders = ", ".join(f"${i}" for i in range(1, len(cols) + 1))
        sql = f"""
            INSERT INTO {self.table} ({", ".join(cols)})
            VALUES ({placeholders})
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(sql, *[data[c] for c in cols])
        except UniqueViolationError as e:
            raise DuplicateKeyError(self.duplicate_message, details=str(e))
        return dict(record)

    # ------------------ Update / Delete ------------------ #

    async def update(self, customer_id: int, fields: dict) -> Optional[dict]:
        cols = self._checked_columns(fields)
        if not cols:
            return await self.get_by_id(customer_id)
        assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(cols, start=1))
        sql = f"""
            UPDATE {self.table}
            SET {assignments}, updated_at = now()
            WHERE id = ${len(cols) + 1}
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(sql, *[fields[c] for c in cols], customer_id)
        except UniqueViolationError as e:
            raise DuplicateKeyError(self.duplicate_message, details=str(e))
        return dict(record) if record else None

    async def delete(self, customer_id: int) -> bool:
        sql = f"DELETE FROM {self.table} WHERE id = $1 RETURNING id;"
        deleted = await self.conn.fetchval(sql, customer_id)
        return deleted is not None


class PersonalCustomerRepository(CustomerRepository):
    table = "personal_customers"
    columns = (
        "customer_number", "tin_number", "first_name", "middle_name", "last_name",
        "mothers_name", "gender", "marital_status", "date_of_birth", "national_id",
        "phone", "email", "region", "zone", "city", "subcity", "woreda",
        "monthly_income", "account_type", "national_id_url", "agreement_form_url",
        "status",
    )
    duplicate_message = "Customer with this number, national ID, phone or email already exists"


class CompanyCustomerRepository(CustomerRepository):
    table = "company_customers"
    columns = (
        "customer_number", "tin_number", "company_name", "business_type",
        "registration_number", "registration_date", "number_of_employees",
        "contact_person_name", "contact_person_position", "phone", "email",
        "region", "zone", "city", "subcity", "woreda", "annual_revenue",
        "business_license_url", "agreement_form_url", "account_type", "status",
    )
    duplicate_message = "Company with this customer number, TIN, or registration number already exists"

    async def get_by_tin(self, tin_number: str) -> Optional[dict]:
        sql = "SELECT * FROM company_customers WHERE tin_number = $1;"
        record = await self.conn.fetchrow(sql, tin_number)
        return dict(record) if record else None

    async def search_by_name(self, company_name: str, limit: int) -> list[dict]:
        sql = """
            SELECT * FROM company_customers
            WHERE company_name ILIKE '%' || $1 || '%'
            ORDER BY created_at DESC, id DESC
            LIMIT $2;
        """
        escaped = company_name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        records = await self.conn.fetch(sql, escaped, limit)
        return [dict(r) for r in records]
