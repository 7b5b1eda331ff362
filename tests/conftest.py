import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_NAME", "onboarding_test")
os.environ.setdefault("DB_USER", "onboarding")
os.environ.setdefault("DB_PASS", "onboarding")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from onboarding.api.deps import (  # noqa: E402
    get_company_customer_repo,
    get_personal_customer_repo,
    get_session_repo,
    get_storage,
    get_user_repo,
)
from onboarding.core.exceptions import DuplicateKeyError, StorageError  # noqa: E402
from onboarding.core.security import (  # noqa: E402
    create_session_token,
    employee_email,
    hash_password,
    new_session_id,
)
from onboarding.core.storage import Storage  # noqa: E402
from onboarding.main import app  # noqa: E402
from onboarding.repositories.customer_repo import (  # noqa: E402
    CompanyCustomerRepository,
    PersonalCustomerRepository,
)


class FakeDatabase:
    """In-memory stand-in for the four tables, with a strictly increasing clock."""

    def __init__(self):
        self.users: dict[int, dict] = {}
        self.sessions: dict[str, dict] = {}
        self.tables: dict[str, dict[int, dict]] = {"personal_customers": {}, "company_customers": {}}
        self._ids: dict[str, int] = {}
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    # ------------------ helpers for tests ------------------ #

    def add_user(self, last_name: str, role: str = "USER", password: Optional[str] = None,
                 first_name: str = "Test") -> dict:
        now = self.now()
        user = {
            "id": self.next_id("users"),
            "name": f"{first_name} {last_name}",
            "email": employee_email(last_name),
            "first_name": first_name,
            "middle_name": None,
            "last_name": last_name,
            "national_id": None,
            "phone": None,
            "address": None,
            "role": role,
            "hashed_password": hash_password(password) if password else "",
            "created_at": now,
            "updated_at": now,
        }
        self.users[user["id"]] = user
        return dict(user)

    def open_session(self, user: dict, expires_in: timedelta = timedelta(hours=1)) -> str:
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        session_id = new_session_id()
        self.sessions[session_id] = {
            "id": session_id,
            "user_id": user["id"],
            "created_at": issued_at,
            "expires_at": issued_at + expires_in,
            "ip_address": None,
            "user_agent": None,
        }
        return create_session_token(session_id, user["id"], issued_at, timedelta(hours=1))

    def auth_headers(self, user: dict) -> dict:
        return {"Authorization": f"Bearer {self.open_session(user)}"}


class FakeUserRepository:
    def __init__(self, db: FakeDatabase):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[dict]:
        user = self.db.users.get(user_id)
        return dict(user) if user else None

    async def get_by_email(self, email: str) -> Optional[dict]:
        for user in self.db.users.values():
            if user["email"].lower() == email.lower():
                return dict(user)
        return None

    async def list_all(self) -> list[dict]:
        users = sorted(self.db.users.values(), key=lambda u: (u["created_at"], u["id"]), reverse=True)
        return [dict(u) for u in users]

    async def create(self, user_in: dict) -> dict:
        if await self.get_by_email(user_in["email"]):
            raise DuplicateKeyError(f"User with email {user_in['email']} already exists.")
        now = self.db.now()
        user = {
            "middle_name": None, "national_id": None, "phone": None, "address": None,
            **user_in,
            "id": self.db.next_id("users"),
            "created_at": now,
            "updated_at": now,
        }
        self.db.users[user["id"]] = user
        return dict(user)

    async def update_role(self, user_id: int, role: str) -> Optional[dict]:
        user = self.db.users.get(user_id)
        if user is None:
            return None
        user.update(role=role, updated_at=self.db.now())
        return dict(user)

    async def update_password(self, user_id: int, hashed_password: str) -> Optional[dict]:
        user = self.db.users.get(user_id)
        if user is None:
            return None
        user.update(hashed_password=hashed_password, updated_at=self.db.now())
        return dict(user)

    async def delete(self, user_id: int) -> bool:
        if self.db.users.pop(user_id, None) is None:
            return False
        for sid in [s for s, row in self.db.sessions.items() if row["user_id"] == user_id]:
            del self.db.sessions[sid]
        return True


class FakeSessionRepository:
    def __init__(self, db: FakeDatabase):
        self.db = db

    async def create(self, session_id, user_id, created_at, expires_at, ip_address=None, user_agent=None) -> dict:
        row = {
            "id": session_id, "user_id": user_id, "created_at": created_at,
            "expires_at": expires_at, "ip_address": ip_address, "user_agent": user_agent,
        }
        self.db.sessions[session_id] = row
        return dict(row)

    async def get(self, session_id: str) -> Optional[dict]:
        row = self.db.sessions.get(session_id)
        return dict(row) if row else None

    async def delete(self, session_id: str) -> None:
        self.db.sessions.pop(session_id, None)


class FakeCustomerRepository:
    """Mirrors CustomerRepository, enforcing the same unique columns as the migration."""

    real = PersonalCustomerRepository
    unique_fields: tuple[str, ...] = ()

    def __init__(self, db: FakeDatabase):
        self.db = db
        self.rows = db.tables[self.real.table]

    def _check_columns(self, data: dict) -> None:
        unknown = set(data) - set(self.real.columns)
        if unknown:
            raise ValueError(f"Unknown {self.real.table} columns: {sorted(unknown)}")

    def _check_unique(self, data: dict, exclude_id: Optional[int] = None) -> None:
        for row in self.rows.values():
            if row["id"] == exclude_id:
                continue
            for field in self.unique_fields:
                value = data.get(field)
                if value is not None and row.get(field) == value:
                    raise DuplicateKeyError(self.real.duplicate_message, details=field)

    def _newest_first(self, rows) -> list[dict]:
        return [dict(r) for r in sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)]

    async def get_by_id(self, customer_id: int) -> Optional[dict]:
        row = self.rows.get(customer_id)
        return dict(row) if row else None

    async def get_by_customer_number(self, customer_number: str) -> Optional[dict]:
        for row in self.rows.values():
            if row["customer_number"] == customer_number:
                return dict(row)
        return None

    async def list_recent(self, limit: int) -> list[dict]:
        return self._newest_first(self.rows.values())[:limit]

    async def create(self, data: dict) -> dict:
        self._check_columns(data)
        self._check_unique(data)
        now = self.db.now()
        row = {column: None for column in self.real.columns}
        row["status"] = "pending"
        row.update(data)
        row.update(id=self.db.next_id(self.real.table), created_at=now, updated_at=now)
        self.rows[row["id"]] = row
        return dict(row)

    async def update(self, customer_id: int, fields: dict) -> Optional[dict]:
        self._check_columns(fields)
        row = self.rows.get(customer_id)
        if row is None:
            return None
        self._check_unique(fields, exclude_id=customer_id)
        row.update(fields)
        row["updated_at"] = self.db.now()
        return dict(row)

    async def delete(self, customer_id: int) -> bool:
        return self.rows.pop(customer_id, None) is not None


class FakePersonalCustomerRepository(FakeCustomerRepository):
    real = PersonalCustomerRepository
    unique_fields = ("customer_number", "national_id", "phone", "email")


class FakeCompanyCustomerRepository(FakeCustomerRepository):
    real = CompanyCustomerRepository
    unique_fields = ("customer_number", "tin_number", "registration_number")

    async def get_by_tin(self, tin_number: str) -> Optional[dict]:
        for row in self.rows.values():
            if row["tin_number"] == tin_number:
                return dict(row)
        return None

    async def search_by_name(self, company_name: str, limit: int) -> list[dict]:
        needle = company_name.lower()
        matches = [r for r in self.rows.values() if needle in r["company_name"].lower()]
        return self._newest_first(matches)[:limit]


class FakeStorage(Storage):
    bucket = "CBS"

    def __init__(self):
        self.objects: dict[str, tuple[bytes, Optional[str]]] = {}
        self.fail_with: Optional[str] = None

    def put_bytes(self, key: str, data: bytes, *, content_type: str | None = None) -> None:
        if self.fail_with:
            raise StorageError("Failed to upload file", details=self.fail_with)
        self.objects[key] = (data, content_type)

    def public_url(self, key: str) -> str:
        return f"https://storage.test/{self.bucket}/{key}"


@pytest.fixture()
def db():
    return FakeDatabase()


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def client(db, storage):
    app.dependency_overrides[get_user_repo] = lambda: FakeUserRepository(db)
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository(db)
    app.dependency_overrides[get_personal_customer_repo] = lambda: FakePersonalCustomerRepository(db)
    app.dependency_overrides[get_company_customer_repo] = lambda: FakeCompanyCustomerRepository(db)
    app.dependency_overrides[get_storage] = lambda: storage
    # not entered as a context manager, so the lifespan (DB pool) never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def admin(db):
    return db.add_user("Kebede", role="ADMIN", first_name="Almaz")


@pytest.fixture()
def staff(db):
    return db.add_user("Tesfaye", role="USER", first_name="Dawit")


@pytest.fixture()
def admin_headers(db, admin):
    return db.auth_headers(admin)


@pytest.fixture()
def staff_headers(db, staff):
    return db.auth_headers(staff)


def personal_payload(**overrides) -> dict:
    payload = {
        "customerNumber": "CUST123456",
        "firstName": "Hana",
        "middleName": "Girma",
        "lastName": "Bekele",
        "mothersName": "Tsehay",
        "gender": "female",
        "maritalStatus": "single",
        "dateOfBirth": "1990-05-17",
        "nationalId": "123456789012",
        "phone": "0911223344",
        "email": "hana.bekele@example.com",
        "region": "Addis Ababa",
        "zone": "Zone 1",
        "city": "Addis Ababa",
        "subcity": "Bole",
        "woreda": "03",
        "monthlyIncome": "15000",
        "accountType": "savings",
        "nationalIdUrl": "https://storage.test/CBS/1-nationalid-id.pdf",
        "agreementFormUrl": "https://storage.test/CBS/1-agreement-form.pdf",
    }
    payload.update(overrides)
    return payload


def company_payload(**overrides) -> dict:
    payload = {
        "customerNumber": "COMP654321",
        "tinNumber": "0012345678",
        "companyName": "Abay Coffee Exporters",
        "businessType": "trading",
        "registrationNumber": "REG-778899",
        "registrationDate": "2015-03-01",
        "numberOfEmployees": "45",
        "contactPersonName": "Meron Alemu",
        "contactPersonPosition": "CFO",
        "phone": "0115550000",
        "email": "finance@abaycoffee.example.com",
        "region": "Addis Ababa",
        "city": "Addis Ababa",
        "annualRevenue": "2500000.50",
        "businessLicenseUrl": "https://storage.test/CBS/2-business-license-lic.pdf",
        "agreementFormUrl": "https://storage.test/CBS/2-agreement-form.pdf",
        "accountType": "current",
    }
    payload.update(overrides)
    return payload
