# onboarding/db/seed.py
import asyncio
import logging
import os
import random
from datetime import date
from decimal import Decimal
from faker import Faker
from tqdm import tqdm

from onboarding.db.session import acquire, close_db_pool
from onboarding.core.security import hash_password, employee_email, default_password
from onboarding.core.permissions import Role
from onboarding.core.exceptions import DuplicateKeyError
from onboarding.repositories.customer_repo import CompanyCustomerRepository, PersonalCustomerRepository
from onboarding.schemas.customer_schema import years_ago

logger = logging.getLogger(__name__)

fake = Faker("en_US")

NUM_PERSONAL = 200
NUM_COMPANY = 60

ADMIN_FIRST_NAME = os.getenv("SEED_ADMIN_FIRST_NAME", "System")
ADMIN_LAST_NAME = os.getenv("SEED_ADMIN_LAST_NAME", "Administrator")

REGIONS = ["Addis Ababa", "Oromia", "Amhara", "Tigray", "Sidama", "Dire Dawa"]
ACCOUNT_TYPES = ["savings", "current", "fixed-deposit"]
BUSINESS_TYPES = ["trading", "manufacturing", "services", "agriculture", "construction"]


async def ensure_admin(conn) -> None:
    email = employee_email(ADMIN_LAST_NAME)
    exists = await conn.fetchval("SELECT id FROM users WHERE email = $1;", email)
    if exists:
        logger.info("Admin %s already present", email)
        return
    sql = """
    INSERT INTO users (name, email, first_name, last_name, role, hashed_password)
    VALUES ($1, $2, $3, $4, $5, $6);
    """
    await conn.execute(
        sql,
        f"{ADMIN_FIRST_NAME} {ADMIN_LAST_NAME}",
        email,
        ADMIN_FIRST_NAME,
        ADMIN_LAST_NAME,
        Role.ADMIN.value,
        hash_password(default_password(ADMIN_LAST_NAME)),
    )
    logger.info("Created admin %s", email)


def fake_address() -> dict:
    return {
        "region": random.choice(REGIONS),
        "zone": fake.city_suffix(),
        "city": fake.city(),
        "subcity": fake.street_name(),
        "woreda": f"{random.randint(1, 14):02d}",
    }


def fake_personal(n: int) -> dict:
    birth = fake.date_between(start_date=date(1950, 1, 1), end_date=years_ago(19))
    return {
        "customer_number": f"CUST{n:08d}",
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "mothers_name": fake.first_name_female(),
        "gender": random.choice(["male", "female"]),
        "marital_status": random.choice(["single", "married", "divorced", "widowed"]),
        "date_of_birth": birth,
        "national_id": f"{fake.unique.random_number(digits=12, fix_len=True)}",
        "phone": f"+2519{fake.unique.random_number(digits=8, fix_len=True)}",
        "email": fake.unique.email(),
        "monthly_income": Decimal(random.randint(1_000, 150_000)),
        "account_type": random.choice(ACCOUNT_TYPES),
        "status": random.choices(["active", "pending"], weights=[0.7, 0.3])[0],
        **fake_address(),
    }


def fake_company(n: int) -> dict:
    return {
        "customer_number": f"COMP{n:08d}",
        "tin_number": f"{fake.unique.random_number(digits=10, fix_len=True)}",
        "company_name": fake.unique.company(),
        "business_type": random.choice(BUSINESS_TYPES),
        "registration_number": f"REG-{fake.unique.random_number(digits=8, fix_len=True)}",
        "registration_date": fake.date_between(start_date=date(1995, 1, 1), end_date=date.today()),
        "number_of_employees": random.randint(1, 2_000),
        "contact_person_name": fake.name(),
        "contact_person_position": fake.job()[:100],
        "phone": f"+2511{fake.unique.random_number(digits=8, fix_len=True)}",
        "email": fake.company_email(),
        "annual_revenue": Decimal(random.randint(100_000, 500_000_000)),
        "account_type": random.choice(ACCOUNT_TYPES),
        "status": random.choices(["active", "pending"], weights=[0.6, 0.4])[0],
        **fake_address(),
    }


async def seed():
    logging.basicConfig(level=logging.INFO)
    async with acquire() as conn:
        await ensure_admin(conn)

        skipped = 0
        personal_repo = PersonalCustomerRepository(conn)
        for n in tqdm(range(1, NUM_PERSONAL + 1), desc="Personal customers"):
            try:
                await personal_repo.create(fake_personal(n))
            except DuplicateKeyError:
                skipped += 1

        company_repo = CompanyCustomerRepository(conn)
        for n in tqdm(range(1, NUM_COMPANY + 1), desc="Company customers"):
            try:
                await company_repo.create(fake_company(n))
            except DuplicateKeyError:
                skipped += 1

        logger.info("Seed complete (%d existing records skipped).", skipped)

    await close_db_pool()


if __name__ == "__main__":
    asyncio.run(seed())
