from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

from onboarding.db.base import Base
from onboarding.db.models.user_model import User, UserSession  # noqa: F401
from onboarding.db.models.customer_model import PersonalCustomer, CompanyCustomer  # noqa: F401
from onboarding.core.config import settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_url() -> str:
    # `alembic -x url=...` wins over the environment; Alembic always uses the sync driver
    url = context.get_x_argument(as_dictionary=True).get("url") or settings.database_url
    return url.replace("+asyncpg", "")


def run_migrations_offline():
    """Emit SQL to stdout instead of touching a database."""
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    engine = create_engine(database_url(), poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
