"""
Alembic environment for the ledger schema.

Migrations cover the three ledger tables: accounts,
transactions and transaction_entries. The connection URL
comes from DATABASE_URL through the application settings,
so alembic.ini never holds credentials.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from ledger_engine.config import get_settings
from ledger_engine.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Importing ledger_engine.models registers Account, Transaction
# and TransactionEntry on Base.metadata for autogenerate.
target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL)


def run_migrations_offline() -> None:
    """Emit the ledger DDL as a SQL script instead of executing it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Apply migrations against the configured database.

    Column types are compared, so a change to the Numeric(19, 4)
    amount columns shows up in autogenerate. CHECK constraints
    are not compared and need a hand-written revision.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
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
