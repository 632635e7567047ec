from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

# alembic.ini puts the project root on sys.path (prepend_sys_path = .)
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from db import DATABASE_URL, Base  # noqa: E402

try:
    import models  # noqa: E402,F401  registers tables for autogenerate
except Exception as e:
    raise RuntimeError(
        "Alembic could not import the models module. Run it from the directory holding alembic.ini."
    ) from e

target_metadata = Base.metadata

# An empty metadata would make autogenerate emit a DROP for every table.
if "attempts" not in target_metadata.tables:
    raise RuntimeError("Alembic autogenerate safety: 'attempts' is not registered on Base.metadata.")


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL for DATABASE_URL without connecting."""
    _configure(url=DATABASE_URL, literal_binds=True)


def run_migrations_online() -> None:
    """Apply migrations over a throwaway connection."""
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
