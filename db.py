from __future__ import annotations

import os

from sqlalchemy import MetaData, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


def normalize_url(url: str) -> str:
    """Map hosted Postgres URLs (postgres://, bare postgresql://) onto the psycopg3 driver."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://") :]
    if url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://") :]
    return url


DATABASE_URL = normalize_url(os.getenv("DATABASE_URL", "sqlite:///./flipper.db"))
IS_SQLITE = DATABASE_URL.startswith("sqlite")

# stable names for constraints/indexes across DBs
_metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


class Base(DeclarativeBase):
    metadata = _metadata


# SQLite connections are shared with FastAPI's threadpool
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if IS_SQLITE else {},
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db() -> None:
    # Migrations own the schema on Postgres; a bare SQLite file gets its tables here.
    import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
