# services/flipper/routers/health.py
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from sqlalchemy import func, select, text

from alembic.config import Config
from alembic.script import ScriptDirectory
from bank import get_formulas
from db import Base, engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            rows = {
                name: conn.execute(select(func.count()).select_from(table)).scalar_one()
                for name, table in Base.metadata.tables.items()
            }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True, "rows": rows}


@router.get("/bank")
def health_bank():
    formulas = get_formulas()
    targets = sum(len(f["answers"]) for f in formulas)
    return {"ok": bool(formulas), "formulas": len(formulas), "targets": targets}


def _code_heads() -> list[str]:
    try:
        return list(ScriptDirectory.from_config(Config("alembic.ini")).get_heads())
    except Exception as e:
        logger.warning("could not read alembic heads: %s", e)
        return []


def _stamped_version(conn) -> Optional[str]:
    # alembic_version only exists once `alembic upgrade` has run
    try:
        return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
    except Exception:
        return None


@router.get("/migrations")
def health_migrations():
    heads = _code_heads()
    try:
        with engine.connect() as conn:
            db_ver = _stamped_version(conn)
    except Exception as e:
        return {"ok": False, "error": f"db_connect_failed: {e}", "code_heads": heads, "db_version": None}

    synced = bool(heads) and db_ver in heads
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
