from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_root():
    assert client.get("/").json() == {"ok": True}


def test_health_db():
    r = client.get("/health/db")
    assert r.status_code == 200
    b = r.json()
    assert b["ok"] is True and b["rows"]["attempts"] >= 0


def test_health_bank():
    b = client.get("/health/bank").json()
    assert b["ok"] is True and b["formulas"] > 0
    assert b["targets"] >= b["formulas"]


def test_health_migrations_basic():
    r = client.get("/health/migrations")
    assert r.status_code == 200
    b = r.json()
    assert "code_heads" in b and isinstance(b["code_heads"], list)
    assert "db_version" in b


def test_single_alembic_head():
    heads = ScriptDirectory.from_config(Config("alembic.ini")).get_heads()
    assert heads == ["base_0001"]
