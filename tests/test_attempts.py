from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

PROBLEM = {"originalFormula": "R = U / I", "targetVariable": "I", "correctAnswer": "I = U / R"}


def sym(c):
    return {"type": "symbol", "content": c}


def _submit():
    r = client.post(
        "/submit",
        json={
            "problem": PROBLEM,
            "left": {"items": [sym("I")]},
            "right": {"items": [sym("U"), sym("/"), sym("R")]},
        },
    )
    assert r.status_code == 200
    return r.json()["attempt_id"]


def test_get_attempt_roundtrip():
    attempt_id = _submit()
    assert isinstance(attempt_id, int)

    r2 = client.get(f"/attempts/{attempt_id}")
    assert r2.status_code == 200
    body = r2.json()
    assert body["id"] == attempt_id
    assert body["correct"] is True and body["mode"] == "classic"
    assert "created_at" in body


def test_get_attempt_missing():
    assert client.get("/attempts/999999999").status_code == 404


def test_recent_list_requires_key(monkeypatch):
    monkeypatch.setenv("FLIPPER_API_KEY", "k")
    assert client.get("/attempts/recent-list").status_code == 401


def test_recent_list_with_key(monkeypatch):
    monkeypatch.setenv("FLIPPER_API_KEY", "k")
    _submit()
    r = client.get("/attempts/recent-list", params={"limit": 5}, headers={"x-api-key": "k"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True and 1 <= body["count"] <= 5
    assert all("user_answer" not in row for row in body["items"])


def test_recent_list_admin_token(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    monkeypatch.delenv("FLIPPER_API_KEY", raising=False)
    r = client.get("/attempts/recent-list", headers={"x-admin-token": "secret"})
    assert r.status_code == 200


def test_recent_list_filters_by_formula(monkeypatch):
    monkeypatch.setenv("FLIPPER_API_KEY", "k")
    _submit()
    r = client.get(
        "/attempts/recent-list",
        params={"formula": "R = U / I", "mode": "classic"},
        headers={"x-api-key": "k"},
    )
    body = r.json()
    assert body["count"] >= 1
    assert all(row["original_formula"] == "R = U / I" for row in body["items"])
    assert body["correct"] == body["count"]
