from fastapi.testclient import TestClient

from engine.drill import INCOMPLETE_MSG
from engine.equivalence import CheckResult, Verdict
from engine.judge import UNVERIFIED_MSG, get_checker
from main import app

client = TestClient(app)

PROBLEM = {
    "originalFormula": "Fz = m * g",
    "targetVariable": "m",
    "correctAnswer": "m = Fz / g",
    "symbols": ["Fz", "m", "g", "/"],
}


def sym(content):
    return {"type": "symbol", "content": content}


def submit(right, **extra):
    payload = {"problem": PROBLEM, "left": {"items": [sym("m")]}, "right": {"items": right}, **extra}
    r = client.post("/submit", json=payload)
    assert r.status_code == 200
    return r.json()


def test_check_answer_correct():
    r = client.post(
        "/check-answer",
        json={"referenceFormula": "m = Fz / g", "targetVariable": "m", "userFormula": "m=Fz/g"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["isCorrect"] is True and body["explanation"]


def test_check_answer_incorrect():
    r = client.post(
        "/check-answer",
        json={"referenceFormula": "m = Fz / g", "targetVariable": "m", "userFormula": "m = g / Fz"},
    )
    assert r.json()["isCorrect"] is False


def test_submit_correct_flat():
    body = submit([sym("Fz"), sym("/"), sym("g")])
    assert body["ok"] is True and body["correct"] is True
    assert body["verdict"] == "correct"
    assert body["answer"] == "m = Fz / g"
    assert body["score"]["quarks"] == 1 and body["score"]["level"] == 1
    assert isinstance(body["attempt_id"], int)


def test_submit_correct_fraction():
    frac = {"type": "fraction", "numerator": {"items": [sym("Fz")]}, "denominator": {"items": [sym("g")]}}
    body = submit([frac])
    assert body["correct"] is True


def test_submit_incorrect_streak_resets():
    body = submit(
        [sym("g"), sym("/"), sym("Fz")],
        score={"mode": "streak", "streak": 4, "high_score": 4},
    )
    assert body["ok"] is True and body["correct"] is False
    assert body["verdict"] == "incorrect"
    assert body["score"]["streak"] == 0 and body["score"]["high_score"] == 4


def test_submit_incomplete_is_not_checked():
    frac = {"type": "fraction", "numerator": {"items": [sym("Fz")]}}
    body = submit([frac], score={"quarks": 3})
    assert body["ok"] is False and body["verdict"] is None
    assert body["explanation"] == INCOMPLETE_MSG
    assert body["score"]["quarks"] == 3
    assert body["attempt_id"] is None


def test_submit_unverified_keeps_score():
    class DownJudge:
        def check(self, problem, user_formula):
            return CheckResult(Verdict.UNVERIFIED, UNVERIFIED_MSG)

    app.dependency_overrides[get_checker] = lambda: DownJudge()
    try:
        body = submit([sym("Fz"), sym("/"), sym("g")], score={"quarks": 2})
    finally:
        app.dependency_overrides.pop(get_checker, None)
    assert body["ok"] is True and body["correct"] is False
    assert body["verdict"] == "unverified"
    assert body["explanation"] == UNVERIFIED_MSG
    assert body["score"]["quarks"] == 2


def test_submitted_attempt_can_be_read_back():
    body = submit([sym("Fz"), sym("/"), sym("g")], duration_ms=1234)
    r = client.get(f"/attempts/{body['attempt_id']}")
    assert r.status_code == 200
    a = r.json()
    assert a["original_formula"] == "Fz = m * g"
    assert a["target_variable"] == "m"
    assert a["user_answer"] == "m = Fz / g"
    assert a["verdict"] == "correct" and a["duration_ms"] == 1234
    assert body["duration_ms"] == 1234
