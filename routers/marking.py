from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends

from engine.drill import INCOMPLETE_MSG, DrillScore, Equation
from engine.equivalence import Checker, CheckResult, check_equivalence
from engine.judge import get_checker
from schemas.marking import (
    CheckAnswerRequest,
    CheckAnswerResponse,
    ScoreOut,
    SubmitRequest,
    SubmitResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["marking"])


# --- Persistence ------------------------------------------------------------------


def _record_attempt(
    equation: Equation, answer: str, result: CheckResult, score: DrillScore, duration_ms: int
) -> Optional[int]:
    try:
        from db import SessionLocal
        from models import Attempt

        with SessionLocal() as db:
            attempt = Attempt(
                original_formula=equation.problem.original_formula,
                target_variable=equation.problem.target_variable,
                user_answer=answer,
                correct=result.is_correct,
                verdict=result.verdict.value,
                mode=score.mode,
                duration_ms=duration_ms,
            )
            db.add(attempt)
            db.commit()
            db.refresh(attempt)
            return attempt.id
    except Exception:
        # a lost attempt row must not cost the learner their verdict
        logger.exception("could not store attempt")
        return None


# --- Endpoints --------------------------------------------------------------------


@router.post("/check-answer", response_model=CheckAnswerResponse)
def check_answer(req: CheckAnswerRequest):
    result = check_equivalence(req.reference_formula, req.user_formula)
    return CheckAnswerResponse(is_correct=result.is_correct, explanation=result.explanation)


@router.post("/submit", response_model=SubmitResponse)
def submit(req: SubmitRequest, checker: Checker = Depends(get_checker)):
    t0 = time.perf_counter()
    equation = Equation(problem=req.problem, left=req.left, right=req.right)
    answer = equation.answer_text()

    if not equation.can_submit():
        return {
            "ok": False,
            "correct": False,
            "verdict": None,
            "answer": answer,
            "explanation": INCOMPLETE_MSG,
            "score": ScoreOut.from_score(req.score),
        }

    result = checker.check(equation.problem, answer)
    score = req.score.record(result)
    logger.info(
        "submit %r for %s: %s", equation.problem.original_formula, equation.problem.target_variable, result.verdict.value
    )

    measured_ms = int(round((time.perf_counter() - t0) * 1000))
    duration_ms = req.duration_ms if req.duration_ms is not None else measured_ms
    attempt_id = _record_attempt(equation, answer, result, req.score, duration_ms)

    return {
        "ok": True,
        "correct": result.is_correct,
        "verdict": result.verdict.value,
        "answer": answer,
        "explanation": result.explanation,
        "score": ScoreOut.from_score(score),
        "attempt_id": attempt_id,
        "duration_ms": duration_ms,
    }
