# services/flipper/routers/attempts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from db import SessionLocal
from deps.auth import require_client
from models import Attempt
from schemas.attempts import AttemptOut

router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.get("/recent-list", dependencies=[Depends(require_client)])
def attempts_recent(limit: int = 20, formula: Optional[str] = None, mode: Optional[str] = None):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        q = db.query(Attempt)
        if formula is not None:
            q = q.filter(Attempt.original_formula == formula)
        if mode is not None:
            q = q.filter(Attempt.mode == mode)
        items = q.order_by(Attempt.created_at.desc()).limit(limit).all()

    # answers can be long; the list view leaves them out
    rows = [AttemptOut.model_validate(a).model_dump(exclude={"user_answer"}) for a in items]
    correct = sum(1 for r in rows if r["correct"])
    return {"ok": True, "items": rows, "count": len(rows), "correct": correct}


@router.get("/{attempt_id}", response_model=AttemptOut)
def get_attempt(attempt_id: int):
    # Public endpoint: the client shows a result page by id
    with SessionLocal() as db:
        a = db.get(Attempt, attempt_id)
        if not a:
            raise HTTPException(status_code=404, detail="Attempt not found")
        return AttemptOut.model_validate(a)
