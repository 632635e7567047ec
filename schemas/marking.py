# services/flipper/schemas/marking.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from engine.drill import DrillScore, Problem
from engine.tree import SideContainer

# ---------- Check answer (judge wire contract) ----------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckAnswerRequest(_CamelModel):
    reference_formula: str
    target_variable: str
    user_formula: str


class CheckAnswerResponse(_CamelModel):
    is_correct: bool
    explanation: str


# ---------- Submit ----------


class SubmitRequest(BaseModel):
    problem: Problem
    left: SideContainer
    right: SideContainer
    score: DrillScore = Field(default_factory=DrillScore)
    # Client may send it, but server measures its own when missing.
    duration_ms: Optional[int] = None


class ScoreOut(BaseModel):
    mode: str
    quarks: int
    streak: int
    high_score: int
    level: int

    @classmethod
    def from_score(cls, score: DrillScore) -> "ScoreOut":
        return cls(**score.model_dump(), level=score.level)


class SubmitResponse(BaseModel):
    ok: bool
    correct: bool
    verdict: Optional[str] = None
    answer: str
    explanation: str
    score: ScoreOut
    attempt_id: Optional[int] = None
    duration_ms: Optional[int] = None
