from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AttemptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    original_formula: str
    target_variable: str
    correct: bool
    verdict: str
    mode: str
    duration_ms: int | None = None
    # the answer text can be long; list views leave it out
    user_answer: str | None = None
