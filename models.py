from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class Attempt(Base):
    """One submitted rearrangement and how it was judged."""

    __tablename__ = "attempts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    original_formula: Mapped[str] = mapped_column(String(200))
    target_variable: Mapped[str] = mapped_column(String(32))
    user_answer: Mapped[str] = mapped_column(sa.Text)
    correct: Mapped[bool] = mapped_column(Boolean, default=False)
    verdict: Mapped[str] = mapped_column(String(16))  # correct | incorrect | unverified
    mode: Mapped[str] = mapped_column(String(16), default="classic")
    duration_ms: Mapped[int] = mapped_column(sa.Integer, nullable=True)
