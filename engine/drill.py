# engine/drill.py
from __future__ import annotations

from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from engine.equivalence import CheckResult, Verdict
from engine.serialize import is_complete, serialize
from engine.tree import FRACTION_TOKEN, SQRT_TOKEN, SQUARE_TOKEN, SideContainer

GameMode = Literal["classic", "streak"]
SideName = Literal["left", "right"]

# --- Scoring policy ---------------------------------------------------------------
MAX_QUARKS = 30
# score <= LEVEL_1 -> level 1, <= LEVEL_2 -> level 2, else level 3
LEVEL_THRESHOLDS = {"LEVEL_1": 5, "LEVEL_2": 15}

INCOMPLETE_MSG = "Fill every side, root and fraction slot before submitting."

# Palette order for operator tiles; anything else is a quantity.
OPERATOR_ORDER = ("(", ")", "+", "-", "*", "/", FRACTION_TOKEN, SQUARE_TOKEN, SQRT_TOKEN)


class Problem(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    original_formula: str
    target_variable: str
    correct_answer: str
    symbols: Tuple[str, ...] = ()


class Equation(BaseModel):
    """The two sides a learner is building for one dealt problem."""

    model_config = ConfigDict(frozen=True)

    problem: Problem
    left: SideContainer = Field(default_factory=SideContainer)
    right: SideContainer = Field(default_factory=SideContainer)

    @classmethod
    def fresh(cls, problem: Problem) -> "Equation":
        return cls(problem=problem)

    def reset(self) -> "Equation":
        return Equation.fresh(self.problem)

    def with_side(self, name: SideName, container: SideContainer) -> "Equation":
        if name not in ("left", "right"):
            raise ValueError(f"Unknown side {name!r}.")
        return self.model_copy(update={name: container})

    def is_empty(self) -> bool:
        return self.left.is_empty() and self.right.is_empty()

    def can_submit(self) -> bool:
        return is_complete(self.left) and is_complete(self.right)

    def answer_text(self) -> str:
        return f"{serialize(self.left)} = {serialize(self.right)}"


class DrillScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: GameMode = "classic"
    quarks: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    high_score: int = Field(default=0, ge=0)

    @property
    def level(self) -> int:
        score = self.quarks if self.mode == "classic" else self.streak
        if score <= LEVEL_THRESHOLDS["LEVEL_1"]:
            return 1
        if score <= LEVEL_THRESHOLDS["LEVEL_2"]:
            return 2
        return 3

    def record(self, result: CheckResult) -> "DrillScore":
        if result.verdict is Verdict.UNVERIFIED:
            return self
        if self.mode == "classic":
            if not result.is_correct:
                return self
            return self.model_copy(update={"quarks": min(self.quarks + 1, MAX_QUARKS)})
        if not result.is_correct:
            return self.model_copy(update={"streak": 0})
        streak = self.streak + 1
        return self.model_copy(update={"streak": streak, "high_score": max(self.high_score, streak)})


def split_palette(symbols: List[str]) -> Tuple[List[str], List[str]]:
    """Return (quantities, operators): quantities alphabetical, operators in tile order."""
    unique = list(dict.fromkeys(s for s in symbols if isinstance(s, str)))
    quantities = sorted(s for s in unique if s not in OPERATOR_ORDER)
    operators = sorted((s for s in unique if s in OPERATOR_ORDER), key=OPERATOR_ORDER.index)
    return quantities, operators
