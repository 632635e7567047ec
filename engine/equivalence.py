# engine/equivalence.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from engine.normalize import normalize_formula

if TYPE_CHECKING:
    from engine.drill import Problem

CORRECT_MSG = "Well done, that rearrangement is correct."
INCORRECT_MSG = "Not quite. Check which operation undoes the one attached to the target variable."


class Verdict(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    # the judge could not be reached or answered garbage; not the learner's fault
    UNVERIFIED = "unverified"


@dataclass(frozen=True)
class CheckResult:
    verdict: Verdict
    explanation: str = ""

    @property
    def is_correct(self) -> bool:
        return self.verdict is Verdict.CORRECT


class Checker(Protocol):
    def check(self, problem: "Problem", user_formula: str) -> CheckResult: ...


def check_equivalence(correct_formula: str, user_formula: str) -> CheckResult:
    """
    Compare two ``lhs = rhs`` formulas by their normalized text.

    Sound but incomplete: factor order, whitespace and the structure inside
    groups, roots and fractions are absorbed, while additive order,
    distribution and other identities are not (``a + b`` and ``b + a`` differ).
    """
    if normalize_formula(correct_formula) == normalize_formula(user_formula):
        return CheckResult(Verdict.CORRECT, CORRECT_MSG)
    return CheckResult(Verdict.INCORRECT, INCORRECT_MSG)


class LocalChecker:
    def check(self, problem: "Problem", user_formula: str) -> CheckResult:
        return check_equivalence(problem.correct_answer, user_formula)
