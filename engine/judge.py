# engine/judge.py
from __future__ import annotations

import logging
import os
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from engine.drill import Problem
from engine.equivalence import Checker, CheckResult, LocalChecker, Verdict

logger = logging.getLogger(__name__)

UNVERIFIED_MSG = "Could not verify your answer right now. Please try again."
DEFAULT_TIMEOUT = 8.0


class JudgeVerdict(BaseModel):
    isCorrect: bool
    explanation: str = ""


class RemoteJudge:
    """
    Delegates the equivalence check to an external judge over HTTP.
    One request per check; any failure comes back as an UNVERIFIED result
    rather than an exception, so the caller can offer a retry.
    """

    def __init__(
        self, url: str, timeout: float = DEFAULT_TIMEOUT, client: Optional[httpx.Client] = None
    ):
        self.url = url
        self.timeout = timeout
        self._client = client

    def _post(self, payload: dict) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.url, json=payload, timeout=self.timeout)
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(self.url, json=payload)

    def check(self, problem: Problem, user_formula: str) -> CheckResult:
        payload = {
            "originalFormula": problem.original_formula,
            "referenceFormula": problem.correct_answer,
            "targetVariable": problem.target_variable,
            "userFormula": user_formula,
        }
        try:
            resp = self._post(payload)
            resp.raise_for_status()
            body = JudgeVerdict.model_validate(resp.json())
        except httpx.HTTPError as e:
            logger.warning("judge request failed: %s: %s", type(e).__name__, e)
            return CheckResult(Verdict.UNVERIFIED, UNVERIFIED_MSG)
        except (ValueError, ValidationError) as e:
            # non-JSON or wrong shape
            logger.warning("judge returned an unusable body: %s", e)
            return CheckResult(Verdict.UNVERIFIED, UNVERIFIED_MSG)

        verdict = Verdict.CORRECT if body.isCorrect else Verdict.INCORRECT
        return CheckResult(verdict, body.explanation)


def get_checker() -> Checker:
    backend = os.getenv("GRADING_BACKEND", "local").strip().lower()
    if backend == "remote":
        url = os.getenv("JUDGE_URL", "")
        if not url:
            raise RuntimeError("GRADING_BACKEND=remote requires JUDGE_URL.")
        raw_timeout = os.getenv("JUDGE_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise RuntimeError(f"JUDGE_TIMEOUT must be a number of seconds, got {raw_timeout!r}.") from None
        return RemoteJudge(url, timeout=timeout)
    return LocalChecker()
