# services/flipper/bank.py

from __future__ import annotations

import json
import logging
import random
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ValidationError
from sympy import Eq, Symbol, simplify, solve
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

from engine.drill import Problem
from engine.tree import SQUARE_TOKEN
from problems import FALLBACK_PROBLEM, FORMULAS, STANDARD_SYMBOLS

logger = logging.getLogger(__name__)

_BASE = Path(__file__).resolve().parent
_DATA_DIR = _BASE / "data" / "formulas"  # optional sharded formula files

TRANSFORMS = standard_transformations + (convert_xor,)
_IDENT = re.compile(r"[^\W\d]\w*")


class FormulaModel(BaseModel):
    formula: str
    variables: List[str]
    answers: Dict[str, str]


def _iter_jsonl(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        for idx, line in enumerate(f, 1):
            s = line.strip()
            if not s or s.startswith("#") or s.startswith("//"):
                continue
            try:
                yield json.loads(s)
            except json.JSONDecodeError:
                logger.warning("skipping malformed line %s:%d", p.name, idx)
                continue


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("skipping malformed file %s", p.name)
            data = []
    if isinstance(data, list):
        for obj in data:
            yield obj


# --- Answer verification ----------------------------------------------------------


def _parse(text: str, local: Dict[str, Symbol]) -> Any:
    return parse_expr(text.strip(), local_dict=local, transformations=TRANSFORMS)


def verify_rearrangement(
    original: str, target: str, answer: str, variables: Optional[Sequence[str]] = None
) -> bool:
    """
    True if ``answer`` (``target = expr``) is a solution of ``original`` for
    ``target``. Quantities are treated as positive reals, so only the
    principal root of a square counts.
    """
    if original.count("=") != 1 or answer.count("=") != 1:
        return False
    lhs, rhs = original.split("=")
    answer_lhs, answer_rhs = answer.split("=")
    if answer_lhs.strip() != target:
        return False

    names = list(variables) if variables else _IDENT.findall(original)
    local = {n: Symbol(n, positive=True) for n in names if n != "sqrt"}
    if target not in local:
        return False

    try:
        solutions = solve(Eq(_parse(lhs, local), _parse(rhs, local)), local[target])
        expected = _parse(answer_rhs, local)
        return any(simplify(sol - expected) == 0 for sol in solutions)
    except Exception as e:
        logger.debug("could not verify %r for %s: %s", original, target, e)
        return False


def _verified(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    answers = {}
    for target, answer in entry["answers"].items():
        if verify_rearrangement(entry["formula"], target, answer, entry["variables"]):
            answers[target] = answer
        else:
            logger.warning("dropping answer %r for %r: not a valid rearrangement", answer, entry["formula"])
    if not answers:
        return None
    return {**entry, "answers": answers}


# --- Bank -------------------------------------------------------------------------


class FormulaBank:
    _formulas: List[Dict[str, Any]] = []

    @classmethod
    def load(cls) -> List[Dict[str, Any]]:
        if not cls._formulas:
            cls.reload()
        return cls._formulas

    @classmethod
    def _read_entries(cls) -> List[Dict[str, Any]]:
        raw_entries: List[Dict[str, Any]] = []

        # Prefer sharded directory if present
        if _DATA_DIR.exists():
            for p in sorted(_DATA_DIR.rglob("*")):
                if not p.is_file():
                    continue
                suf = p.suffix.lower()
                if suf == ".jsonl":
                    source = _iter_jsonl(p)
                elif suf == ".json":
                    source = _iter_json(p)
                else:
                    continue

                for raw in source:
                    try:
                        raw_entries.append(FormulaModel(**raw).model_dump())
                    except (ValidationError, TypeError):
                        logger.warning("skipping invalid formula record in %s", p.name)
                        continue

        # Fall back to the built-in set if nothing valid was found
        if not raw_entries:
            raw_entries = [FormulaModel(**raw).model_dump() for raw in FORMULAS]
        return raw_entries

    @classmethod
    def reload(cls) -> int:
        formulas = []
        for entry in cls._read_entries():
            checked = _verified(entry)
            if checked is not None:
                formulas.append(checked)
        cls._formulas = formulas
        logger.info("formula bank loaded: %d formulas", len(formulas))
        return len(cls._formulas)


# --- Dealing ----------------------------------------------------------------------


def solved_variable(entry: Dict[str, Any]) -> str:
    return entry["formula"].split("=")[0].strip()


def rearrangement_targets(entry: Dict[str, Any]) -> List[str]:
    solved = solved_variable(entry)
    return [v for v in entry["variables"] if v != solved and v in entry["answers"]]


def build_palette(entry: Dict[str, Any]) -> List[str]:
    symbols = list(dict.fromkeys(list(entry["variables"]) + STANDARD_SYMBOLS))
    uses_square = "^2" in entry["formula"] or any("^2" in a for a in entry["answers"].values())
    if uses_square and SQUARE_TOKEN not in symbols:
        symbols.append(SQUARE_TOKEN)
    # ^2 is offered as the square tile, never as a raw token
    return [s for s in symbols if s != "^2"]


def fallback_problem() -> Problem:
    return Problem(**FALLBACK_PROBLEM)


def deal_problem(
    rng: Optional[random.Random] = None,
    formula: Optional[str] = None,
    target: Optional[str] = None,
) -> Problem:
    rng = rng or random.Random()
    entries = get_formulas()
    if formula is not None:
        entries = [e for e in entries if e["formula"] == formula]
    if not entries:
        logger.warning("no formula available for %r; dealing fallback problem", formula)
        return fallback_problem()

    entry = rng.choice(entries)
    targets = rearrangement_targets(entry)
    if target is not None:
        targets = [t for t in targets if t == target]
    if not targets:
        logger.warning("no rearrangement target for %r; dealing fallback problem", entry["formula"])
        return fallback_problem()

    chosen = rng.choice(targets)
    return Problem(
        original_formula=entry["formula"],
        target_variable=chosen,
        correct_answer=entry["answers"][chosen],
        symbols=tuple(build_palette(entry)),
    )


# Public API
def get_formulas() -> List[Dict[str, Any]]:
    return FormulaBank.load()


def find_formula(formula: str) -> Optional[Dict[str, Any]]:
    return next((e for e in get_formulas() if e["formula"] == formula), None)


def reload_bank() -> int:
    return FormulaBank.reload()
