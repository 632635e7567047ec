from __future__ import annotations

import random as _rnd
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from bank import build_palette, deal_problem, find_formula, get_formulas, rearrangement_targets
from engine.drill import split_palette
from schemas.problems import DealOut, FormulaOut, PaletteOut

router = APIRouter(prefix="/problems", tags=["problems"])


def _formula_out(entry) -> dict:
    return {**entry, "targets": rearrangement_targets(entry)}


@router.get("", response_model=List[FormulaOut])
def list_formulas(
    formula: Optional[str] = Query(default=None, description="Return only this formula"),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    random: bool = Query(default=False, description="If true, shuffle before limiting"),
):
    # materialize once so we can shuffle/limit deterministically
    entries = list(get_formulas())
    if formula is not None:
        entries = [e for e in entries if e["formula"] == formula]

    if random:
        _rnd.shuffle(entries)

    if limit is not None:
        entries = entries[:limit]

    return [_formula_out(e) for e in entries]


@router.get("/deal", response_model=DealOut)
def deal(
    formula: Optional[str] = None,
    target: Optional[str] = None,
    seed: Optional[int] = Query(default=None, description="Seed for a reproducible deal"),
):
    if formula is not None:
        entry = find_formula(formula)
        if not entry:
            raise HTTPException(status_code=404, detail="formula not found")
        if target is not None and target not in rearrangement_targets(entry):
            raise HTTPException(status_code=404, detail="no rearrangement for that target")

    rng = _rnd.Random(seed) if seed is not None else None
    problem = deal_problem(rng=rng, formula=formula, target=target)
    quantities, operators = split_palette(list(problem.symbols))
    return {"problem": problem, "quantities": quantities, "operators": operators}


@router.get("/palette", response_model=PaletteOut)
def palette(formula: str):
    entry = find_formula(formula)
    if not entry:
        raise HTTPException(status_code=404, detail="formula not found")
    quantities, operators = split_palette(build_palette(entry))
    return {"formula": formula, "quantities": quantities, "operators": operators}
