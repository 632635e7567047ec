# services/flipper/schemas/problems.py
from typing import Dict, List

from pydantic import BaseModel

from engine.drill import Problem


class FormulaOut(BaseModel):
    formula: str
    variables: List[str]
    targets: List[str]
    answers: Dict[str, str]


class DealOut(BaseModel):
    problem: Problem
    quantities: List[str]
    operators: List[str]


class PaletteOut(BaseModel):
    formula: str
    quantities: List[str]
    operators: List[str]
