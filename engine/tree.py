# engine/tree.py
from __future__ import annotations

from typing import Annotated, Literal, Tuple, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# Palette tokens that expand into composite nodes (or the ^2 operator) when dropped.
FRACTION_TOKEN = "__fraction__"
SQRT_TOKEN = "__sqrt__"
SQUARE_TOKEN = "__square__"

OPERATOR_TOKENS = ("+", "-", "*", "/", "(", ")")


def new_id() -> str:
    return uuid4().hex


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    # stable across moves; clients key their rendering on it
    id: str = Field(default_factory=new_id)


class Leaf(_Node):
    type: Literal["symbol"] = "symbol"
    content: str


class Sqrt(_Node):
    type: Literal["sqrt"] = "sqrt"
    content: SideContainer = Field(default_factory=lambda: SideContainer())


class Fraction(_Node):
    type: Literal["fraction"] = "fraction"
    numerator: SideContainer = Field(default_factory=lambda: SideContainer())
    denominator: SideContainer = Field(default_factory=lambda: SideContainer())


Item = Annotated[Union[Leaf, Sqrt, Fraction], Field(discriminator="type")]


class SideContainer(BaseModel):
    """
    Ordered run of items: one side of the equation, or a slot inside a
    square root or fraction. Order is the left-to-right reading order.
    """

    model_config = ConfigDict(frozen=True)

    items: Tuple[Item, ...] = ()

    def is_empty(self) -> bool:
        # direct length only; a fraction with an empty numerator still counts as an item
        return len(self.items) == 0


Sqrt.model_rebuild()
Fraction.model_rebuild()
SideContainer.model_rebuild()


def side(*items: Union[Leaf, Sqrt, Fraction]) -> SideContainer:
    return SideContainer(items=tuple(items))


def make_item(token: str) -> Union[Leaf, Sqrt, Fraction]:
    """
    Build the item a palette token stands for.
    __fraction__ and __sqrt__ become empty composite nodes; everything else
    (variables, operators, __square__) is a plain leaf.
    """
    if not isinstance(token, str) or not token.strip():
        raise ValueError("Token required.")
    if token == FRACTION_TOKEN:
        return Fraction()
    if token == SQRT_TOKEN:
        return Sqrt()
    return Leaf(content=token)
