# engine/serialize.py
from __future__ import annotations

from engine.tree import SQUARE_TOKEN, Fraction, Item, Leaf, SideContainer, Sqrt


def serialize(container: SideContainer) -> str:
    """
    Render a side as formula text: tokens separated by single spaces,
    ``sqrt(...)``, ``num / den`` and ``^2``. Total on incomplete trees;
    empty slots come out as a single space.
    """
    return " ".join(_walk(item) for item in container.items)


def _walk(item: Item) -> str:
    if isinstance(item, Leaf):
        return "^2" if item.content == SQUARE_TOKEN else item.content
    if isinstance(item, Sqrt):
        return f"sqrt({serialize(item.content) or ' '})"
    if isinstance(item, Fraction):
        return f"{_operand(item.numerator)} / {_operand(item.denominator)}"
    raise TypeError(f"Unknown item type: {type(item).__name__}")


def _operand(slot: SideContainer) -> str:
    text = serialize(slot)
    if len(slot.items) > 1:
        return f"( {text} )"
    return text or " "


def is_complete(container: SideContainer) -> bool:
    # Gates submission: every side and every nested slot needs at least one item.
    if container.is_empty():
        return False
    for item in container.items:
        if isinstance(item, Sqrt) and not is_complete(item.content):
            return False
        if isinstance(item, Fraction) and not (
            is_complete(item.numerator) and is_complete(item.denominator)
        ):
            return False
    return True
