# engine/paths.py
"""
Path addressing and copy-on-write edits for equation side trees.

A container is addressed by a chain of ``Descend`` steps from the root side:
each step picks the item at ``index`` of the current container and enters
one of its named slots. An item is addressed by a container path plus an
index into that container.

Every edit returns a new root and leaves the input untouched. A bad path
raises ``PathError`` before anything is built, so callers keep their
previous tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple

from engine.tree import Fraction, Item, Leaf, SideContainer, Sqrt


class PathError(ValueError):
    pass


class Slot(str, Enum):
    CONTENT = "content"
    NUMERATOR = "numerator"
    DENOMINATOR = "denominator"


class Descend(NamedTuple):
    index: int
    slot: Slot


ContainerPath = Tuple[Descend, ...]
ROOT: ContainerPath = ()


class ItemPath(NamedTuple):
    container: ContainerPath
    index: int


_SLOTS = {
    Sqrt: (Slot.CONTENT,),
    Fraction: (Slot.NUMERATOR, Slot.DENOMINATOR),
}


# --- Resolution -------------------------------------------------------------------


def _item_at(container: SideContainer, index: int) -> Item:
    if not 0 <= index < len(container.items):
        raise PathError(f"Index {index} out of range for container of {len(container.items)}.")
    return container.items[index]


def _slot_of(item: Item, slot: Slot) -> SideContainer:
    if isinstance(item, Leaf):
        raise PathError(f"Symbol {item.content!r} has no child containers.")
    if slot not in _SLOTS[type(item)]:
        raise PathError(f"{item.type} has no {slot.value!r} slot.")
    return getattr(item, slot.value)


def resolve_container(root: SideContainer, path: ContainerPath) -> SideContainer:
    current = root
    for step in path:
        current = _slot_of(_item_at(current, step.index), step.slot)
    return current


def resolve_item(root: SideContainer, path: ItemPath) -> Item:
    return _item_at(resolve_container(root, path.container), path.index)


def find_path(root: SideContainer, item_id: str) -> Optional[ItemPath]:
    """Locate an item by its id; None when it is not in the tree."""

    def walk(container: SideContainer, prefix: ContainerPath) -> Optional[ItemPath]:
        for i, item in enumerate(container.items):
            if item.id == item_id:
                return ItemPath(prefix, i)
            for slot in _SLOTS.get(type(item), ()):
                found = walk(getattr(item, slot.value), prefix + (Descend(i, slot),))
                if found is not None:
                    return found
        return None

    return walk(root, ROOT)


# --- Edits ------------------------------------------------------------------------


def _rebuild(
    root: SideContainer, path: ContainerPath, edit: Callable[[SideContainer], SideContainer]
) -> SideContainer:
    # Copy the spine from root down to the addressed container; siblings are shared.
    if not path:
        return edit(root)
    step, rest = path[0], path[1:]
    item = _item_at(root, step.index)
    child = _rebuild(_slot_of(item, step.slot), rest, edit)
    items = list(root.items)
    items[step.index] = item.model_copy(update={step.slot.value: child})
    return root.model_copy(update={"items": tuple(items)})


def insert(root: SideContainer, path: ContainerPath, index: int, item: Item) -> SideContainer:
    def edit(container: SideContainer) -> SideContainer:
        items = list(container.items)
        items.insert(max(0, min(index, len(items))), item)
        return container.model_copy(update={"items": tuple(items)})

    return _rebuild(root, path, edit)


def remove_at(root: SideContainer, path: ContainerPath, index: int) -> Tuple[SideContainer, Item]:
    removed: List[Item] = []

    def edit(container: SideContainer) -> SideContainer:
        removed.append(_item_at(container, index))
        items = list(container.items)
        del items[index]
        return container.model_copy(update={"items": tuple(items)})

    new_root = _rebuild(root, path, edit)
    return new_root, removed[0]


def _shift_after_removal(source: ItemPath, dest: ContainerPath) -> ContainerPath:
    # Removing the source shifts later siblings left by one; a destination
    # that descends through one of them must follow.
    depth = len(source.container)
    if len(dest) <= depth or dest[:depth] != source.container:
        return dest
    step = dest[depth]
    if step.index == source.index:
        raise PathError("Cannot move an item into its own slot.")
    if step.index > source.index:
        return dest[:depth] + (Descend(step.index - 1, step.slot),) + dest[depth + 1 :]
    return dest


def move(
    root: SideContainer, source: ItemPath, dest: ContainerPath, dest_index: int
) -> SideContainer:
    """
    Remove the item at ``source`` and insert it into ``dest`` at ``dest_index``.
    ``dest`` is given against the tree the caller sees; ``dest_index`` is read
    against the destination after the removal, so moving A of [A, B, C] to
    index 2 of the same container gives [B, C, A].
    """
    resolve_container(root, dest)
    adjusted = _shift_after_removal(source, dest)
    without, item = remove_at(root, source.container, source.index)
    return insert(without, adjusted, dest_index, item)


# --- Wire form --------------------------------------------------------------------
# Clients send paths as flat lists, e.g. [0, "numerator", 2, "content"] for a
# container and the same list plus a trailing index for an item.


def _as_index(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise PathError(f"Expected an index, got {raw!r}.")
    return raw


def _as_slot(raw: Any) -> Slot:
    try:
        return Slot(raw)
    except ValueError:
        raise PathError(f"Unknown slot {raw!r}.") from None


def parse_container_path(raw: Sequence[Any]) -> ContainerPath:
    if len(raw) % 2:
        raise PathError("Container path must alternate index and slot.")
    return tuple(
        Descend(_as_index(raw[i]), _as_slot(raw[i + 1])) for i in range(0, len(raw), 2)
    )


def parse_item_path(raw: Sequence[Any]) -> ItemPath:
    if not raw:
        raise PathError("Item path requires an index.")
    return ItemPath(parse_container_path(raw[:-1]), _as_index(raw[-1]))


def container_path_to_wire(path: ContainerPath) -> List[Any]:
    out: List[Any] = []
    for step in path:
        out.extend((step.index, step.slot.value))
    return out


def item_path_to_wire(path: ItemPath) -> List[Any]:
    return container_path_to_wire(path.container) + [path.index]
