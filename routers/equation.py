# services/flipper/routers/equation.py
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from engine.paths import (
    PathError,
    find_path,
    insert,
    item_path_to_wire,
    move,
    parse_container_path,
    parse_item_path,
    remove_at,
)
from engine.drill import INCOMPLETE_MSG
from engine.serialize import is_complete, serialize
from engine.tree import make_item
from schemas.equation import (
    InsertRequest,
    LocateRequest,
    LocateResponse,
    MoveRequest,
    PreviewRequest,
    PreviewResponse,
    RemoveRequest,
    RemoveResponse,
    SerializeRequest,
    SerializeResponse,
    SideResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/equation", tags=["equation"])


def _rejected(e: Exception) -> HTTPException:
    # The client keeps its previous tree; nothing is partially applied.
    logger.info("rejected edit: %s", e)
    return HTTPException(status_code=422, detail=str(e))


# --- Edits ------------------------------------------------------------------------


@router.post("/insert", response_model=SideResponse)
def insert_item(req: InsertRequest):
    try:
        item = make_item(req.token)
        side = insert(req.side, parse_container_path(req.path), req.index, item)
    except ValueError as e:  # PathError included
        raise _rejected(e)
    return {"side": side}


@router.post("/remove", response_model=RemoveResponse)
def remove_item(req: RemoveRequest):
    try:
        side, removed = remove_at(req.side, parse_container_path(req.path), req.index)
    except PathError as e:
        raise _rejected(e)
    return {"side": side, "removed": removed}


@router.post("/move", response_model=SideResponse)
def move_item(req: MoveRequest):
    try:
        side = move(
            req.side,
            parse_item_path(req.source),
            parse_container_path(req.destination),
            req.index,
        )
    except PathError as e:
        raise _rejected(e)
    return {"side": side}


# --- Queries ----------------------------------------------------------------------


@router.post("/locate", response_model=LocateResponse)
def locate_item(req: LocateRequest):
    path = find_path(req.side, req.id)
    if path is None:
        raise HTTPException(status_code=404, detail="item not found")
    return {"path": item_path_to_wire(path)}


@router.post("/serialize", response_model=SerializeResponse)
def serialize_side(req: SerializeRequest):
    return {"text": serialize(req.side), "complete": is_complete(req.side)}


@router.post("/preview", response_model=PreviewResponse)
def preview(req: PreviewRequest):
    left_ok = is_complete(req.left)
    right_ok = is_complete(req.right)
    can_submit = left_ok and right_ok
    return {
        "answer": f"{serialize(req.left)} = {serialize(req.right)}",
        "left_complete": left_ok,
        "right_complete": right_ok,
        "can_submit": can_submit,
        "empty": req.left.is_empty() and req.right.is_empty(),
        "feedback": None if can_submit else INCOMPLETE_MSG,
    }
