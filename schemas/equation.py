# services/flipper/schemas/equation.py
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from engine.tree import Item, SideContainer

# Paths travel as flat lists: [index, slot, index, slot, ...] for a container,
# with one more trailing index for an item. [] is the side itself.
WirePath = List[Union[int, str]]


# ---------- Edits ----------


class InsertRequest(BaseModel):
    side: SideContainer
    path: WirePath = Field(default_factory=list)
    index: int
    token: str


class RemoveRequest(BaseModel):
    side: SideContainer
    path: WirePath = Field(default_factory=list)
    index: int


class MoveRequest(BaseModel):
    side: SideContainer
    source: WirePath
    destination: WirePath = Field(default_factory=list)
    index: int


class SideResponse(BaseModel):
    side: SideContainer


class RemoveResponse(BaseModel):
    side: SideContainer
    removed: Item


# ---------- Queries ----------


class LocateRequest(BaseModel):
    side: SideContainer
    id: str


class LocateResponse(BaseModel):
    path: WirePath


class SerializeRequest(BaseModel):
    side: SideContainer


class SerializeResponse(BaseModel):
    text: str
    complete: bool


class PreviewRequest(BaseModel):
    left: SideContainer = Field(default_factory=SideContainer)
    right: SideContainer = Field(default_factory=SideContainer)


class PreviewResponse(BaseModel):
    answer: str
    left_complete: bool
    right_complete: bool
    can_submit: bool
    empty: bool
    feedback: Optional[str] = None
