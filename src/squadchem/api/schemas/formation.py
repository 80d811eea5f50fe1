from __future__ import annotations

from typing import List

from pydantic import BaseModel


class SlotResponse(BaseModel):
    key: str
    pos: str


class FormationResponse(BaseModel):
    name: str
    slots: List[SlotResponse]
