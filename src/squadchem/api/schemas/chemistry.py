from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class CardPayload(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str = ""
    position: Optional[Any] = None
    alt_positions: Optional[Union[str, List[Any]]] = None
    positions: List[Any] = Field(default_factory=list)
    club: Optional[str] = None
    club_id: Optional[Union[int, str]] = None
    nation: Optional[str] = None
    nation_id: Optional[Union[int, str]] = None
    league: Optional[str] = None
    league_id: Optional[Union[int, str]] = None
    card_type: Optional[Literal["normal", "icon", "hero"]] = None
    is_icon: Optional[bool] = None
    is_hero: Optional[bool] = None
    rating: Optional[int] = Field(default=None, ge=0)


class ChemistryRequest(BaseModel):
    formation: Optional[str] = None
    players: Dict[str, Optional[CardPayload]] = Field(default_factory=dict)
    trace: bool = False


class SlotChemistryResponse(BaseModel):
    key: str
    pos: str
    player_id: Optional[str] = None
    name: Optional[str] = None
    in_position: Optional[bool] = None
    chem: Optional[int] = None


class TraceRowResponse(BaseModel):
    player_id: str
    name: str
    slot: str
    slot_position: str
    in_position: bool
    positions: List[str]
    club_key: Optional[str]
    nation_key: Optional[str]
    league_key: Optional[str]
    club_count: int
    nation_count: int
    league_count: int
    club_chem: int
    nation_chem: int
    league_chem: int
    chem: int


class ChemistryTraceResponse(BaseModel):
    clubs: Dict[str, int]
    nations: Dict[str, int]
    leagues: Dict[str, int]
    all_leagues: int
    in_position: List[str]
    icons: List[str]
    heroes: List[str]
    rows: List[TraceRowResponse]


class ChemistryResponse(BaseModel):
    formation: str
    team_chem: int
    per_player_chem: Dict[str, int]
    slots: List[SlotChemistryResponse]
    trace: Optional[ChemistryTraceResponse] = None


class NormalizeRequest(BaseModel):
    position: Optional[Any] = None
    alt_positions: Optional[Union[str, List[Any]]] = None


class NormalizeResponse(BaseModel):
    positions: List[str]
    eligible_slots: List[str]
