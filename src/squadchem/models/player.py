"""Card records consumed by the chemistry engine."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from squadchem.positions import player_positions

CardType = Literal["normal", "icon", "hero"]

IdentityId = Union[int, str]


class PlayerRecord(BaseModel):
    """Normalized card payload; ``card_type`` is resolved once at ingest time."""

    player_id: str = Field(..., min_length=1)
    name: str = ""
    position: Optional[Any] = None
    alt_positions: Optional[Union[str, List[Any]]] = None
    positions: List[Any] = Field(default_factory=list)
    club: Optional[str] = None
    club_id: Optional[IdentityId] = None
    nation: Optional[str] = None
    nation_id: Optional[IdentityId] = None
    league: Optional[str] = None
    league_id: Optional[IdentityId] = None
    card_type: CardType = "normal"
    rating: Optional[int] = Field(default=None, ge=0)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def is_icon(self) -> bool:
        return self.card_type == "icon"

    @property
    def is_hero(self) -> bool:
        return self.card_type == "hero"

    @property
    def is_special(self) -> bool:
        return self.card_type != "normal"

    @property
    def native_positions(self) -> List[str]:
        return player_positions(self.position, self.alt_positions, explicit=self.positions)
