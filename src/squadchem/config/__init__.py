"""Configuration helpers for formations and classification overrides."""

from .formations import DEFAULT_FORMATION, Formation, Slot, get_formation, iter_formations
from .settings import (
    default_formation_name,
    hero_club_tokens,
    icon_club_tokens,
    icon_league_tokens,
)

__all__ = [
    "DEFAULT_FORMATION",
    "Formation",
    "Slot",
    "default_formation_name",
    "get_formation",
    "hero_club_tokens",
    "icon_club_tokens",
    "icon_league_tokens",
    "iter_formations",
]
