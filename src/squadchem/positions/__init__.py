"""Position normalization and slot compatibility rules."""

from .compatibility import COMPATIBILITY, eligible_slot_positions, is_valid_for_slot
from .normalize import (
    ALIASES,
    POSITION_CODES,
    CanonicalPosition,
    RawPosition,
    normalize_position,
    normalize_positions,
    player_positions,
    split_position_text,
)

__all__ = [
    "ALIASES",
    "COMPATIBILITY",
    "CanonicalPosition",
    "POSITION_CODES",
    "RawPosition",
    "eligible_slot_positions",
    "is_valid_for_slot",
    "normalize_position",
    "normalize_positions",
    "player_positions",
    "split_position_text",
]
