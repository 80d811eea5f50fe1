"""Directed position compatibility between a card's native position and a slot."""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from .normalize import normalize_position, normalize_positions

# Native position -> slot positions that card may occupy. The relation is read
# one way only; it is not closed under symmetry.
COMPATIBILITY: Mapping[str, Tuple[str, ...]] = {
    "GK": ("GK",),
    "RB": ("RB", "RWB", "CB"),
    "RWB": ("RWB", "RB", "RM"),
    "CB": ("CB", "RB", "LB"),
    "LB": ("LB", "LWB", "CB"),
    "LWB": ("LWB", "LB", "LM"),
    "CDM": ("CDM", "CM", "CB"),
    "CM": ("CM", "CDM", "CAM"),
    "CAM": ("CAM", "CM", "CF"),
    "RM": ("RM", "RW", "RWB", "CM"),
    "LM": ("LM", "LW", "LWB", "CM"),
    "RW": ("RW", "RM", "RF", "ST"),
    "LW": ("LW", "LM", "LF", "ST"),
    "RF": ("RF", "CF", "RW", "ST"),
    "LF": ("LF", "CF", "LW", "ST"),
    "CF": ("CF", "CAM", "ST", "RF", "LF"),
    "ST": ("ST", "CF", "RF", "LF", "RW", "LW"),
}


def is_valid_for_slot(slot_position: Any, native_positions: Any) -> bool:
    """Return True if any native position may fill ``slot_position``.

    An unresolvable slot position never matches.
    """

    slot = normalize_position(slot_position)
    if slot is None:
        return False

    for native in normalize_positions(native_positions):
        if native == slot:
            return True
        if slot in COMPATIBILITY.get(native, ()):
            return True
    return False


def eligible_slot_positions(native_positions: Any) -> List[str]:
    """List every slot position reachable from the given native positions."""

    seen: set[str] = set()
    result: List[str] = []
    for native in normalize_positions(native_positions):
        for slot in (native, *COMPATIBILITY.get(native, ())):
            if slot not in seen:
                seen.add(slot)
                result.append(slot)
    return result


__all__ = ["COMPATIBILITY", "eligible_slot_positions", "is_valid_for_slot"]
