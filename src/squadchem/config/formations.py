"""Formation slot tables for the squad builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from squadchem.positions import normalize_position


@dataclass(frozen=True)
class Slot:
    key: str
    pos: str


@dataclass(frozen=True)
class Formation:
    name: str
    slots: Tuple[Slot, ...]

    @property
    def slot_keys(self) -> Tuple[str, ...]:
        return tuple(slot.key for slot in self.slots)

    def slot(self, key: str) -> Slot:
        for slot in self.slots:
            if slot.key == key:
                return slot
        raise KeyError(f"Formation {self.name!r} has no slot {key!r}")

    def __iter__(self):
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)


# Slot keys that name a side of a central role share the central position.
_SLOT_KEY_POSITIONS: Dict[str, str] = {
    "LCB": "CB",
    "RCB": "CB",
    "LCDM": "CDM",
    "RCDM": "CDM",
    "LCM": "CM",
    "RCM": "CM",
    "LCAM": "CAM",
    "RCAM": "CAM",
    "LAM": "CAM",
    "RAM": "CAM",
    "LST": "ST",
    "RST": "ST",
}


def _slot(key: str) -> Slot:
    pos = _SLOT_KEY_POSITIONS.get(key) or normalize_position(key)
    if pos is None:
        raise ValueError(f"slot key {key!r} has no canonical position")
    return Slot(key=key, pos=pos)


def _formation(name: str, *lines: Tuple[str, ...]) -> Formation:
    return Formation(name=name, slots=tuple(_slot(key) for line in lines for key in line))


_GK = ("GK",)
_BACK_FOUR = ("LB", "LCB", "RCB", "RB")
_BACK_THREE = ("LCB", "CB", "RCB")
_BACK_FIVE = ("LWB", "LCB", "CB", "RCB", "RWB")
_MF_TWO = ("LCM", "RCM")
_MF_THREE = ("LCM", "CM", "RCM")
_MF_FOUR = ("LM", "LCM", "RCM", "RM")
_MF_FIVE = ("LM", "LCM", "CM", "RCM", "RM")
_FRONT_ONE = ("ST",)
_FRONT_TWO = ("LST", "RST")
_FRONT_THREE = ("LW", "ST", "RW")

_FORMATIONS: Dict[str, Formation] = {
    formation.name: formation
    for formation in (
        _formation("4-3-3", _GK, _BACK_FOUR, _MF_THREE, _FRONT_THREE),
        _formation("4-3-3 (2)", _GK, _BACK_FOUR, ("LCM", "RCM"), ("CDM",), _FRONT_THREE),
        _formation("4-3-3 (3)", _GK, _BACK_FOUR, _MF_THREE, ("LW", "CF", "RW")),
        _formation("4-3-3 (4)", _GK, _BACK_FOUR, ("LCM", "RCM"), ("CAM",), _FRONT_THREE),
        _formation("4-3-3 (5)", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("CM",), _FRONT_THREE),
        _formation("4-2-3-1", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("LAM", "CAM", "RAM"), _FRONT_ONE),
        _formation("4-2-3-1 (2)", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("LM", "CAM", "RM"), _FRONT_ONE),
        _formation("4-4-2", _GK, _BACK_FOUR, _MF_FOUR, _FRONT_TWO),
        _formation("4-4-2 (2)", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("LM", "RM"), _FRONT_TWO),
        _formation("4-1-2-1-2", _GK, _BACK_FOUR, ("CDM",), ("LCM", "RCM"), ("CAM",), _FRONT_TWO),
        _formation("4-1-2-1-2 (2)", _GK, _BACK_FOUR, ("CDM",), ("LM", "RM"), ("CAM",), _FRONT_TWO),
        _formation("4-3-1-2", _GK, _BACK_FOUR, _MF_THREE, ("CAM",), _FRONT_TWO),
        _formation("4-3-2-1", _GK, _BACK_FOUR, _MF_THREE, ("LF", "RF"), _FRONT_ONE),
        _formation("4-5-1", _GK, _BACK_FOUR, _MF_FIVE, _FRONT_ONE),
        _formation("4-5-1 (2)", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("LM", "CAM", "RM"), _FRONT_ONE),
        _formation("4-1-4-1", _GK, _BACK_FOUR, ("CDM",), _MF_FOUR, _FRONT_ONE),
        _formation("4-2-2-2", _GK, _BACK_FOUR, ("LCDM", "RCDM"), ("LAM", "RAM"), _FRONT_TWO),
        _formation("3-5-2", _GK, _BACK_THREE, _MF_FIVE, _FRONT_TWO),
        _formation("3-4-3", _GK, _BACK_THREE, _MF_FOUR, _FRONT_THREE),
        _formation("3-4-2-1", _GK, _BACK_THREE, _MF_FOUR, ("LF", "RF"), _FRONT_ONE),
        _formation("3-4-1-2", _GK, _BACK_THREE, _MF_FOUR, ("CAM",), _FRONT_TWO),
        _formation("5-2-1-2", _GK, _BACK_FIVE, _MF_TWO, ("CAM",), _FRONT_TWO),
        _formation("5-2-2-1", _GK, _BACK_FIVE, _MF_TWO, ("LW", "RW"), _FRONT_ONE),
        _formation("5-3-2", _GK, _BACK_FIVE, _MF_THREE, _FRONT_TWO),
        _formation("5-4-1", _GK, _BACK_FIVE, _MF_FOUR, _FRONT_ONE),
    )
}

DEFAULT_FORMATION = "4-3-3"


def _formation_key(name: str) -> str:
    return " ".join(name.split()).upper()


_FORMATION_LOOKUP: Dict[str, Formation] = {
    _formation_key(name): formation for name, formation in _FORMATIONS.items()
}


def iter_formations() -> Iterable[Formation]:
    """Return an iterator of all configured formations."""

    return _FORMATIONS.values()


def get_formation(name: str) -> Formation:
    """Fetch a formation by name, raising KeyError if missing."""

    key = _formation_key(name)
    if key not in _FORMATION_LOOKUP:
        raise KeyError(f"No formation configured for name={name!r}")
    return _FORMATION_LOOKUP[key]
