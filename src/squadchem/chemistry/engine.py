"""Squad chemistry scoring.

Chemistry is computed in two passes over the formation's slots. The first pass
tallies club, nation and league populations from in-position cards only; the
second pass turns each card's tallies into a 0-3 score through fixed threshold
tables. Icons and heroes add bonus weight to the tallies and always score 3
when in position.
"""

from __future__ import annotations

import re
import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from squadchem.models import PlayerRecord
from squadchem.positions import is_valid_for_slot

MAX_PLAYER_CHEM = 3
MAX_TEAM_CHEM = 33

ICON_NATION_BONUS = 2
ICON_LEAGUE_BONUS = 1
ICON_ALL_LEAGUES_BONUS = 1
HERO_NATION_BONUS = 1
HERO_LEAGUE_BONUS = 2

_NAME_NOISE = re.compile(r"\bfootball club\b|\bafc\b|\bfc\b")
_NAME_PUNCTUATION = re.compile(r"[.'’\-]")
_WHITESPACE = re.compile(r"\s+")


class SlotLike(Protocol):
    key: str
    pos: str


Assignment = Mapping[str, Optional[PlayerRecord]]


@dataclass(frozen=True)
class ChemistryResult:
    per_player_chem: Dict[str, int]
    team_chem: int


@dataclass(frozen=True)
class TraceRow:
    """Scoring breakdown for one placed card."""

    player_id: str
    name: str
    slot: str
    slot_position: str
    in_position: bool
    positions: Tuple[str, ...]
    club_key: Optional[str]
    nation_key: Optional[str]
    league_key: Optional[str]
    club_count: int = 0
    nation_count: int = 0
    league_count: int = 0
    club_chem: int = 0
    nation_chem: int = 0
    league_chem: int = 0
    chem: int = 0


@dataclass(frozen=True)
class ChemistryTrace:
    clubs: Dict[str, int]
    nations: Dict[str, int]
    leagues: Dict[str, int]
    all_leagues: int
    in_position: Tuple[str, ...]
    icons: Tuple[str, ...]
    heroes: Tuple[str, ...]
    rows: Tuple[TraceRow, ...] = field(default_factory=tuple)


ChemistryObserver = Callable[[ChemistryTrace], None]


def club_chemistry(count: int) -> int:
    if count >= 7:
        return 3
    if count >= 4:
        return 2
    if count >= 2:
        return 1
    return 0


def nation_chemistry(count: int) -> int:
    if count >= 8:
        return 3
    if count >= 5:
        return 2
    if count >= 2:
        return 1
    return 0


def league_chemistry(count: int) -> int:
    if count >= 8:
        return 3
    if count >= 5:
        return 2
    if count >= 3:
        return 1
    return 0


def canonical_name(name: Any) -> Optional[str]:
    """Fold a club/nation/league display name so spelling variants tally together."""

    if name is None:
        return None
    text = str(name).lower().strip()
    if not text:
        return None
    decomposed = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = _NAME_NOISE.sub("", text)
    text = _NAME_PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text or None


def identity_key(identifier: Any, name: Any) -> Optional[str]:
    """Prefer a stable identifier; fall back to the canonical display name."""

    if identifier is not None and not isinstance(identifier, bool):
        text = str(identifier).strip()
        if text:
            return f"id:{text}"
    folded = canonical_name(name)
    return f"nm:{folded}" if folded else None


@dataclass(frozen=True)
class _Placement:
    slot: SlotLike
    player: PlayerRecord
    positions: Tuple[str, ...]
    in_position: bool
    club_key: Optional[str]
    nation_key: Optional[str]
    league_key: Optional[str]


def _placements(assignment: Assignment, formation_slots: Iterable[SlotLike]) -> List[_Placement]:
    placements: List[_Placement] = []
    for slot in formation_slots:
        player = assignment.get(slot.key)
        if player is None:
            continue
        positions = tuple(player.native_positions)
        placements.append(
            _Placement(
                slot=slot,
                player=player,
                positions=positions,
                in_position=is_valid_for_slot(slot.pos, positions),
                club_key=identity_key(player.club_id, player.club),
                nation_key=identity_key(player.nation_id, player.nation),
                league_key=identity_key(player.league_id, player.league),
            )
        )
    return placements


def compute_chemistry(
    assignment: Assignment,
    formation_slots: Iterable[SlotLike],
    *,
    observer: Optional[ChemistryObserver] = None,
) -> ChemistryResult:
    """Score every placed card and the team as a whole.

    ``assignment`` maps slot keys to cards (``None`` for empty slots). Cards that
    do not fit their slot score 0 and add nothing to any tally. The function has
    no side effects beyond calling ``observer`` with the scoring breakdown.
    """

    placements = _placements(assignment, formation_slots)

    clubs: Counter[str] = Counter()
    nations: Counter[str] = Counter()
    leagues: Counter[str] = Counter()
    all_leagues = 0

    for placement in placements:
        if not placement.in_position:
            continue
        player = placement.player
        if placement.club_key:
            clubs[placement.club_key] += 1
        if placement.nation_key:
            nations[placement.nation_key] += 1
        if placement.league_key:
            leagues[placement.league_key] += 1

        if player.is_icon:
            if placement.nation_key:
                nations[placement.nation_key] += ICON_NATION_BONUS
            all_leagues += ICON_ALL_LEAGUES_BONUS
            if placement.league_key:
                leagues[placement.league_key] += ICON_LEAGUE_BONUS
        elif player.is_hero:
            if placement.nation_key:
                nations[placement.nation_key] += HERO_NATION_BONUS
            if placement.league_key:
                leagues[placement.league_key] += HERO_LEAGUE_BONUS

    per_player_chem: Dict[str, int] = {}
    rows: List[TraceRow] = []
    for placement in placements:
        player = placement.player
        if not placement.in_position:
            per_player_chem[player.player_id] = 0
            rows.append(_trace_row(placement))
            continue

        club_count = clubs[placement.club_key] if placement.club_key else 0
        nation_count = nations[placement.nation_key] if placement.nation_key else 0
        league_count = (leagues[placement.league_key] if placement.league_key else 0) + all_leagues

        club_chem = club_chemistry(club_count)
        nation_chem = nation_chemistry(nation_count)
        league_chem = league_chemistry(league_count)
        chem = max(0, min(MAX_PLAYER_CHEM, club_chem + nation_chem + league_chem))
        if player.is_special:
            chem = MAX_PLAYER_CHEM

        per_player_chem[player.player_id] = chem
        rows.append(
            _trace_row(
                placement,
                club_count=club_count,
                nation_count=nation_count,
                league_count=league_count,
                club_chem=club_chem,
                nation_chem=nation_chem,
                league_chem=league_chem,
                chem=chem,
            )
        )

    team_chem = min(MAX_TEAM_CHEM, sum(per_player_chem.values()))

    if observer is not None:
        observer(
            ChemistryTrace(
                clubs=dict(clubs),
                nations=dict(nations),
                leagues=dict(leagues),
                all_leagues=all_leagues,
                in_position=tuple(p.player.player_id for p in placements if p.in_position),
                icons=tuple(p.player.player_id for p in placements if p.in_position and p.player.is_icon),
                heroes=tuple(p.player.player_id for p in placements if p.in_position and p.player.is_hero),
                rows=tuple(rows),
            )
        )

    return ChemistryResult(per_player_chem=per_player_chem, team_chem=team_chem)


def _trace_row(placement: _Placement, **scores: int) -> TraceRow:
    return TraceRow(
        player_id=placement.player.player_id,
        name=placement.player.name,
        slot=placement.slot.key,
        slot_position=placement.slot.pos,
        in_position=placement.in_position,
        positions=placement.positions,
        club_key=placement.club_key,
        nation_key=placement.nation_key,
        league_key=placement.league_key,
        **scores,
    )


__all__ = [
    "Assignment",
    "ChemistryObserver",
    "ChemistryResult",
    "ChemistryTrace",
    "TraceRow",
    "canonical_name",
    "club_chemistry",
    "compute_chemistry",
    "identity_key",
    "league_chemistry",
    "nation_chemistry",
]
