"""Squad-level wrapper around the chemistry engine."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from squadchem.config import Formation, get_formation

from .engine import Assignment, ChemistryObserver, ChemistryResult, compute_chemistry


class DuplicatePlayerError(ValueError):
    def __init__(self, duplicates: Dict[str, List[str]]):
        self.duplicates = duplicates
        detail = "; ".join(
            f"{player_id} in {', '.join(slots)}" for player_id, slots in sorted(duplicates.items())
        )
        super().__init__(f"Players placed in more than one slot: {detail}")


class UnknownSlotError(KeyError):
    def __init__(self, formation: str, slot_keys: List[str]):
        self.formation = formation
        self.slot_keys = slot_keys
        super().__init__(f"Formation {formation!r} has no slots {', '.join(slot_keys)}")


@dataclass(frozen=True)
class SquadEvaluation:
    formation: Formation
    result: ChemistryResult

    @property
    def team_chem(self) -> int:
        return self.result.team_chem

    @property
    def per_player_chem(self) -> Dict[str, int]:
        return self.result.per_player_chem


def find_duplicate_players(assignment: Assignment) -> Dict[str, List[str]]:
    """Map each player id placed in more than one slot to those slot keys."""

    slots_by_player: Dict[str, List[str]] = defaultdict(list)
    for slot_key, player in assignment.items():
        if player is not None:
            slots_by_player[player.player_id].append(slot_key)
    return {player_id: slots for player_id, slots in slots_by_player.items() if len(slots) > 1}


def evaluate_squad(
    formation: Union[str, Formation],
    assignment: Assignment,
    *,
    observer: Optional[ChemistryObserver] = None,
    reject_duplicates: bool = True,
) -> SquadEvaluation:
    """Resolve the formation, validate the assignment and compute chemistry."""

    resolved = get_formation(formation) if isinstance(formation, str) else formation

    unknown = [key for key in assignment if key not in resolved.slot_keys]
    if unknown:
        raise UnknownSlotError(resolved.name, unknown)

    if reject_duplicates:
        duplicates = find_duplicate_players(assignment)
        if duplicates:
            raise DuplicatePlayerError(duplicates)

    result = compute_chemistry(assignment, resolved.slots, observer=observer)
    return SquadEvaluation(formation=resolved, result=result)
