"""Chemistry engine and squad evaluation."""

from .engine import (
    ChemistryObserver,
    ChemistryResult,
    ChemistryTrace,
    TraceRow,
    canonical_name,
    club_chemistry,
    compute_chemistry,
    identity_key,
    league_chemistry,
    nation_chemistry,
)
from .service import (
    DuplicatePlayerError,
    SquadEvaluation,
    UnknownSlotError,
    evaluate_squad,
    find_duplicate_players,
)

__all__ = [
    "ChemistryObserver",
    "ChemistryResult",
    "ChemistryTrace",
    "DuplicatePlayerError",
    "SquadEvaluation",
    "TraceRow",
    "UnknownSlotError",
    "canonical_name",
    "club_chemistry",
    "compute_chemistry",
    "evaluate_squad",
    "find_duplicate_players",
    "identity_key",
    "league_chemistry",
    "nation_chemistry",
]
