"""Squad chemistry and position-compatibility engine."""

from squadchem.chemistry import ChemistryResult, compute_chemistry, evaluate_squad
from squadchem.config import Formation, Slot, get_formation, iter_formations
from squadchem.models import PlayerRecord
from squadchem.positions import is_valid_for_slot, normalize_position, normalize_positions

__version__ = "0.1.0"

__all__ = [
    "ChemistryResult",
    "Formation",
    "PlayerRecord",
    "Slot",
    "compute_chemistry",
    "evaluate_squad",
    "get_formation",
    "is_valid_for_slot",
    "iter_formations",
    "normalize_position",
    "normalize_positions",
]
