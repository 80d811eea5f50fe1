import pytest

from squadchem.config import DEFAULT_FORMATION, get_formation, iter_formations
from squadchem.positions import POSITION_CODES


def test_get_formation_is_case_and_space_insensitive():
    formation = get_formation("  4-2-3-1   (2) ")
    assert formation.name == "4-2-3-1 (2)"


def test_get_formation_missing_raises():
    with pytest.raises(KeyError):
        get_formation("2-3-5")


def test_default_formation_exists():
    formation = get_formation(DEFAULT_FORMATION)
    assert formation.slot_keys == ("GK", "LB", "LCB", "RCB", "RB", "LCM", "CM", "RCM", "LW", "ST", "RW")


@pytest.mark.parametrize("formation", list(iter_formations()), ids=lambda f: f.name)
def test_formation_slots_are_well_formed(formation):
    assert len(formation) == 11
    assert len(set(formation.slot_keys)) == 11
    assert all(slot.pos in POSITION_CODES for slot in formation.slots)
    assert sum(slot.pos == "GK" for slot in formation.slots) == 1


def test_side_slot_keys_map_to_central_positions():
    formation = get_formation("4-2-3-1")
    assert formation.slot("LCDM").pos == "CDM"
    assert formation.slot("RAM").pos == "CAM"
    assert get_formation("4-4-2").slot("LST").pos == "ST"
    with pytest.raises(KeyError):
        formation.slot("LWB")


def test_back_five_uses_wing_backs():
    formation = get_formation("5-3-2")
    assert formation.slot("LWB").pos == "LWB"
    assert formation.slot("RWB").pos == "RWB"
