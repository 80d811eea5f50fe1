import pytest

from squadchem.positions import (
    POSITION_CODES,
    normalize_position,
    normalize_positions,
    player_positions,
    split_position_text,
)


def test_position_codes_are_the_seventeen_canonical_codes():
    assert len(POSITION_CODES) == 17
    assert len(set(POSITION_CODES)) == 17
    assert POSITION_CODES[0] == "GK"
    assert POSITION_CODES[-1] == "ST"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("cb", "CB"),
        ("  st ", "ST"),
        ("Right Back", "RB"),
        ("right   back", "RB"),
        ("RIGHTBACK", "RB"),
        ("Centre Back", "CB"),
        ("goalkeeper", "GK"),
        ("Keeper", "GK"),
        ("Striker", "ST"),
        ("Forward", "ST"),
        ("Right Forward", "RF"),
        ("left wing back", "LWB"),
        ("c.a.m", "CAM"),
        ("(CDM)", "CDM"),
        ("LCB", "CB"),
    ],
)
def test_normalize_text_tokens(raw, expected):
    assert normalize_position(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "XYZ", "sub", "123", None, 3.5, True, object()])
def test_normalize_rejects_unknown_tokens(raw):
    assert normalize_position(raw) is None


def test_normalize_numeric_codes():
    assert normalize_position(0) == "GK"
    assert normalize_position(5) == "CB"
    assert normalize_position(25) == "ST"
    assert normalize_position(27) == "LW"
    assert normalize_position(99) is None


def test_normalize_nested_mapping():
    assert normalize_position({"position": "Left Mid"}) == "LM"
    assert normalize_position({"pos": 18}) == "CAM"
    assert normalize_position({"short_name": "", "name": "Striker"}) == "ST"
    assert normalize_position({"label": "ST"}) is None


def test_normalize_positions_dedupes_and_keeps_order():
    assert normalize_positions(["st", "Striker", "LW", "nope", "ST", "lw"]) == ["ST", "LW"]
    assert normalize_positions("CB") == ["CB"]
    assert normalize_positions(None) == []


@pytest.mark.parametrize(
    "raw",
    [
        ["CB", "RB", "LB"],
        ["striker", "Right Wing", 23, {"pos": "CF"}],
        "Goalkeeper",
        ["junk", "more junk"],
    ],
)
def test_normalize_positions_is_idempotent(raw):
    once = normalize_positions(raw)
    assert normalize_positions(once) == once


def test_split_alternate_position_string():
    assert split_position_text("CB, RB/LB") == ["CB", "RB", "LB"]
    assert normalize_positions(split_position_text("CB, RB/LB")) == ["CB", "RB", "LB"]
    assert split_position_text("ST|CF;LW") == ["ST", "CF", "LW"]
    assert split_position_text("CM CDM") == ["CM", "CDM"]
    assert split_position_text("Right Back, ST") == ["Right Back", "ST"]
    assert split_position_text("") == []
    assert split_position_text(None) == []


def test_player_positions_combines_primary_and_alternates():
    assert player_positions("CB", "CB, RB/LB") == ["CB", "RB", "LB"]
    assert player_positions("ST", ["CF", "LW/RW"]) == ["ST", "CF", "LW", "RW"]
    assert player_positions(None, "CM") == ["CM"]
    assert player_positions("", None) == []


def test_player_positions_prefers_explicit_list():
    assert player_positions("GK", "CB", explicit=["st"]) == ["ST"]
    assert player_positions("GK", None, explicit=[]) == ["GK"]


def test_split_space_separated_multi_word_positions():
    assert split_position_text("Right Wing Left Wing") == ["Right Wing", "Left Wing"]
    assert split_position_text("Centre Back RB junk") == ["Centre Back", "RB", "junk"]
    assert player_positions("ST", "Right Wing Left Wing") == ["ST", "RW", "LW"]


def test_normalize_cyclic_mapping_returns_none():
    payload: dict = {}
    payload["position"] = payload
    assert normalize_position(payload) is None
    assert normalize_positions([payload, "ST"]) == ["ST"]


def test_normalize_deeply_nested_mapping_is_bounded():
    assert normalize_position({"position": {"pos": {"code": "CB"}}}) == "CB"
    deep: dict = {"pos": "CB"}
    for _ in range(10):
        deep = {"position": deep}
    assert normalize_position(deep) is None
