from pathlib import Path

import pytest

from squadchem.ingest import (
    DEFAULT_CARD_MAPPING,
    CardRow,
    classify_card_type,
    load_records_from_csv,
    record_from_payload,
    rows_to_records,
)


def _row(**kwargs):
    return CardRow.from_mapping(kwargs, DEFAULT_CARD_MAPPING)


def _cards_csv() -> str:
    return """card_id,name,position,altposition,club,club_id,nation,league,rating
101,Kylian Mbappe,ST,"LW, CF",Real Madrid,243,France,LALIGA EA SPORTS,91
102,Zinedine Zidane,CAM,CM,ICON,,France,Icons,96
103,Park Ji Sung,CM,RM/CAM,HERO,,Korea Republic,Premier League,89
104,,GK,,Arsenal,1,England,Premier League,80
,,CB,,Arsenal,1,England,Premier League,80
"""


@pytest.mark.parametrize(
    "club, league, expected",
    [
        ("ICON", "Icons", "icon"),
        ("Real Madrid", "ICONS", "icon"),
        ("icon", None, "icon"),
        ("Hero", "Premier League", "hero"),
        ("Arsenal", "Premier League", "normal"),
        (None, None, "normal"),
    ],
)
def test_classify_card_type_heuristic(club, league, expected):
    assert classify_card_type(club, league) == expected


def test_classify_card_type_explicit_flags_win():
    assert classify_card_type("ICON", "Icons", is_icon=False, is_hero=False) == "normal"
    assert classify_card_type("Arsenal", None, is_hero=True) == "hero"
    assert classify_card_type("HERO", None, is_icon=True) == "icon"
    assert classify_card_type("ICON", None, is_icon=False) == "normal"
    assert classify_card_type("Real Madrid", "Icons", is_icon=False) == "normal"
    assert classify_card_type("HERO", None, is_hero=False) == "normal"
    # a flag left unset still falls back to the reserved names
    assert classify_card_type("HERO", None, is_icon=False) == "hero"
    assert classify_card_type("ICON", None, is_hero=False) == "icon"


def test_record_from_payload_honours_explicit_not_icon_flag():
    record = record_from_payload({"card_id": 1, "position": "ST", "club": "ICON", "is_icon": False})
    assert record.card_type == "normal"
    assert not record.is_special


def test_classify_card_type_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SQUADCHEM_HERO_CLUBS", "HERO, FUT HEROES")
    assert classify_card_type("fut heroes", None) == "hero"


def test_classify_card_type_empty_env_uses_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SQUADCHEM_ICON_CLUBS", " , ")
    assert classify_card_type("ICON", None) == "icon"


def test_rows_to_records_parses_identities_and_positions():
    row = _row(card_id="101", name="Kylian Mbappe", position="ST", altposition="LW, CF", club_id="243", nation_id="18.0", rating="91")

    record = rows_to_records([row])[0]

    assert record.player_id == "101"
    assert record.native_positions == ["ST", "LW", "CF"]
    assert record.club_id == 243
    assert record.nation_id == 18
    assert record.rating == 91
    assert record.card_type == "normal"
    assert record.metadata["raw_alt_positions"] == "LW, CF"


def test_load_records_from_csv(tmp_path: Path):
    path = tmp_path / "cards.csv"
    path.write_text(_cards_csv(), encoding="utf-8")

    records = load_records_from_csv(path)

    assert [record.player_id for record in records] == ["101", "102", "103", "104"]
    by_id = {record.player_id: record for record in records}
    assert by_id["102"].is_icon
    assert by_id["103"].is_hero
    assert by_id["103"].native_positions == ["CM", "RM", "CAM"]
    assert by_id["104"].name == "Unknown Player"
    assert by_id["101"].club_id == 243


def test_load_records_with_custom_mapping(tmp_path: Path):
    path = tmp_path / "cards.csv"
    path.write_text("Id,First,Last,Pos\n7,Cristiano,Ronaldo,ST\n", encoding="utf-8")

    records = load_records_from_csv(
        path,
        mapping={"player_id": "Id", "name": "First|Last", "position": "Pos"},
    )

    assert records[0].name == "Cristiano Ronaldo"
    assert records[0].native_positions == ["ST"]


def test_record_from_payload_search_shape():
    record = record_from_payload(
        {"card_id": 55, "name": "Thierry Henry", "position": "ST", "altposition": "LW", "club": "ICON", "league": "Icons"}
    )
    assert record.player_id == "55"
    assert record.is_icon
    assert record.native_positions == ["ST", "LW"]


def test_record_from_payload_without_identity_raises():
    with pytest.raises(ValueError):
        record_from_payload({"position": "ST"})


def test_rows_without_id_or_name_are_skipped(caplog: pytest.LogCaptureFixture):
    with caplog.at_level("WARNING"):
        records = rows_to_records([_row(position="ST")])
    assert records == []
    assert "without id or name" in caplog.text
