import json
from pathlib import Path

import pytest

from squadchem.cli import main


def _write_squad(path: Path, players: dict, formation: str = "4-3-3") -> Path:
    path.write_text(json.dumps({"formation": formation, "players": players}), encoding="utf-8")
    return path


def test_cli_lists_formations(capsys: pytest.CaptureFixture[str]):
    main(["formations"])
    out = capsys.readouterr().out
    assert "4-3-3: GK=GK" in out


def test_cli_scores_inline_cards(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    squad = _write_squad(
        tmp_path / "squad.json",
        {
            "ST": {"player_id": "h", "name": "Hero", "position": "ST", "club": "HERO", "league_id": 4},
            "LCB": {"player_id": "c", "name": "Back", "position": "CB", "league_id": 4},
            "GK": None,
        },
    )
    output = tmp_path / "result.json"

    main(["chemistry", str(squad), "--trace", "--output", str(output)])

    out = capsys.readouterr().out
    assert "Team chemistry: 4/33" in out
    assert "Heroes: h" in out
    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["per_player_chem"] == {"h": 3, "c": 1}


def test_cli_resolves_cards_from_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    cards = tmp_path / "cards.csv"
    cards.write_text(
        "card_id,name,position,club_id\n1,Keeper,GK,7\n2,Back,CB,7\n",
        encoding="utf-8",
    )
    squad = _write_squad(tmp_path / "squad.json", {"GK": 1, "LCB": "2"})
    profile = tmp_path / "profile.json"

    main(["chemistry", str(squad), "--cards", str(cards), "--save-profile", str(profile)])

    out = capsys.readouterr().out
    assert "Loaded 2 cards" in out
    assert "Team chemistry: 2/33" in out
    assert json.loads(profile.read_text(encoding="utf-8")) == {"cards_mapping": {}}


def test_cli_rejects_duplicates(tmp_path: Path):
    card = {"player_id": "d", "position": "CB"}
    squad = _write_squad(tmp_path / "squad.json", {"LCB": card, "RCB": card})
    with pytest.raises(SystemExit):
        main(["chemistry", str(squad)])


def test_cli_unknown_formation(tmp_path: Path):
    squad = _write_squad(tmp_path / "squad.json", {}, formation="2-2-2")
    with pytest.raises(SystemExit):
        main(["chemistry", str(squad)])


def test_cli_missing_card_reference_dict_exits(tmp_path: Path):
    cards = tmp_path / "cards.csv"
    cards.write_text("card_id,name,position\n1,Keeper,GK\n", encoding="utf-8")
    squad = _write_squad(tmp_path / "squad.json", {"GK": {"card_id": 999}})

    with pytest.raises(SystemExit) as excinfo:
        main(["chemistry", str(squad), "--cards", str(cards)])
    assert "999" in str(excinfo.value)
    assert "not found" in str(excinfo.value)


def test_cli_resolves_card_reference_dict(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    cards = tmp_path / "cards.csv"
    cards.write_text("card_id,name,position\n1,Keeper,GK\n", encoding="utf-8")
    squad = _write_squad(tmp_path / "squad.json", {"GK": {"card_id": 1}})

    main(["chemistry", str(squad), "--cards", str(cards)])

    assert "Keeper: 0" in capsys.readouterr().out
