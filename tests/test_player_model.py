import pytest
from pydantic import ValidationError

from squadchem.models import PlayerRecord


def test_player_record_is_frozen():
    record = PlayerRecord(player_id="p1", name="Test Player", position="CB", alt_positions="RB/LB")

    assert record.native_positions == ["CB", "RB", "LB"]
    assert record.card_type == "normal"
    assert not record.is_special

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[attr-defined]


def test_player_record_requires_id():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="", name="Nobody")


def test_player_record_rejects_unknown_card_type():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="p1", card_type="legend")


def test_card_type_flags():
    icon = PlayerRecord(player_id="i1", card_type="icon")
    hero = PlayerRecord(player_id="h1", card_type="hero")
    assert icon.is_icon and icon.is_special and not icon.is_hero
    assert hero.is_hero and hero.is_special and not hero.is_icon


def test_explicit_positions_win():
    record = PlayerRecord(player_id="p1", position="GK", positions=["Striker", "CF"])
    assert record.native_positions == ["ST", "CF"]
