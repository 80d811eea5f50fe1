"""Helpers to load card search rows and emit classified card records."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from squadchem.config import hero_club_tokens, icon_club_tokens, icon_league_tokens
from squadchem.models import CardType, IdentityId, PlayerRecord


logger = logging.getLogger(__name__)


class CardRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str = ""
    raw_position: Optional[str] = None
    raw_alt_positions: Optional[str] = None
    raw_club: Optional[str] = None
    raw_club_id: Optional[str] = None
    raw_nation: Optional[str] = None
    raw_nation_id: Optional[str] = None
    raw_league: Optional[str] = None
    raw_league_id: Optional[str] = None
    raw_rating: Optional[str] = None
    raw_is_icon: Optional[str] = None
    raw_is_hero: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any], mapping: Mapping[str, str]) -> "CardRow":
        def extract(spec: Optional[str | Sequence[str]]) -> Optional[str]:
            if spec is None:
                return None
            if isinstance(spec, str):
                value = row.get(spec)
                if value is None:
                    return None
                text = str(value).strip()
                return text or None
            parts = [str(row.get(col, "")).strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else None

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key)
            if spec is None:
                return None
            if "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id")),
            raw_name=extract(parse_spec("name")) or "",
            raw_position=extract(parse_spec("position")),
            raw_alt_positions=extract(parse_spec("alt_positions")),
            raw_club=extract(parse_spec("club")),
            raw_club_id=extract(parse_spec("club_id")),
            raw_nation=extract(parse_spec("nation")),
            raw_nation_id=extract(parse_spec("nation_id")),
            raw_league=extract(parse_spec("league")),
            raw_league_id=extract(parse_spec("league_id")),
            raw_rating=extract(parse_spec("rating")),
            raw_is_icon=extract(parse_spec("is_icon")),
            raw_is_hero=extract(parse_spec("is_hero")),
        )


DEFAULT_CARD_MAPPING = {
    "player_id": "card_id",
    "name": "name",
    "position": "position",
    "alt_positions": "altposition",
    "club": "club",
    "club_id": "club_id",
    "nation": "nation",
    "nation_id": "nation_id",
    "league": "league",
    "league_id": "league_id",
    "rating": "rating",
    "is_icon": "is_icon",
    "is_hero": "is_hero",
}


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "t", "yes", "y"}:
        return True
    if text in {"0", "false", "f", "no", "n"}:
        return False
    return None


def _parse_identity(raw: Optional[str]) -> Optional[IdentityId]:
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    if re.fullmatch(r"-?\d+(?:\.0+)?", text):
        return int(float(text))
    return text


def _parse_card_id(raw: Optional[str]) -> Optional[str]:
    parsed = _parse_identity(raw)
    return None if parsed is None else str(parsed)


def _parse_rating(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(float(raw))
    except ValueError:
        logger.debug("Ignoring non-numeric rating %r", raw)
        return None
    return max(0, value)


def classify_card_type(
    club: Optional[str],
    league: Optional[str],
    *,
    is_icon: Optional[bool] = None,
    is_hero: Optional[bool] = None,
) -> CardType:
    """Resolve a card's rarity tag.

    Explicit flags win. A flag left as ``None`` falls back to matching the club
    and league names against the reserved tokens the search backend uses for
    icon and hero cards.
    """

    if is_icon:
        return "icon"
    if is_hero:
        return "hero"

    club_token = (club or "").strip().upper()
    league_token = (league or "").strip().upper()
    if is_icon is None and (club_token in icon_club_tokens() or league_token in icon_league_tokens()):
        return "icon"
    if is_hero is None and club_token in hero_club_tokens():
        return "hero"
    return "normal"


def load_cards_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[CardRow]:
    mapping = mapping or DEFAULT_CARD_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [CardRow.from_mapping(row, mapping) for row in reader]
    return rows


def rows_to_records(rows: Sequence[CardRow]) -> List[PlayerRecord]:
    records: List[PlayerRecord] = []
    for index, row in enumerate(rows):
        player_id = _parse_card_id(row.raw_id) or row.raw_name
        if not player_id:
            logger.warning("Skipping card row %d without id or name", index)
            continue

        card_type = classify_card_type(
            row.raw_club,
            row.raw_league,
            is_icon=_parse_flag(row.raw_is_icon),
            is_hero=_parse_flag(row.raw_is_hero),
        )
        metadata: dict[str, object] = {}
        if row.raw_position is not None:
            metadata["raw_position"] = row.raw_position
        if row.raw_alt_positions is not None:
            metadata["raw_alt_positions"] = row.raw_alt_positions

        try:
            record = PlayerRecord(
                player_id=player_id,
                name=row.raw_name or "Unknown Player",
                position=row.raw_position,
                alt_positions=row.raw_alt_positions,
                club=row.raw_club,
                club_id=_parse_identity(row.raw_club_id),
                nation=row.raw_nation,
                nation_id=_parse_identity(row.raw_nation_id),
                league=row.raw_league,
                league_id=_parse_identity(row.raw_league_id),
                card_type=card_type,
                rating=_parse_rating(row.raw_rating),
                metadata=metadata,
            )
        except ValidationError as exc:
            logger.warning("Skipping card row %d (%s): %s", index, player_id, exc)
            continue

        if not record.native_positions:
            logger.warning("Card %s has no recognised position (%r)", player_id, row.raw_position)
        records.append(record)
    return records


def load_records_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> List[PlayerRecord]:
    return rows_to_records(load_cards_csv(path, mapping=mapping))


def record_from_payload(payload: Mapping[str, Any]) -> PlayerRecord:
    """Build a record from a search-API style dict (``card_id``, ``altposition``, ...)."""

    row = CardRow.from_mapping(payload, DEFAULT_CARD_MAPPING)
    if row.raw_id is None and payload.get("id") is not None:
        row = row.model_copy(update={"raw_id": str(payload["id"])})
    records = rows_to_records([row])
    if not records:
        raise ValueError(f"card payload has no usable id or name: {dict(payload)!r}")
    return records[0]
