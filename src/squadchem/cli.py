"""Command-line interface for scoring squads."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from squadchem.chemistry import (
    ChemistryTrace,
    DuplicatePlayerError,
    UnknownSlotError,
    evaluate_squad,
)
from squadchem.config import default_formation_name, get_formation, iter_formations
from squadchem.config_loader import MappingProfile
from squadchem.ingest import classify_card_type, load_records_from_csv, record_from_payload
from squadchem.models import PlayerRecord


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute squad chemistry")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("formations", help="List available formations")

    chem = subparsers.add_parser("chemistry", help="Score a squad JSON file")
    chem.add_argument("squad", type=Path, help="Squad JSON with 'formation' and 'players'")
    chem.add_argument("--formation", default=None, help="Override the squad's formation")
    chem.add_argument("--cards", type=Path, default=None, help="Optional cards CSV to resolve card ids")
    chem.add_argument(
        "--cards-column",
        action="append",
        default=[],
        help="Mapping for cards CSV columns (e.g., player_id=Id)",
    )
    chem.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    chem.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    chem.add_argument("--trace", action="store_true", help="Print club/nation/league tallies")
    chem.add_argument("--output", type=Path, default=None, help="Optional path to write result JSON")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_card(
    value: Any,
    cards_by_id: Mapping[str, PlayerRecord],
) -> Optional[PlayerRecord]:
    if value is None:
        return None
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        card = cards_by_id.get(str(value))
        if card is None:
            raise SystemExit(f"card {value!r} not found in cards file")
        return card
    if isinstance(value, Mapping):
        if set(value) <= {"player_id", "card_id", "id"}:
            ref = value.get("player_id") or value.get("card_id") or value.get("id")
            if ref is None:
                raise SystemExit(f"Unsupported squad entry {value!r}")
            card = cards_by_id.get(str(ref))
            if card is None:
                raise SystemExit(f"card {ref!r} not found in cards file")
            return card
        if "player_id" not in value:
            try:
                return record_from_payload(value)
            except ValueError as exc:
                raise SystemExit(str(exc)) from exc
        data = dict(value)
        is_icon = data.pop("is_icon", None)
        is_hero = data.pop("is_hero", None)
        if not data.get("card_type"):
            data["card_type"] = classify_card_type(
                data.get("club"), data.get("league"), is_icon=is_icon, is_hero=is_hero
            )
        try:
            return PlayerRecord.model_validate(data)
        except ValidationError as exc:
            raise SystemExit(f"Invalid card {value.get('player_id')!r}: {exc}") from exc
    raise SystemExit(f"Unsupported squad entry {value!r}")


def _print_trace(trace: ChemistryTrace) -> None:
    for label, tally in (("Clubs", trace.clubs), ("Nations", trace.nations), ("Leagues", trace.leagues)):
        print(f"{label}:")
        for key, count in sorted(tally.items(), key=lambda item: (-item[1], item[0])):
            print(f"  {key}: {count}")
    print(f"All-leagues bonus: {trace.all_leagues}")
    print(f"Icons: {', '.join(trace.icons) or '-'}")
    print(f"Heroes: {', '.join(trace.heroes) or '-'}")


def _list_formations() -> None:
    for formation in iter_formations():
        print(f"{formation.name}: {' '.join(f'{slot.key}={slot.pos}' for slot in formation.slots)}")


def _score_squad(args: argparse.Namespace) -> None:
    cards_mapping = _parse_mapping(args.cards_column)
    if args.load_profile:
        profile = MappingProfile.load(args.load_profile)
        cards_mapping = profile.cards_mapping | cards_mapping

    cards_by_id: Dict[str, PlayerRecord] = {}
    if args.cards:
        records = load_records_from_csv(args.cards, mapping=cards_mapping or None)
        cards_by_id = {record.player_id: record for record in records}
        print(f"Loaded {len(cards_by_id)} cards from {args.cards}")
    if args.save_profile:
        MappingProfile(cards_mapping).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    try:
        squad = json.loads(args.squad.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid squad JSON: {exc}") from exc

    formation_name = args.formation or squad.get("formation") or default_formation_name()
    try:
        formation = get_formation(formation_name)
    except KeyError as exc:
        raise SystemExit(f"Unknown formation {formation_name!r}") from exc

    assignment = {
        slot_key: _resolve_card(value, cards_by_id)
        for slot_key, value in (squad.get("players") or {}).items()
    }

    traces: list[ChemistryTrace] = []
    try:
        evaluation = evaluate_squad(formation, assignment, observer=traces.append)
    except (DuplicatePlayerError, UnknownSlotError) as exc:
        raise SystemExit(str(exc)) from exc

    rows = {row.slot: row for row in traces[0].rows}
    print(f"Formation {formation.name}")
    for slot in formation.slots:
        row = rows.get(slot.key)
        if row is None:
            print(f"  {slot.key:<5} {slot.pos:<4} -")
            continue
        marker = "" if row.in_position else " (out of position)"
        print(f"  {slot.key:<5} {slot.pos:<4} {row.name or row.player_id}: {row.chem}{marker}")
    print(f"Team chemistry: {evaluation.team_chem}/33")

    if args.trace:
        _print_trace(traces[0])

    if args.output:
        payload = {
            "formation": formation.name,
            "team_chem": evaluation.team_chem,
            "per_player_chem": evaluation.per_player_chem,
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote chemistry report to {args.output}")


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "formations":
        _list_formations()
    else:
        _score_squad(args)


if __name__ == "__main__":
    main()
