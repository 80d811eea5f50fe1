"""Lightweight REST client for the squadchem API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_squad(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid squad JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the squadchem REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("squad", type=Path, nargs="?", help="Squad JSON with 'formation' and 'players'")
    parser.add_argument("--formation", default=None, help="Override the squad's formation")
    parser.add_argument("--trace", action="store_true", help="Request the tally breakdown")
    parser.add_argument("--list-formations", action="store_true", help="List formations and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_formations:
            resp = client.get("/formations")
            resp.raise_for_status()
            for formation in resp.json():
                print(formation["name"])
            return

        if args.squad is None:
            raise SystemExit("squad file is required unless using --list-formations")

        squad = load_squad(args.squad)
        payload = {
            "formation": args.formation or squad.get("formation"),
            "players": squad.get("players", {}),
            "trace": args.trace,
        }
        resp = client.post("/chemistry", json=payload)
        if resp.status_code in (400, 404):
            raise SystemExit(resp.json().get("detail", resp.text))
        resp.raise_for_status()
        result = resp.json()
        for slot in result["slots"]:
            chem = "-" if slot["chem"] is None else slot["chem"]
            print(f"{slot['key']:<5} {slot['pos']:<4} {slot.get('name') or ''} {chem}")
        print(f"Team chemistry: {result['team_chem']}/33")
        if args.trace and result.get("trace"):
            print(json.dumps(result["trace"], indent=2))


if __name__ == "__main__":
    main()
