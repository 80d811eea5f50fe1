"""REST API for the squad chemistry engine."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException

from squadchem.api.schemas import (
    CardPayload,
    ChemistryRequest,
    ChemistryResponse,
    ChemistryTraceResponse,
    FormationResponse,
    NormalizeRequest,
    NormalizeResponse,
    SlotChemistryResponse,
    SlotResponse,
)
from squadchem.chemistry import (
    ChemistryTrace,
    DuplicatePlayerError,
    UnknownSlotError,
    evaluate_squad,
)
from squadchem.config import Formation, default_formation_name, get_formation, iter_formations
from squadchem.ingest import classify_card_type
from squadchem.models import PlayerRecord
from squadchem.positions import eligible_slot_positions, is_valid_for_slot, player_positions


logger = logging.getLogger(__name__)


def _formation_to_response(formation: Formation) -> FormationResponse:
    return FormationResponse(
        name=formation.name,
        slots=[SlotResponse(key=slot.key, pos=slot.pos) for slot in formation.slots],
    )


def _card_to_record(card: CardPayload) -> PlayerRecord:
    card_type = card.card_type or classify_card_type(
        card.club,
        card.league,
        is_icon=card.is_icon,
        is_hero=card.is_hero,
    )
    return PlayerRecord(
        player_id=card.player_id,
        name=card.name,
        position=card.position,
        alt_positions=card.alt_positions,
        positions=card.positions,
        club=card.club,
        club_id=card.club_id,
        nation=card.nation,
        nation_id=card.nation_id,
        league=card.league,
        league_id=card.league_id,
        card_type=card_type,
        rating=card.rating,
    )


def _trace_to_response(trace: ChemistryTrace) -> ChemistryTraceResponse:
    return ChemistryTraceResponse.model_validate(asdict(trace))


def create_app() -> FastAPI:
    app = FastAPI(title="squadchem")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formations", response_model=List[FormationResponse])
    async def list_formations() -> List[FormationResponse]:
        return [_formation_to_response(formation) for formation in iter_formations()]

    @app.get("/formations/{name}", response_model=FormationResponse)
    async def formation_detail(name: str) -> FormationResponse:
        try:
            formation = get_formation(name)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"formation {name!r} not found") from exc
        return _formation_to_response(formation)

    @app.post("/positions/normalize", response_model=NormalizeResponse)
    async def normalize(request: NormalizeRequest) -> NormalizeResponse:
        positions = player_positions(request.position, request.alt_positions)
        return NormalizeResponse(positions=positions, eligible_slots=eligible_slot_positions(positions))

    @app.post("/chemistry", response_model=ChemistryResponse)
    async def chemistry(request: ChemistryRequest) -> ChemistryResponse:
        formation_name = request.formation or default_formation_name()
        try:
            formation = get_formation(formation_name)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"formation {formation_name!r} not found") from exc

        assignment: Dict[str, Optional[PlayerRecord]] = {
            slot_key: _card_to_record(card) if card is not None else None
            for slot_key, card in request.players.items()
        }

        traces: List[ChemistryTrace] = []
        try:
            evaluation = evaluate_squad(
                formation,
                assignment,
                observer=traces.append if request.trace else None,
            )
        except (DuplicatePlayerError, UnknownSlotError) as exc:
            logger.info("Rejected squad for %s: %s", formation.name, exc)
            raise HTTPException(status_code=400, detail=str(exc).strip("'\"")) from exc

        slots: List[SlotChemistryResponse] = []
        for slot in formation.slots:
            player = assignment.get(slot.key)
            if player is None:
                slots.append(SlotChemistryResponse(key=slot.key, pos=slot.pos))
                continue
            slots.append(
                SlotChemistryResponse(
                    key=slot.key,
                    pos=slot.pos,
                    player_id=player.player_id,
                    name=player.name,
                    in_position=is_valid_for_slot(slot.pos, player.native_positions),
                    chem=evaluation.per_player_chem.get(player.player_id, 0),
                )
            )

        return ChemistryResponse(
            formation=formation.name,
            team_chem=evaluation.team_chem,
            per_player_chem=evaluation.per_player_chem,
            slots=slots,
            trace=_trace_to_response(traces[0]) if traces else None,
        )

    return app


__all__ = ["create_app"]
