from __future__ import annotations

from fastapi import APIRouter, Depends

from billiards.api.rounds import build_round_response, player_names
from billiards.api.schemas import ConfigResponse, PlayerResponse, SettlementRecordResponse, StateResponse
from billiards.runtime import get_service
from billiards.service import BilliardsService

router = APIRouter(tags=["state"])


def build_state_response(service: BilliardsService) -> StateResponse:
    names = player_names(service)
    return StateResponse(
        players=[PlayerResponse.from_domain(player) for player in service.players],
        history=[SettlementRecordResponse.from_domain(record, names) for record in service.history],
        config=ConfigResponse.from_domain(service.config),
        round=build_round_response(service),
    )


@router.get("/state", response_model=StateResponse, summary="Everything the client needs to render")
def get_state(service: BilliardsService = Depends(get_service)) -> StateResponse:
    return build_state_response(service)


@router.post("/reset", response_model=StateResponse, summary="Erase all players and history")
def reset(service: BilliardsService = Depends(get_service)) -> StateResponse:
    service.reset_all()
    return build_state_response(service)
