from __future__ import annotations

from fastapi import APIRouter, Depends

from billiards.api.errors import domain_error
from billiards.api.schemas import (
    BonusBallsRequest,
    ErrorEnvelope,
    KnockInsAdjustRequest,
    KnockInsRequest,
    MembershipRequest,
    PlayerResponse,
    RoundResponse,
    RoundTeamResponse,
    ScoreResponse,
    SettlementRecordResponse,
    SettlementResponse,
    TeamResponse,
)
from billiards.domain import DomainValidationError, Team
from billiards.runtime import get_service
from billiards.service import BilliardsService

router = APIRouter(prefix="/round", tags=["round"])


def player_names(service: BilliardsService) -> dict[str, str]:
    return {player.id: player.name for player in service.players}


def build_round_response(service: BilliardsService) -> RoundResponse:
    names = player_names(service)
    state = service.round_state()

    def _team(team: Team) -> RoundTeamResponse:
        current = state[team]
        return RoundTeamResponse(
            team=TeamResponse.from_domain(current.selection, names),
            score=ScoreResponse.from_domain(current.score, current.projected_earnings),
            selectable_player_ids=list(current.selectable_player_ids),
        )

    return RoundResponse(team_a=_team(Team.A), team_b=_team(Team.B))


@router.get("", response_model=RoundResponse, summary="Teams and scores of the round in progress")
def get_round(service: BilliardsService = Depends(get_service)) -> RoundResponse:
    return build_round_response(service)


@router.post(
    "/teams/{team}/members",
    response_model=RoundResponse,
    summary="Toggle a player in or out of a team",
    responses={404: {"model": ErrorEnvelope}},
)
def toggle_member(
    team: Team,
    payload: MembershipRequest,
    service: BilliardsService = Depends(get_service),
) -> RoundResponse:
    try:
        service.toggle_membership(payload.player_id, team)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return build_round_response(service)


@router.post("/teams/{team}/winner", response_model=RoundResponse, summary="Mark a team as main winner")
def set_winner(team: Team, service: BilliardsService = Depends(get_service)) -> RoundResponse:
    service.set_main_winner(team)
    return build_round_response(service)


@router.put(
    "/teams/{team}/bonus-balls",
    response_model=RoundResponse,
    summary="Set bonus balls sunk",
    responses={400: {"model": ErrorEnvelope}},
)
def set_bonus_balls(
    team: Team,
    payload: BonusBallsRequest,
    service: BilliardsService = Depends(get_service),
) -> RoundResponse:
    try:
        service.set_bonus_balls(team, payload.count)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return build_round_response(service)


@router.put("/teams/{team}/knock-ins", response_model=RoundResponse, summary="Set opponent balls knocked in")
def set_knock_ins(
    team: Team,
    payload: KnockInsRequest,
    service: BilliardsService = Depends(get_service),
) -> RoundResponse:
    service.set_knock_ins(team, payload.count)
    return build_round_response(service)


@router.post(
    "/teams/{team}/knock-ins/adjust",
    response_model=RoundResponse,
    summary="Step opponent balls knocked in up or down",
)
def adjust_knock_ins(
    team: Team,
    payload: KnockInsAdjustRequest,
    service: BilliardsService = Depends(get_service),
) -> RoundResponse:
    service.adjust_knock_ins(team, payload.delta)
    return build_round_response(service)


@router.post(
    "/settle",
    response_model=SettlementResponse,
    summary="Settle the round",
    responses={400: {"model": ErrorEnvelope}},
)
def settle(service: BilliardsService = Depends(get_service)) -> SettlementResponse:
    try:
        result = service.submit_round()
    except DomainValidationError as exc:
        raise domain_error(exc, code="round_rejected") from exc

    return SettlementResponse(
        earnings_a=result.earnings_a,
        earnings_b=result.earnings_b,
        record=SettlementRecordResponse.from_domain(result.record, player_names(service)),
        players=[PlayerResponse.from_domain(player) for player in result.players],
    )
