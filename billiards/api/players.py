from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from billiards.api.errors import domain_error
from billiards.api.schemas import ErrorEnvelope, PlayerCreateRequest, PlayerResponse
from billiards.domain import DomainValidationError
from billiards.runtime import get_service
from billiards.service import BilliardsService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=list[PlayerResponse], summary="List the roster")
def list_players(service: BilliardsService = Depends(get_service)) -> list[PlayerResponse]:
    return [PlayerResponse.from_domain(player) for player in service.players]


@router.post(
    "",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a player",
    responses={400: {"model": ErrorEnvelope}},
)
def add_player(payload: PlayerCreateRequest, service: BilliardsService = Depends(get_service)) -> PlayerResponse:
    try:
        player = service.add_player(payload.name)
    except DomainValidationError as exc:
        raise domain_error(exc, code="invalid_player_name") from exc
    return PlayerResponse.from_domain(player)


@router.delete(
    "/{player_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a player; settled history keeps the id",
    responses={404: {"model": ErrorEnvelope}},
)
def delete_player(player_id: str, service: BilliardsService = Depends(get_service)) -> Response:
    try:
        service.delete_player(player_id)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
