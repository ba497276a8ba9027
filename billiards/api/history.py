from __future__ import annotations

from fastapi import APIRouter, Depends

from billiards.api.rounds import player_names
from billiards.api.schemas import LedgerEntryResponse, SettlementRecordResponse
from billiards.runtime import get_service
from billiards.service import BilliardsService

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=list[SettlementRecordResponse], summary="Settled rounds, most recent first")
def list_history(service: BilliardsService = Depends(get_service)) -> list[SettlementRecordResponse]:
    names = player_names(service)
    return [SettlementRecordResponse.from_domain(record, names) for record in service.history]


@router.get(
    "/ledger",
    response_model=list[LedgerEntryResponse],
    summary="Stored running totals next to totals replayed from history",
)
def ledger(service: BilliardsService = Depends(get_service)) -> list[LedgerEntryResponse]:
    return [LedgerEntryResponse(**entry) for entry in service.ledger_report()]
