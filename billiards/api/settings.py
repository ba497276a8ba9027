from __future__ import annotations

from fastapi import APIRouter, Depends

from billiards.api.schemas import ConfigResponse, ConfigUpdateRequest
from billiards.runtime import get_service
from billiards.service import BilliardsService

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=ConfigResponse, summary="Current prize rule set")
def get_config(service: BilliardsService = Depends(get_service)) -> ConfigResponse:
    return ConfigResponse.from_domain(service.config)


@router.put("", response_model=ConfigResponse, summary="Update prize rule set")
def update_config(payload: ConfigUpdateRequest, service: BilliardsService = Depends(get_service)) -> ConfigResponse:
    rules = service.update_config(**payload.model_dump(exclude_none=True))
    return ConfigResponse.from_domain(rules)
