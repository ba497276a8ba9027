from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from billiards.domain import DomainValidationError
from billiards.service import PlayerNotFoundError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError, *, code: str = "validation_failed") -> HTTPException:
    if isinstance(exc, PlayerNotFoundError):
        return api_error(code="player_not_found", message=str(exc), status_code=status.HTTP_404_NOT_FOUND)
    return api_error(code=code, message=str(exc))
