from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from billiards.api.history import router as history_router
from billiards.api.players import router as players_router
from billiards.api.rounds import router as rounds_router
from billiards.api.settings import router as settings_router
from billiards.api.state import router as state_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Billiards Ledger API")
app.include_router(state_router)
app.include_router(players_router)
app.include_router(settings_router)
app.include_router(rounds_router)
app.include_router(history_router)
