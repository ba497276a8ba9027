from __future__ import annotations

from billiards.service import BilliardsService
from billiards.storage.database import SessionLocal
from billiards.storage.repository import SnapshotRepository

repo = SnapshotRepository(SessionLocal)
repo.create_tables()
service = BilliardsService(repo)
service.load()


def get_service() -> BilliardsService:
    return service
