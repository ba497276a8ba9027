from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from billiards.storage.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnapshotRecord(Base):
    """One row per storage key; the payload is the whole game snapshot as JSON."""

    __tablename__ = "snapshots"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
