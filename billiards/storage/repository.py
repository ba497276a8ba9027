from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from billiards.domain import Snapshot, decode_snapshot, encode_snapshot
from billiards.storage.database import Base
from billiards.storage.models import SnapshotRecord

logger = logging.getLogger(__name__)

STORAGE_KEY = "billiards_game_data"


class SnapshotRepository:
    """Key-value store holding the full game snapshot under a single key.

    Every write replaces the whole document; there is no delta persistence.
    """

    def __init__(self, session_factory: sessionmaker[Session], key: str = STORAGE_KEY) -> None:
        self._session_factory = session_factory
        self.key = key

    def create_tables(self) -> None:
        with self._session_factory() as db:
            Base.metadata.create_all(bind=db.get_bind())

    def load_raw(self) -> str | None:
        with self._session_factory() as db:
            row = db.get(SnapshotRecord, self.key)
            return row.payload if row is not None else None

    def save_raw(self, payload: str) -> None:
        with self._session_factory() as db:
            row = db.get(SnapshotRecord, self.key)
            if row is None:
                db.add(SnapshotRecord(key=self.key, payload=payload))
            else:
                row.payload = payload
            db.commit()

    def clear(self) -> None:
        with self._session_factory() as db:
            db.query(SnapshotRecord).filter(SnapshotRecord.key == self.key).delete(synchronize_session=False)
            db.commit()

    def load(self) -> Snapshot:
        try:
            raw = self.load_raw()
        except SQLAlchemyError as exc:
            logger.warning("could not read stored snapshot, starting empty: %s", exc)
            return Snapshot()
        return decode_snapshot(raw)

    def save(self, snapshot: Snapshot) -> None:
        self.save_raw(encode_snapshot(snapshot))
        logger.debug(
            "snapshot saved: %d players, %d records", len(snapshot.players), len(snapshot.history)
        )
