import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from billiards.main import app
from billiards.runtime import get_service
from billiards.service import BilliardsService
from billiards.storage.repository import SnapshotRepository


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def repo(session_factory) -> SnapshotRepository:
    repository = SnapshotRepository(session_factory)
    repository.create_tables()
    return repository


@pytest.fixture
def service(repo: SnapshotRepository) -> BilliardsService:
    svc = BilliardsService(repo)
    svc.load()
    return svc


@pytest.fixture
def client(service: BilliardsService):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
