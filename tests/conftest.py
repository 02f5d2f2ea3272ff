from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from truckload.crud.shipment_store import InMemoryShipmentStore, SqlShipmentStore
from truckload.db.base import Base
from truckload.db.session import build_session_factory
from truckload.main import create_app

# Ensure all models are registered with SQLAlchemy metadata
import truckload.models  # noqa: F401


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture(scope="function")
def sql_store(engine):
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    return SqlShipmentStore(build_session_factory(engine))


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryShipmentStore()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture(scope="function")
def client(memory_store):
    with TestClient(create_app(store=memory_store)) as test_client:
        yield test_client
