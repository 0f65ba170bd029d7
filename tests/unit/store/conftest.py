"""Shared fixtures for store unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from mdblog.store.database import init_db
from mdblog.store.sql_store import SQLStore


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine shared across sessions, with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="sql_store")
def sql_store_fixture(engine):
    return SQLStore(engine)
