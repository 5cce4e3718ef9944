import asyncio
from pathlib import Path

import pytest

from config.config_loader import ConfigLoader
from connection.engine_factory import EngineFactory
from interceptor.query_stub import QueryStub

CONFIG_PATH = Path(__file__).resolve().parent / "config" / "interceptor_config.yaml"


@pytest.fixture
def db():
    """Fresh in-memory database with the configured repositories and an empty users table."""
    database = EngineFactory(ConfigLoader(str(CONFIG_PATH))).create_database()
    asyncio.run(database.users.create_table())
    yield database
    database.dispose()


@pytest.fixture
def stub(db):
    return QueryStub(db)
