"""
Shared fixtures: a file-backed SQLite database per test and a seeded Faker.
"""

import pytest
import pytest_asyncio
from faker import Faker

from airline_seed.database.config import DatabaseConfig
from airline_seed.database.repository import SeedRepository


@pytest.fixture
def database_url(tmp_path):
    """URL of an empty SQLite database file for this test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'seed_test.db'}"


@pytest_asyncio.fixture
async def db_config(database_url):
    """Initialized database configuration with all tables created."""
    config = DatabaseConfig(database_url=database_url)
    await config.initialize()
    await config.create_tables()
    yield config
    await config.drop_tables()
    await config.close()


@pytest_asyncio.fixture
async def repository(db_config):
    return SeedRepository(db_config)


@pytest.fixture
def fake():
    """Faker seeded for reproducible test data."""
    generator = Faker()
    generator.seed_instance(1337)
    return generator
