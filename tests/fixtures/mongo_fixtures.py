"""MongoDB/Beanie fixtures for testing."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from passroom.schemas import init_beanie_odm
from passroom.schemas.init import DOCUMENT_MODELS


@pytest.fixture(scope="session")
def mongo_url() -> str:
    """
    Get MongoDB URL for testing.

    Tests that need a database are skipped when MONGO_URL_TEST is not set.
    """
    url = os.environ.get("MONGO_URL_TEST")
    if not url:
        pytest.skip("MONGO_URL_TEST environment variable not set")
    return url


@pytest.fixture(scope="session")
def test_db_name() -> str:
    """Get test database name."""
    return "passroom_test_db"


@pytest_asyncio.fixture(scope="function")
async def mongo_client(mongo_url: str) -> AsyncGenerator[AsyncMongoClient]:
    """Create MongoDB client for testing (function-scoped to avoid event loop issues)."""
    client: AsyncMongoClient = AsyncMongoClient(mongo_url)
    yield client
    await client.close()


@pytest_asyncio.fixture(scope="function")
async def beanie_db(
    mongo_client: AsyncMongoClient,
    test_db_name: str,
) -> AsyncGenerator[AsyncDatabase]:
    """
    Initialize Beanie with the test database.

    Each test function gets a fresh Beanie init. Use the clear_collections
    fixture to clean data between tests.
    """
    db = mongo_client[test_db_name]

    await init_beanie_odm(db)

    yield db


@pytest_asyncio.fixture(autouse=False)
async def clear_collections(beanie_db: AsyncDatabase) -> None:
    """
    Clear all collections before each test.

    Usage:
        @pytest.mark.usefixtures("clear_collections")
        async def test_something(beanie_db):
            ...
    """
    for model in DOCUMENT_MODELS:
        await model.get_pymongo_collection().delete_many({})
