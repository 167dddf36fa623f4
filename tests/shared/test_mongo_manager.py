"""Tests for the MongoDB client manager."""

from passroom.shared.storage.mongo import MongoManager, close_mongo_clients, get_mongo_client


class TestMongoManager:
    def test_singleton(self):
        assert MongoManager() is MongoManager()

    async def test_one_client_per_url(self):
        # Clients connect lazily, so no server is needed here
        first = get_mongo_client("mongodb://localhost:27017")
        again = get_mongo_client("mongodb://localhost:27017")
        other = get_mongo_client("mongodb://localhost:27018")

        assert first is again
        assert first is not other

        await close_mongo_clients()

        assert get_mongo_client("mongodb://localhost:27017") is not first
        await close_mongo_clients()
