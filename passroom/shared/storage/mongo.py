"""
Simple MongoDB client manager that creates and tracks async clients by URL.
"""

import threading

from loguru import logger
from pymongo import AsyncMongoClient


class MongoManager:
    """
    Tracks one AsyncMongoClient per connection string.

    Features:
    - Lazily creates clients on first use
    - Configurable pool size and timeouts
    - Closes every tracked client on shutdown
    - Thread-safe singleton pattern
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, "_initialized"):
            return

        self._clients: dict[str, AsyncMongoClient] = {}
        self._max_pool_size: int = 5
        self._server_selection_timeout: int = 30000
        self._connect_timeout: int = 30000
        self._socket_timeout: int = 300000
        self._clients_lock = threading.Lock()
        self._initialized = True

    def get_client(self, url: str) -> AsyncMongoClient:
        with self._clients_lock:
            client = self._clients.get(url)
            if client is None:
                client = AsyncMongoClient(
                    url,
                    maxPoolSize=self._max_pool_size,
                    serverSelectionTimeoutMS=self._server_selection_timeout,
                    connectTimeoutMS=self._connect_timeout,
                    socketTimeoutMS=self._socket_timeout,
                )
                self._clients[url] = client
                logger.info("Created MongoDB client (pool size {})", self._max_pool_size)
            return client

    async def close_all(self) -> None:
        with self._clients_lock:
            clients = list(self._clients.values())
            self._clients.clear()

        for client in clients:
            await client.close()
        if clients:
            logger.info("Closed {} MongoDB client(s)", len(clients))


def get_mongo_client(url: str) -> AsyncMongoClient:
    return MongoManager().get_client(url)


async def close_mongo_clients() -> None:
    await MongoManager().close_all()
