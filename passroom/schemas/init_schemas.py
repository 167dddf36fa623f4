from passroom.app_config import AppEnvironConfig, get_app_environ_config
from passroom.schemas.init import init_beanie_odm
from passroom.shared.storage.mongo import get_mongo_client


async def init_schema(cfg: AppEnvironConfig | None = None):
    cfg = cfg or get_app_environ_config()
    mongo_client = get_mongo_client(cfg.MONGO_URL)
    await init_beanie_odm(mongo_client[cfg.MONGO_DB_NAME])


if __name__ == "__main__":
    import asyncio

    asyncio.run(init_schema())
