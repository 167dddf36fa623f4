"""Beanie initialization for ODM."""

from beanie import init_beanie
from pymongo.asynchronous.database import AsyncDatabase

from passroom.schemas.channel import Channel
from passroom.schemas.user import Token, User

DOCUMENT_MODELS = [
    Channel,
    User,
    Token,
]


async def init_beanie_odm(database: AsyncDatabase) -> None:
    """Initialize Beanie ODM with all document models and create their indexes."""
    await init_beanie(
        database=database,
        document_models=DOCUMENT_MODELS,
    )


__all__ = ["DOCUMENT_MODELS", "init_beanie_odm"]
