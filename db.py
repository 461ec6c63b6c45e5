from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import Settings
from exceptions import ConfigurationError


def create_client(settings: Settings) -> AsyncIOMotorClient:
    if not settings.mongodb_uri:
        raise ConfigurationError("MONGODB_URI is not set")
    # tz_aware so stored datetimes come back as UTC
    return AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.database_name]
