import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from careers_api.config import Settings

logger = logging.getLogger(__name__)


async def connect_to_mongo(settings: Settings) -> AsyncIOMotorClient:
    if not settings.mongo_uri:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(settings.mongo_uri)
    await client.admin.command("ping")

    if "mongodb+srv" in settings.mongo_uri:
        logger.info("Connected to MongoDB Atlas (database %s)", settings.database_name)
    else:
        logger.warning("Connected to LOCAL MongoDB (database %s)", settings.database_name)
    return client


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes the DAOs rely on. Safe to run on every startup."""
    await db.users.create_index("email", unique=True)
    await db.capabilities.create_index("capability_name", unique=True)
    await db.bands.create_index("band_name", unique=True)
    await db.statuses.create_index("status_name", unique=True)
    await db.applications.create_index("user_id")
    await db.applications.create_index("job_role_id")


async def close_mongo_connection(client) -> None:
    if client:
        client.close()


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db
