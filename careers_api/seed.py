"""
Seed reference data and two login accounts.

    python -m careers_api.seed

Both accounts get the password ``Password123!``.

Every insert is an upsert keyed on name or email, so running it twice is
harmless.
"""

import asyncio
import logging
from datetime import datetime, timezone

from careers_api.config import get_settings
from careers_api.database import close_mongo_connection, connect_to_mongo, ensure_indexes
from careers_api.utils.security import get_password_hash

logger = logging.getLogger(__name__)

CAPABILITIES = [
    "Engineering",
    "Engineering Strategy and Planning",
    "Architecture",
    "Testing and Quality Assurance",
    "Product Specialist",
    "Low Code Engineering",
]

BANDS = [
    "Apprentice",
    "Trainee",
    "Associate",
    "Senior Associate",
    "Consultant",
    "Manager",
    "Principal",
    "Leadership Community",
]

STATUSES = ["Open", "Closed", "In Progress"]

SEED_PASSWORD = "Password123!"

USERS = [
    {"email": "admin@example.com", "first_name": "Admin", "second_name": "User", "role": "admin"},
    {"email": "user@example.com", "first_name": "Test", "second_name": "User", "role": "user"},
]


async def upsert_names(collection, field: str, names) -> None:
    for name in names:
        await collection.update_one({field: name}, {"$setOnInsert": {field: name}}, upsert=True)
    logger.info("Seeded %d %s", len(names), collection.name)


async def seed(db) -> None:
    await upsert_names(db.capabilities, "capability_name", CAPABILITIES)
    await upsert_names(db.bands, "band_name", BANDS)
    await upsert_names(db.statuses, "status_name", STATUSES)

    hashed_password = get_password_hash(SEED_PASSWORD)
    for user in USERS:
        await db.users.update_one(
            {"email": user["email"]},
            {"$setOnInsert": {**user, "password": hashed_password, "created_at": datetime.now(timezone.utc)}},
            upsert=True,
        )
    logger.info("Seeded users %s", ", ".join(u["email"] for u in USERS))


async def main() -> None:
    settings = get_settings()
    client = await connect_to_mongo(settings)
    try:
        db = client[settings.database_name]
        await ensure_indexes(db)
        await seed(db)
    finally:
        await close_mongo_connection(client)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(main())
