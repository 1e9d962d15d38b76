from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from careers_api.errors import DuplicateEmailError
from careers_api.models.user import NewUser, User


def _to_user(doc: dict) -> User:
    return User(
        user_id=str(doc["_id"]),
        email=doc["email"],
        first_name=doc["first_name"],
        second_name=doc["second_name"],
        password=doc["password"],
        role=doc.get("role", "user"),
        created_at=doc["created_at"],
    )


class UserDao:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.users

    async def find_user_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email})
        return _to_user(doc) if doc else None

    async def create_user(self, user: NewUser) -> User:
        doc = user.model_dump()
        doc["created_at"] = datetime.now(timezone.utc)
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with another registration for the same email
            raise DuplicateEmailError()
        doc["_id"] = result.inserted_id
        return _to_user(doc)
