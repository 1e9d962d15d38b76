from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from careers_api.models.application import Application, ApplicationStatus, NewApplication
from careers_api.models.base import to_object_id


def _to_application(doc: dict) -> Application:
    return Application(
        application_id=str(doc["_id"]),
        user_id=doc["user_id"],
        job_role_id=doc["job_role_id"],
        status=doc["status"],
        cv_url=doc["cv_url"],
        created_at=doc["created_at"],
    )


class ApplicationDao:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.applications

    async def create_application(self, application: NewApplication) -> Application:
        doc = {
            "_id": ObjectId(application.application_id),
            "user_id": application.user_id,
            "job_role_id": application.job_role_id,
            "status": application.status.value,
            "cv_url": application.cv_url,
            "created_at": datetime.now(timezone.utc),
        }
        await self.collection.insert_one(doc)
        return _to_application(doc)

    async def get_applications_for_user(self, user_id: str) -> List[Application]:
        docs = await self.collection.find({"user_id": user_id}).sort("created_at", -1).to_list(None)
        return [_to_application(doc) for doc in docs]

    async def get_applications_by_job_role_id(self, job_role_id: str) -> List[Application]:
        docs = await self.collection.find({"job_role_id": job_role_id}).sort("created_at", -1).to_list(None)
        return [_to_application(doc) for doc in docs]

    async def update_application_status(
        self, application_id: str, status: ApplicationStatus
    ) -> Optional[Application]:
        oid = to_object_id(application_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"status": status.value}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_application(doc) if doc else None
