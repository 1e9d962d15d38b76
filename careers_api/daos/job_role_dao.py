from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from careers_api.models.base import to_object_id
from careers_api.models.job_role import Band, Capability, JobRole, JobRoleStatus


def _to_capability(doc: dict) -> Capability:
    return Capability(capability_id=str(doc["_id"]), capability_name=doc["capability_name"])


def _to_band(doc: dict) -> Band:
    return Band(band_id=str(doc["_id"]), band_name=doc["band_name"])


def _to_status(doc: dict) -> JobRoleStatus:
    return JobRoleStatus(status_id=str(doc["_id"]), status_name=doc["status_name"])


class JobRoleDao:
    """Job roles plus the capability/band/status reference collections.

    Job role documents keep their references as string ids; reads resolve
    them into the nested ``capability``, ``band`` and ``status`` values.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    # ===========================
    # REFERENCE DATA
    # ===========================

    async def get_all_capabilities(self) -> List[Capability]:
        docs = await self.db.capabilities.find().sort("capability_name", 1).to_list(None)
        return [_to_capability(doc) for doc in docs]

    async def get_all_bands(self) -> List[Band]:
        docs = await self.db.bands.find().sort("band_name", 1).to_list(None)
        return [_to_band(doc) for doc in docs]

    async def get_all_statuses(self) -> List[JobRoleStatus]:
        docs = await self.db.statuses.find().sort("status_name", 1).to_list(None)
        return [_to_status(doc) for doc in docs]

    async def find_status_by_name(self, status_name: str) -> Optional[JobRoleStatus]:
        doc = await self.db.statuses.find_one({"status_name": status_name})
        return _to_status(doc) if doc else None

    async def references_exist(
        self,
        capability_id: Optional[str] = None,
        band_id: Optional[str] = None,
        status_id: Optional[str] = None,
    ) -> bool:
        """True when every id that was given points at an existing document."""
        checks = [
            (self.db.capabilities, capability_id),
            (self.db.bands, band_id),
            (self.db.statuses, status_id),
        ]
        for collection, ref_id in checks:
            if ref_id is None:
                continue
            oid = to_object_id(ref_id)
            if oid is None or await collection.count_documents({"_id": oid}, limit=1) == 0:
                return False
        return True

    # ===========================
    # JOB ROLES
    # ===========================

    async def _lookups(self):
        capabilities = {c.capability_id: c for c in await self.get_all_capabilities()}
        bands = {b.band_id: b for b in await self.get_all_bands()}
        statuses = {s.status_id: s for s in await self.get_all_statuses()}
        return capabilities, bands, statuses

    @staticmethod
    def _to_job_role(
        doc: dict,
        capabilities: Dict[str, Capability],
        bands: Dict[str, Band],
        statuses: Dict[str, JobRoleStatus],
    ) -> JobRole:
        fields = {k: v for k, v in doc.items() if k != "_id"}
        return JobRole(
            job_role_id=str(doc["_id"]),
            capability=capabilities.get(doc["capability_id"]),
            band=bands.get(doc["band_id"]),
            status=statuses.get(doc["status_id"]),
            **fields,
        )

    async def get_job_roles(self, status_id: Optional[str] = None) -> List[JobRole]:
        query = {"status_id": status_id} if status_id else {}
        docs = await self.db.job_roles.find(query).sort("closing_date", 1).to_list(None)
        lookups = await self._lookups()
        return [self._to_job_role(doc, *lookups) for doc in docs]

    async def get_job_role_by_id(self, job_role_id: str) -> Optional[JobRole]:
        oid = to_object_id(job_role_id)
        if oid is None:
            return None
        doc = await self.db.job_roles.find_one({"_id": oid})
        if not doc:
            return None
        return self._to_job_role(doc, *await self._lookups())

    async def create_job_role(self, fields: dict) -> JobRole:
        doc = dict(fields)
        result = await self.db.job_roles.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._to_job_role(doc, *await self._lookups())

    async def update_job_role(self, job_role_id: str, fields: dict) -> Optional[JobRole]:
        oid = to_object_id(job_role_id)
        if oid is None:
            return None
        doc = await self.db.job_roles.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._to_job_role(doc, *await self._lookups())

    async def delete_job_role(self, job_role_id: str) -> Optional[JobRole]:
        oid = to_object_id(job_role_id)
        if oid is None:
            return None
        doc = await self.db.job_roles.find_one_and_delete({"_id": oid})
        if not doc:
            return None
        return self._to_job_role(doc, *await self._lookups())
