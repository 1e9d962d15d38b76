import logging
from datetime import date
from typing import List, Optional

from careers_api.errors import InvalidReferenceError, JobRoleNotFoundError
from careers_api.models.job_role import Band, Capability, JobRole, JobRoleStatus
from careers_api.utils.validators import validate_job_role_create, validate_job_role_update

logger = logging.getLogger(__name__)

OPEN_STATUS = "Open"


class JobRoleService:
    def __init__(self, job_role_dao):
        self.job_role_dao = job_role_dao

    async def get_open_job_roles(self) -> List[JobRole]:
        open_status = await self.job_role_dao.find_status_by_name(OPEN_STATUS)
        if open_status is None:
            return []
        return await self.job_role_dao.get_job_roles(status_id=open_status.status_id)

    async def get_job_role_by_id(self, job_role_id: str) -> JobRole:
        job_role = await self.job_role_dao.get_job_role_by_id(job_role_id)
        if job_role is None:
            raise JobRoleNotFoundError()
        return job_role

    async def get_all_capabilities(self) -> List[Capability]:
        return await self.job_role_dao.get_all_capabilities()

    async def get_all_bands(self) -> List[Band]:
        return await self.job_role_dao.get_all_bands()

    async def get_all_statuses(self) -> List[JobRoleStatus]:
        return await self.job_role_dao.get_all_statuses()

    async def create_job_role(self, data: dict, today: Optional[date] = None) -> JobRole:
        fields = validate_job_role_create(data, today)

        open_status = await self.job_role_dao.find_status_by_name(OPEN_STATUS)
        if open_status is None:
            raise RuntimeError("Open status not found in database")
        fields["status_id"] = open_status.status_id

        if not await self.job_role_dao.references_exist(
            capability_id=fields["capability_id"], band_id=fields["band_id"]
        ):
            raise InvalidReferenceError()

        job_role = await self.job_role_dao.create_job_role(fields)
        logger.info("Created job role %s (%s)", job_role.job_role_id, job_role.role_name)
        return job_role

    async def update_job_role(self, job_role_id: str, data: dict, today: Optional[date] = None) -> JobRole:
        fields = validate_job_role_update(data, today)

        if not await self.job_role_dao.references_exist(
            capability_id=fields.get("capability_id"),
            band_id=fields.get("band_id"),
            status_id=fields.get("status_id"),
        ):
            raise InvalidReferenceError()

        job_role = await self.job_role_dao.update_job_role(job_role_id, fields)
        if job_role is None:
            raise JobRoleNotFoundError()
        logger.info("Updated job role %s: %s", job_role_id, ", ".join(sorted(fields)))
        return job_role

    async def delete_job_role(self, job_role_id: str) -> JobRole:
        job_role = await self.job_role_dao.delete_job_role(job_role_id)
        if job_role is None:
            raise JobRoleNotFoundError()
        logger.info("Deleted job role %s", job_role_id)
        return job_role
