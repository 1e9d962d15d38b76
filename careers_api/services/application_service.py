"""
Application submission: derive a storage key, upload the CV, then save the row.

The steps run strictly in that order and stop at the first failure:

1. the application id is generated up front and doubles as the storage-key
   correlation id, so the stored object and the row share one id;
2. the CV is written to object storage - if that fails nothing is saved;
3. the application row is created with status IN_PROGRESS.

A failure in step 3 leaves the uploaded object behind. It is logged with its
key and not deleted; cleaning up orphans is a separate maintenance job.
"""

import logging
from typing import List

from careers_api.errors import ApplicationNotFoundError, PersistenceFailedError, UploadFailedError
from careers_api.models.application import Application, ApplicationStatus, NewApplication
from careers_api.models.base import new_id
from careers_api.services.storage import generate_file_key
from careers_api.utils.upload import UploadCandidate

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, application_dao, storage):
        self.application_dao = application_dao
        self.storage = storage

    async def create_application(self, user_id: str, job_role_id: str, candidate: UploadCandidate) -> Application:
        application_id = new_id()
        file_key = generate_file_key(candidate.filename, application_id)

        try:
            cv_url = await self.storage.put(file_key, candidate.content, candidate.content_type)
        except Exception as exc:
            logger.exception("CV upload failed for application %s (key %s)", application_id, file_key)
            raise UploadFailedError() from exc

        new_application = NewApplication(
            application_id=application_id,
            user_id=user_id,
            job_role_id=job_role_id,
            status=ApplicationStatus.IN_PROGRESS,
            cv_url=cv_url,
        )
        try:
            application = await self.application_dao.create_application(new_application)
        except Exception as exc:
            logger.warning("Orphaned CV object left at %s: application %s was not saved", file_key, application_id)
            logger.exception("Saving application %s failed", application_id)
            raise PersistenceFailedError() from exc

        logger.info("Application %s submitted by user %s for job role %s", application_id, user_id, job_role_id)
        return application

    async def get_applications_for_user(self, user_id: str) -> List[Application]:
        return await self.application_dao.get_applications_for_user(user_id)

    async def get_applications_for_job_role(self, job_role_id: str) -> List[Application]:
        return await self.application_dao.get_applications_by_job_role_id(job_role_id)

    async def update_application_status(self, application_id: str, status: ApplicationStatus) -> Application:
        application = await self.application_dao.update_application_status(application_id, status)
        if application is None:
            raise ApplicationNotFoundError()
        logger.info("Application %s moved to %s", application_id, status.value)
        return application
