"""
FastAPI providers that build services from the clients held on ``app.state``.

Tests swap any of these out through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from careers_api.config import Settings, get_settings
from careers_api.daos.application_dao import ApplicationDao
from careers_api.daos.job_role_dao import JobRoleDao
from careers_api.daos.user_dao import UserDao
from careers_api.database import get_db
from careers_api.services.application_service import ApplicationService
from careers_api.services.auth_service import AuthService
from careers_api.services.job_role_service import JobRoleService
from careers_api.utils.upload import UploadPolicy


def get_storage(request: Request):
    return request.app.state.storage


def get_upload_policy(settings: Settings = Depends(get_settings)) -> UploadPolicy:
    return UploadPolicy.from_settings(settings)


def get_application_service(db=Depends(get_db), storage=Depends(get_storage)) -> ApplicationService:
    return ApplicationService(ApplicationDao(db), storage)


def get_auth_service(db=Depends(get_db), settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(UserDao(db), settings)


def get_job_role_service(db=Depends(get_db)) -> JobRoleService:
    return JobRoleService(JobRoleDao(db))
