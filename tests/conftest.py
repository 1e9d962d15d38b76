from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from careers_api.config import Settings, get_settings
from careers_api.dependencies import (
    get_application_service,
    get_auth_service,
    get_job_role_service,
)
from careers_api.errors import DuplicateEmailError
from careers_api.main import create_app
from careers_api.models.application import Application
from careers_api.models.base import new_id
from careers_api.models.job_role import Band, Capability, JobRole, JobRoleStatus
from careers_api.models.user import User
from careers_api.services.application_service import ApplicationService
from careers_api.services.auth_service import AuthService
from careers_api.services.job_role_service import JobRoleService
from careers_api.utils.auth import create_access_token


# ===========================
# FAKE COLLABORATORS
# ===========================

class FakeStorage:
    def __init__(self, error=None, base_url="https://bucket.s3.us-east-1.amazonaws.com"):
        self.error = error
        self.base_url = base_url
        self.puts = []

    async def put(self, key, data, content_type):
        self.puts.append((key, data, content_type))
        if self.error:
            raise self.error
        return f"{self.base_url}/{key}"


class FakeApplicationDao:
    def __init__(self, error=None):
        self.error = error
        self.created = []
        self.applications = {}

    async def create_application(self, application):
        self.created.append(application)
        if self.error:
            raise self.error
        saved = Application(created_at=datetime.now(timezone.utc), **application.model_dump())
        self.applications[saved.application_id] = saved
        return saved

    async def get_applications_for_user(self, user_id):
        return [a for a in self.applications.values() if a.user_id == user_id]

    async def get_applications_by_job_role_id(self, job_role_id):
        return [a for a in self.applications.values() if a.job_role_id == job_role_id]

    async def update_application_status(self, application_id, status):
        application = self.applications.get(application_id)
        if application is None:
            return None
        updated = application.model_copy(update={"status": status})
        self.applications[application_id] = updated
        return updated


class FakeUserDao:
    def __init__(self):
        self.users = {}

    async def find_user_by_email(self, email):
        return self.users.get(email)

    async def create_user(self, new_user):
        if new_user.email in self.users:
            raise DuplicateEmailError()
        user = User(user_id=new_id(), created_at=datetime.now(timezone.utc), **new_user.model_dump())
        self.users[user.email] = user
        return user


class FakeJobRoleDao:
    def __init__(self):
        self.capabilities = {}
        self.bands = {}
        self.statuses = {}
        self.job_roles = {}

    def add_capability(self, name):
        capability = Capability(capability_id=new_id(), capability_name=name)
        self.capabilities[capability.capability_id] = capability
        return capability

    def add_band(self, name):
        band = Band(band_id=new_id(), band_name=name)
        self.bands[band.band_id] = band
        return band

    def add_status(self, name):
        status = JobRoleStatus(status_id=new_id(), status_name=name)
        self.statuses[status.status_id] = status
        return status

    def _resolve(self, fields, job_role_id):
        return JobRole(
            job_role_id=job_role_id,
            capability=self.capabilities.get(fields["capability_id"]),
            band=self.bands.get(fields["band_id"]),
            status=self.statuses.get(fields["status_id"]),
            **fields,
        )

    async def get_all_capabilities(self):
        return sorted(self.capabilities.values(), key=lambda c: c.capability_name)

    async def get_all_bands(self):
        return sorted(self.bands.values(), key=lambda b: b.band_name)

    async def get_all_statuses(self):
        return sorted(self.statuses.values(), key=lambda s: s.status_name)

    async def find_status_by_name(self, name):
        return next((s for s in self.statuses.values() if s.status_name == name), None)

    async def references_exist(self, capability_id=None, band_id=None, status_id=None):
        return all(
            ref is None or ref in table
            for ref, table in [
                (capability_id, self.capabilities),
                (band_id, self.bands),
                (status_id, self.statuses),
            ]
        )

    async def get_job_roles(self, status_id=None):
        roles = [self._resolve(f, i) for i, f in self.job_roles.items()]
        return [r for r in roles if status_id is None or r.status_id == status_id]

    async def get_job_role_by_id(self, job_role_id):
        fields = self.job_roles.get(job_role_id)
        return self._resolve(fields, job_role_id) if fields else None

    async def create_job_role(self, fields):
        job_role_id = new_id()
        self.job_roles[job_role_id] = dict(fields)
        return self._resolve(self.job_roles[job_role_id], job_role_id)

    async def update_job_role(self, job_role_id, fields):
        if job_role_id not in self.job_roles:
            return None
        self.job_roles[job_role_id].update(fields)
        return self._resolve(self.job_roles[job_role_id], job_role_id)

    async def delete_job_role(self, job_role_id):
        fields = self.job_roles.pop(job_role_id, None)
        return self._resolve(fields, job_role_id) if fields else None


# ===========================
# FIXTURES
# ===========================

@pytest.fixture
def settings():
    return Settings(jwt_secret="test-secret", s3_bucket_name="test-bucket", mongo_uri="mongodb://unused")


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def make_storage():
    return FakeStorage


@pytest.fixture
def make_application_dao():
    return FakeApplicationDao


@pytest.fixture
def application_dao():
    return FakeApplicationDao()


@pytest.fixture
def user_dao():
    return FakeUserDao()


@pytest.fixture
def job_role_dao():
    dao = FakeJobRoleDao()
    engineering = dao.add_capability("Engineering")
    consultant = dao.add_band("Consultant")
    open_status = dao.add_status("Open")
    closed_status = dao.add_status("Closed")
    dao.job_roles["64b7f0c2a1b2c3d4e5f60001"] = {
        "role_name": "Software Engineer",
        "description": "Builds software",
        "sharepoint_url": "https://example.sharepoint.com/se.pdf",
        "responsibilities": "Write code",
        "number_of_open_positions": 2,
        "location": "Belfast",
        "closing_date": datetime(2030, 3, 15),
        "capability_id": engineering.capability_id,
        "band_id": consultant.band_id,
        "status_id": open_status.status_id,
    }
    dao.job_roles["64b7f0c2a1b2c3d4e5f60002"] = {
        "role_name": "Test Engineer",
        "location": "Poland",
        "closing_date": datetime(2030, 4, 1),
        "capability_id": engineering.capability_id,
        "band_id": consultant.band_id,
        "status_id": closed_status.status_id,
    }
    return dao


@pytest.fixture
def applicant():
    return User(
        user_id="64b7f0c2a1b2c3d4e5f6a001",
        email="user@example.com",
        first_name="Test",
        second_name="User",
        password="not-a-real-hash",
        role="user",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def admin():
    return User(
        user_id="64b7f0c2a1b2c3d4e5f6a002",
        email="admin@example.com",
        first_name="Admin",
        second_name="User",
        password="not-a-real-hash",
        role="admin",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def auth_header(settings):
    def make(user):
        return {"Authorization": f"Bearer {create_access_token(user, settings)}"}
    return make


@pytest.fixture
def app(settings, storage, application_dao, user_dao, job_role_dao):
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_application_service] = lambda: ApplicationService(application_dao, storage)
    app.dependency_overrides[get_auth_service] = lambda: AuthService(user_dao, settings)
    app.dependency_overrides[get_job_role_service] = lambda: JobRoleService(job_role_dao)
    return app


@pytest.fixture
def client(app):
    # No context manager: the lifespan (Mongo, S3) is never started
    return TestClient(app, raise_server_exceptions=False)
