import pytest

from careers_api.dependencies import get_application_service
from careers_api.services.application_service import ApplicationService

OPEN_ROLE_ID = "64b7f0c2a1b2c3d4e5f60001"
CV = {"CV": ("my resume.pdf", b"%PDF-1.4", "application/pdf")}


@pytest.fixture
def apply(client, auth_header, applicant):
    def post(files=CV, data=None, headers=None):
        return client.post(
            "/application",
            files=files,
            data={"jobRoleId": OPEN_ROLE_ID} if data is None else data,
            headers=auth_header(applicant) if headers is None else headers,
        )
    return post


def test_successful_application(apply, storage, application_dao, applicant):
    response = apply()

    assert response.status_code == 201
    body = response.json()
    key = storage.puts[0][0]
    assert key.startswith(f"applications/{body['applicationId']}/")
    assert key.endswith("_my_resume.pdf")
    assert body["cvUrl"] == f"{storage.base_url}/{key}"
    assert body["status"] == "IN_PROGRESS"
    assert body["userId"] == applicant.user_id
    assert body["jobRoleId"] == OPEN_ROLE_ID
    assert len(application_dao.created) == 1


def test_missing_file_never_reaches_the_workflow(apply, storage, application_dao):
    response = apply(files={"other": ("x.txt", b"x", "text/plain")})

    assert response.status_code == 400
    assert response.json() == {"error": "CV file is required"}
    assert storage.puts == []
    assert application_dao.created == []


def test_png_rejected(apply, storage):
    response = apply(files={"CV": ("image.png", b"\x89PNG", "image/png")})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Only .doc, .docx, and .pdf files are allowed."}
    assert storage.puts == []


def test_requires_token(apply):
    response = apply(headers={})
    assert response.status_code == 401
    assert response.json() == {"error": "Access token required"}


def test_missing_job_role_id(apply):
    response = apply(data={})
    assert response.status_code == 400
    assert response.json() == {"error": "jobRoleId is required"}


def test_cannot_apply_for_someone_else(apply):
    response = apply(data={"jobRoleId": OPEN_ROLE_ID, "userId": "64b7f0c2a1b2c3d4e5f6a999"})
    assert response.status_code == 403
    assert response.json() == {"error": "Cannot apply on behalf of another user"}


def test_unknown_job_role(apply, storage):
    response = apply(data={"jobRoleId": "64b7f0c2a1b2c3d4e5f6ffff"})
    assert response.status_code == 404
    assert storage.puts == []


def test_upload_failure_is_a_generic_500(app, apply, make_storage, application_dao):
    failing = make_storage(error=ConnectionError("S3 unreachable"))
    app.dependency_overrides[get_application_service] = lambda: ApplicationService(application_dao, failing)

    response = apply()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert application_dao.created == []


def test_my_applications(apply, client, auth_header, applicant, admin):
    apply()

    mine = client.get("/applications/me", headers=auth_header(applicant)).json()
    theirs = client.get("/applications/me", headers=auth_header(admin)).json()

    assert len(mine) == 1
    assert theirs == []


def test_admin_lists_and_updates_applications(apply, client, auth_header, admin):
    application_id = apply().json()["applicationId"]

    listed = client.get(f"/job-roles/{OPEN_ROLE_ID}/applications", headers=auth_header(admin))
    assert [a["applicationId"] for a in listed.json()] == [application_id]

    updated = client.put(f"/applications/{application_id}/status/HIRED", headers=auth_header(admin))
    assert updated.status_code == 200
    assert updated.json()["status"] == "HIRED"


def test_status_changes_are_admin_only(apply, client, auth_header, applicant):
    application_id = apply().json()["applicationId"]
    response = client.put(f"/applications/{application_id}/status/HIRED", headers=auth_header(applicant))
    assert response.status_code == 403


def test_unknown_status_value(client, auth_header, admin):
    response = client.put("/applications/64b7f0c2a1b2c3d4e5f6ffff/status/PROMOTED", headers=auth_header(admin))
    assert response.status_code == 400


def test_status_change_for_missing_application(client, auth_header, admin):
    response = client.put("/applications/64b7f0c2a1b2c3d4e5f6ffff/status/REJECTED", headers=auth_header(admin))
    assert response.status_code == 404
    assert response.json() == {"error": "Application not found"}


def test_persistence_failure_is_a_generic_500(app, apply, storage, make_application_dao):
    failing = make_application_dao(error=RuntimeError("database down"))
    app.dependency_overrides[get_application_service] = lambda: ApplicationService(failing, storage)

    response = apply()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert len(storage.puts) == 1


def test_bad_extension_rejected(apply, storage):
    response = apply(files={"CV": ("cv.txt", b"%PDF-1.4", "application/pdf")})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file extension. Only .doc, .docx, and .pdf files are allowed."}
    assert storage.puts == []
