from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from careers_api.dependencies import get_application_service, get_job_role_service, get_upload_policy
from careers_api.errors import FileMissingError
from careers_api.models.application import ApplicationStatus
from careers_api.schemas.application import ApplicationResponse
from careers_api.services.application_service import ApplicationService
from careers_api.services.job_role_service import JobRoleService
from careers_api.utils.auth import TokenUser, get_current_user, require_admin
from careers_api.utils.upload import UploadPolicy, read_upload, validate_upload

router = APIRouter(tags=["Applications"])

# ===========================
# APPLICANT ENDPOINTS
# ===========================

# ✅ 1. APPLY FOR A JOB ROLE WITH A CV
@router.post("/application", response_model=ApplicationResponse, status_code=201)
async def create_application(
    job_role_id: Optional[str] = Form(None, alias="jobRoleId"),
    user_id: Optional[str] = Form(None, alias="userId"),
    cv: Optional[UploadFile] = File(None, alias="CV"),
    current_user: TokenUser = Depends(get_current_user),
    policy: UploadPolicy = Depends(get_upload_policy),
    application_service: ApplicationService = Depends(get_application_service),
    job_role_service: JobRoleService = Depends(get_job_role_service),
):
    """Submit an application: multipart form with ``jobRoleId`` and a ``CV`` file."""

    if cv is None:
        raise FileMissingError()

    # Reject before reading a byte of content
    validate_upload(cv.filename, cv.content_type, policy)

    if not job_role_id:
        raise HTTPException(status_code=400, detail="jobRoleId is required")

    if user_id and user_id != current_user.user_id:
        raise HTTPException(status_code=403, detail="Cannot apply on behalf of another user")

    # 404 for unknown roles, before anything is uploaded
    await job_role_service.get_job_role_by_id(job_role_id)

    candidate = await read_upload(cv, policy)

    application = await application_service.create_application(
        user_id=current_user.user_id,
        job_role_id=job_role_id,
        candidate=candidate,
    )
    return ApplicationResponse.from_application(application)


# ✅ 2. MY APPLICATIONS
@router.get("/applications/me", response_model=List[ApplicationResponse])
async def get_my_applications(
    current_user: TokenUser = Depends(get_current_user),
    application_service: ApplicationService = Depends(get_application_service),
):
    applications = await application_service.get_applications_for_user(current_user.user_id)
    return [ApplicationResponse.from_application(a) for a in applications]


# ===========================
# ADMIN ENDPOINTS
# ===========================

# ✅ 3. APPLICATIONS FOR A JOB ROLE
@router.get("/job-roles/{job_role_id}/applications", response_model=List[ApplicationResponse])
async def get_applications_for_job_role(
    job_role_id: str,
    current_user: TokenUser = Depends(require_admin),
    application_service: ApplicationService = Depends(get_application_service),
):
    applications = await application_service.get_applications_for_job_role(job_role_id)
    return [ApplicationResponse.from_application(a) for a in applications]


# ✅ 4. UPDATE APPLICATION STATUS
@router.put("/applications/{application_id}/status/{status}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    status: ApplicationStatus,
    current_user: TokenUser = Depends(require_admin),
    application_service: ApplicationService = Depends(get_application_service),
):
    """Move an application to IN_PROGRESS, HIRED or REJECTED."""
    application = await application_service.update_application_status(application_id, status)
    return ApplicationResponse.from_application(application)
