from typing import List

from fastapi import APIRouter, Depends, Response

from careers_api.dependencies import get_job_role_service
from careers_api.schemas.job_role import (
    BandResponse,
    CapabilityResponse,
    JobRoleCreate,
    JobRoleDetail,
    JobRoleSummary,
    JobRoleUpdate,
    StatusResponse,
    band_response,
    capability_response,
    status_response,
)
from careers_api.services.job_role_service import JobRoleService
from careers_api.utils.auth import TokenUser, require_admin

router = APIRouter(tags=["Job Roles"])

# ===========================
# PUBLIC ENDPOINTS
# ===========================

# ✅ 1. LIST OPEN JOB ROLES
@router.get("/job-roles", response_model=List[JobRoleSummary])
async def get_job_roles(job_role_service: JobRoleService = Depends(get_job_role_service)):
    """Open job roles with capability and band names."""
    job_roles = await job_role_service.get_open_job_roles()
    return [JobRoleSummary.from_job_role(job_role) for job_role in job_roles]


# ✅ 2. JOB ROLE DETAILS
@router.get("/job-roles/{job_role_id}", response_model=JobRoleDetail)
async def get_job_role(job_role_id: str, job_role_service: JobRoleService = Depends(get_job_role_service)):
    job_role = await job_role_service.get_job_role_by_id(job_role_id)
    return JobRoleDetail.from_job_role(job_role)


# ✅ 3. REFERENCE DATA
@router.get("/capabilities", response_model=List[CapabilityResponse])
async def get_capabilities(job_role_service: JobRoleService = Depends(get_job_role_service)):
    return [capability_response(c) for c in await job_role_service.get_all_capabilities()]


@router.get("/bands", response_model=List[BandResponse])
async def get_bands(job_role_service: JobRoleService = Depends(get_job_role_service)):
    return [band_response(b) for b in await job_role_service.get_all_bands()]


@router.get("/statuses", response_model=List[StatusResponse])
async def get_statuses(job_role_service: JobRoleService = Depends(get_job_role_service)):
    return [status_response(s) for s in await job_role_service.get_all_statuses()]


# ===========================
# ADMIN ENDPOINTS
# ===========================

# ✅ 4. CREATE JOB ROLE
@router.post("/job-roles", response_model=JobRoleDetail, status_code=201)
async def create_job_role(
    job_role: JobRoleCreate,
    job_role_service: JobRoleService = Depends(get_job_role_service),
    current_user: TokenUser = Depends(require_admin),
):
    """Create a job role. New roles always start as Open."""
    created = await job_role_service.create_job_role(job_role.model_dump(exclude_unset=True))
    return JobRoleDetail.from_job_role(created)


# ✅ 5. UPDATE JOB ROLE
@router.put("/job-roles/{job_role_id}", response_model=JobRoleDetail)
async def update_job_role(
    job_role_id: str,
    job_role: JobRoleUpdate,
    job_role_service: JobRoleService = Depends(get_job_role_service),
    current_user: TokenUser = Depends(require_admin),
):
    """Partial update; only the fields sent are changed."""
    updated = await job_role_service.update_job_role(job_role_id, job_role.model_dump(exclude_unset=True))
    return JobRoleDetail.from_job_role(updated)


# ✅ 6. DELETE JOB ROLE
@router.delete("/job-roles/{job_role_id}", status_code=204)
async def delete_job_role(
    job_role_id: str,
    job_role_service: JobRoleService = Depends(get_job_role_service),
    current_user: TokenUser = Depends(require_admin),
):
    await job_role_service.delete_job_role(job_role_id)
    return Response(status_code=204)
