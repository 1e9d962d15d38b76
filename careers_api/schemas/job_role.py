from datetime import datetime
from typing import Any, Optional

from careers_api.models.job_role import Band, Capability, JobRole, JobRoleStatus

from .base import CamelModel

UNKNOWN = "Unknown"


# ===========================
# INPUT
# ===========================

class JobRoleCreate(CamelModel):
    """Everything is optional here; missing and malformed values are reported
    by the job role validators with their own messages."""

    role_name: Optional[str] = None
    description: Optional[str] = None
    sharepoint_url: Optional[str] = None
    responsibilities: Optional[str] = None
    number_of_open_positions: Optional[Any] = None
    location: Optional[str] = None
    closing_date: Optional[str] = None
    capability_id: Optional[str] = None
    band_id: Optional[str] = None


class JobRoleUpdate(JobRoleCreate):
    status_id: Optional[str] = None


# ===========================
# OUTPUT
# ===========================

class CapabilityResponse(CamelModel):
    capability_id: str
    capability_name: str


class BandResponse(CamelModel):
    band_id: str
    band_name: str


class StatusResponse(CamelModel):
    status_id: str
    status_name: str


class JobRoleSummary(CamelModel):
    """Row of the job roles list."""

    job_role_id: str
    role_name: str
    location: str
    capability: str
    band: str
    closing_date: str  # YYYY-MM-DD

    @classmethod
    def from_job_role(cls, job_role: JobRole) -> "JobRoleSummary":
        return cls(
            job_role_id=job_role.job_role_id,
            role_name=job_role.role_name,
            location=job_role.location,
            capability=job_role.capability.capability_name if job_role.capability else UNKNOWN,
            band=job_role.band.band_name if job_role.band else UNKNOWN,
            closing_date=job_role.closing_date.strftime("%Y-%m-%d"),
        )


class JobRoleDetail(CamelModel):
    job_role_id: str
    role_name: str
    description: Optional[str] = None
    sharepoint_url: Optional[str] = None
    responsibilities: Optional[str] = None
    number_of_open_positions: Optional[int] = None
    location: str
    closing_date: datetime
    capability_id: str
    band_id: str
    status_id: str
    capability: Optional[CapabilityResponse] = None
    band: Optional[BandResponse] = None
    status: Optional[StatusResponse] = None

    @classmethod
    def from_job_role(cls, job_role: JobRole) -> "JobRoleDetail":
        return cls(**job_role.model_dump())


def capability_response(capability: Capability) -> CapabilityResponse:
    return CapabilityResponse(**capability.model_dump())


def band_response(band: Band) -> BandResponse:
    return BandResponse(**band.model_dump())


def status_response(status: JobRoleStatus) -> StatusResponse:
    return StatusResponse(**status.model_dump())
