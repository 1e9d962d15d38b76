from datetime import datetime
from typing import Optional

from .base import DomainModel


class Capability(DomainModel):
    capability_id: str
    capability_name: str


class Band(DomainModel):
    band_id: str
    band_name: str


class JobRoleStatus(DomainModel):
    status_id: str
    status_name: str


class JobRole(DomainModel):
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

    # Resolved references; None when the referenced document is gone
    capability: Optional[Capability] = None
    band: Optional[Band] = None
    status: Optional[JobRoleStatus] = None
