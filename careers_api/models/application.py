from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import DomainModel


class ApplicationStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    HIRED = "HIRED"
    REJECTED = "REJECTED"


class NewApplication(DomainModel):
    application_id: str
    user_id: str
    job_role_id: str
    status: ApplicationStatus = ApplicationStatus.IN_PROGRESS
    cv_url: str = Field(min_length=1)


class Application(NewApplication):
    created_at: datetime
