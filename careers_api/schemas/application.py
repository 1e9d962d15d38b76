from datetime import datetime

from careers_api.models.application import Application, ApplicationStatus

from .base import CamelModel


class ApplicationResponse(CamelModel):
    application_id: str
    user_id: str
    job_role_id: str
    status: ApplicationStatus
    cv_url: str
    created_at: datetime

    @classmethod
    def from_application(cls, application: Application) -> "ApplicationResponse":
        return cls(**application.model_dump())
