"""Exceptions raised by services and rendered by the API as ``{"error": ...}``."""


class CareersError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


# ===========================
# 400 - CLIENT INPUT
# ===========================

class ValidationError(CareersError):
    status_code = 400
    message = "Invalid request"


class FileMissingError(ValidationError):
    message = "CV file is required"


class InvalidUploadError(ValidationError):
    pass


class UploadTooLargeError(ValidationError):
    message = "File size exceeds 10MB limit"


class PasswordMismatchError(ValidationError):
    message = "Passwords do not match"


class PasswordPolicyError(ValidationError):
    pass


class JobRoleValidationError(ValidationError):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class InvalidReferenceError(ValidationError):
    message = "Invalid capability, band, or status selected"


# ===========================
# AUTH
# ===========================

class InvalidCredentialsError(CareersError):
    status_code = 401
    message = "Invalid credentials"


class DuplicateEmailError(CareersError):
    status_code = 409
    message = "User with this email already exists"


# ===========================
# 404
# ===========================

class NotFoundError(CareersError):
    status_code = 404
    message = "Not found"


class JobRoleNotFoundError(NotFoundError):
    message = "Job role not found"


class ApplicationNotFoundError(NotFoundError):
    message = "Application not found"


# ===========================
# UPSTREAM I/O
# ===========================

class UpstreamError(CareersError):
    """Object storage or database failure; the original is kept as ``__cause__``."""

    status_code = 500


class UploadFailedError(UpstreamError):
    message = "Failed to upload CV to object storage"


class PersistenceFailedError(UpstreamError):
    message = "Failed to save application"
