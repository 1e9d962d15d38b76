"""
Validation for job role create/update payloads.

Both functions take the payload as a plain dict keyed by model field name
and return the cleaned fields ready for the DAO, or raise
``JobRoleValidationError`` carrying every message found.
"""

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from careers_api.errors import JobRoleValidationError

# field, label used in "cannot be empty", message when missing on create
STRING_FIELDS = [
    ("role_name", "Role name", "Role name is required"),
    ("description", "Job spec summary", "Job spec summary is required"),
    ("sharepoint_url", "SharePoint link", "SharePoint link is required"),
    ("responsibilities", "Responsibilities", "Responsibilities are required"),
    ("location", "Location", "Location is required"),
    ("capability_id", "Capability", "Capability is required"),
    ("band_id", "Band", "Band is required"),
]

NUMBER_OF_OPEN_POSITIONS_ERROR = "Number of open positions must be at least 1"
CLOSING_DATE_REQUIRED_ERROR = "Closing date is required"
INVALID_SHAREPOINT_URL_ERROR = "Invalid SharePoint URL format"
INVALID_CLOSING_DATE_ERROR = "Invalid closing date format"
PAST_CLOSING_DATE_ERROR = "Closing date must be in the future"

# Largest value a BSON int64 can hold
MAX_OPEN_POSITIONS = 2 ** 63 - 1


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_sharepoint_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_open_positions(value: Any) -> Optional[int]:
    """Whole number >= 1, given as a number or numeric string; otherwise None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            as_float = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        if not as_float.is_integer():
            return None
        number = int(as_float)
    if number < 1 or number > MAX_OPEN_POSITIONS:
        return None
    return number


def parse_closing_date(value: Any, today: Optional[date] = None):
    """Return ``(closing_datetime, error)``; the date must fall after ``today``."""
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(_trimmed(value).replace("Z", "+00:00")).date()
        except ValueError:
            return None, INVALID_CLOSING_DATE_ERROR

    if parsed <= (today or date.today()):
        return None, PAST_CLOSING_DATE_ERROR
    return datetime.combine(parsed, time.min), None


def _check_formats(data: Dict[str, Any], cleaned: Dict[str, Any], errors: List[str], today) -> None:
    if "sharepoint_url" in cleaned and not is_valid_sharepoint_url(cleaned["sharepoint_url"]):
        errors.append(INVALID_SHAREPOINT_URL_ERROR)

    if "number_of_open_positions" in data:
        positions = parse_open_positions(data["number_of_open_positions"])
        if positions is None:
            errors.append(NUMBER_OF_OPEN_POSITIONS_ERROR)
        else:
            cleaned["number_of_open_positions"] = positions

    if "closing_date" in data:
        closing_date, error = parse_closing_date(data["closing_date"], today)
        if error:
            errors.append(error)
        else:
            cleaned["closing_date"] = closing_date


def validate_job_role_create(data: Dict[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    errors = [message for field, _, message in STRING_FIELDS if not _trimmed(data.get(field))]
    if _is_blank(data.get("number_of_open_positions")):
        errors.append(NUMBER_OF_OPEN_POSITIONS_ERROR)
    if _is_blank(data.get("closing_date")):
        errors.append(CLOSING_DATE_REQUIRED_ERROR)
    if errors:
        raise JobRoleValidationError(errors)

    cleaned = {field: _trimmed(data[field]) for field, _, _ in STRING_FIELDS}
    _check_formats(data, cleaned, errors, today)
    if errors:
        raise JobRoleValidationError(errors)
    return cleaned


def validate_job_role_update(data: Dict[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    """Partial update: only the fields present in ``data`` are checked."""
    if not data:
        raise JobRoleValidationError(["No fields to update"])

    errors = []
    cleaned = {}
    for field, label, _ in STRING_FIELDS + [("status_id", "Status", None)]:
        if field not in data:
            continue
        value = _trimmed(data[field])
        if not value:
            errors.append(f"{label} cannot be empty")
        else:
            cleaned[field] = value

    _check_formats(data, cleaned, errors, today)
    if errors:
        raise JobRoleValidationError(errors)
    return cleaned
