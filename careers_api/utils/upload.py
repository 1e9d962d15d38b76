"""
CV upload handling: the allow-list gate and the size-limited buffering step.

The gate only looks at the declared media type and filename, so it runs
before any bytes are read and long before anything reaches object storage.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from fastapi import UploadFile

from careers_api.config import DEFAULT_EXTENSIONS, DEFAULT_MIME_TYPES, TEN_MEGABYTES, Settings
from careers_api.errors import InvalidUploadError, UploadTooLargeError

MEGABYTE = 1024 * 1024
READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    max_file_size_bytes: int = TEN_MEGABYTES
    allowed_mime_types: Sequence[str] = tuple(DEFAULT_MIME_TYPES)
    allowed_extensions: Sequence[str] = tuple(DEFAULT_EXTENSIONS)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadPolicy":
        return cls(
            max_file_size_bytes=settings.max_file_size_bytes,
            allowed_mime_types=tuple(settings.allowed_mime_types),
            allowed_extensions=tuple(ext.lower() for ext in settings.allowed_extensions),
        )

    @property
    def allowed_label(self) -> str:
        """'.doc, .docx, and .pdf' style list for error messages."""
        exts = list(self.allowed_extensions)
        if len(exts) <= 2:
            return " and ".join(exts)
        return ", ".join(exts[:-1]) + ", and " + exts[-1]


def format_limit(size_bytes: int) -> str:
    """Whole mebibytes as "10MB", anything else as an exact byte count."""
    if size_bytes >= MEGABYTE and size_bytes % MEGABYTE == 0:
        return f"{size_bytes // MEGABYTE}MB"
    return f"{size_bytes} bytes"


DEFAULT_POLICY = UploadPolicy()


@dataclass(frozen=True)
class UploadCandidate:
    """A submitted file held in memory for the length of one request."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def validate_upload(filename: Optional[str], content_type: Optional[str], policy: UploadPolicy = DEFAULT_POLICY) -> None:
    """Raise ``InvalidUploadError`` unless both media type and extension are allowed.

    The media type is checked first, so a file failing both checks is
    reported as an invalid type.
    """
    if content_type not in policy.allowed_mime_types:
        raise InvalidUploadError(
            f"Invalid file type. Only {policy.allowed_label} files are allowed."
        )

    name = (filename or "").lower()
    if not any(name.endswith(ext.lower()) for ext in policy.allowed_extensions):
        raise InvalidUploadError(
            f"Invalid file extension. Only {policy.allowed_label} files are allowed."
        )


async def read_upload(file: UploadFile, policy: UploadPolicy = DEFAULT_POLICY) -> UploadCandidate:
    """Buffer ``file`` into an ``UploadCandidate``, refusing anything over the size limit."""
    limit = policy.max_file_size_bytes
    chunks = []
    total = 0
    while True:
        chunk = await file.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise UploadTooLargeError(f"File size exceeds {format_limit(limit)} limit")
        chunks.append(chunk)

    return UploadCandidate(
        filename=file.filename or "",
        content_type=file.content_type or "",
        content=b"".join(chunks),
    )
