"""Custom exception hierarchy for s3ctl.

All library-specific exceptions inherit from ``S3ctlError`` so consumers
can catch ``except S3ctlError`` to handle any s3ctl failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from s3ctl.models import PartDescriptor, UploadSession


class S3ctlError(Exception):
    """Base exception for all s3ctl errors."""


class RemoteCallError(S3ctlError):
    """Raised when a call to the storage service fails, whatever the cause."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        """Initialize with the failed operation name and the SDK error."""
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class LocalFileError(S3ctlError):
    """Raised when a local file cannot be read or written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        """Initialize with the offending path and the OS error."""
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot access local file {str(path)!r}: {cause}")


class MultipartUploadError(S3ctlError):
    """Raised when one phase of a multipart upload fails.

    ``session`` is ``None`` when the upload could not be initiated;
    otherwise the session is still open on the storage service and the
    caller decides whether to abort it.
    """

    def __init__(
        self,
        phase: str,
        cause: S3ctlError,
        session: UploadSession | None = None,
        parts: list[PartDescriptor] | None = None,
    ) -> None:
        """Initialize with the failing phase, its cause and the upload state."""
        self.phase = phase
        self.cause = cause
        self.session = session
        self.parts = list(parts or [])
        super().__init__(f"Multipart upload failed during {phase}: {cause}")
