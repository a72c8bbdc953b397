"""Pydantic models for buckets, objects and multipart upload state."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field

# ------------------------------------------------------------------
# Listing models (bucket / object / in-progress upload)
# ------------------------------------------------------------------


class BucketInfo(BaseModel):
    """Bucket summary as returned by ``list_buckets``."""

    model_config = ConfigDict(frozen=True)

    name: str
    creation_date: datetime | None = None

    def format_display(self) -> str:
        """Human-readable one-line summary."""
        if self.creation_date is None:
            return self.name
        return f"{self.name} (created {self.creation_date.isoformat()})"


class ObjectInfo(BaseModel):
    """Object summary as returned by ``list_objects_v2``."""

    model_config = ConfigDict(frozen=True)

    key: str
    size: int = 0
    last_modified: datetime | None = None
    etag: str = ""

    def format_display(self) -> str:
        """Human-readable one-line summary."""
        return f"{self.key} ({self.size} bytes)"


class MultipartUploadInfo(BaseModel):
    """In-progress multipart upload as returned by ``list_multipart_uploads``."""

    model_config = ConfigDict(frozen=True)

    key: str
    upload_id: str
    initiated: datetime | None = None

    def format_display(self) -> str:
        """Human-readable one-line summary."""
        line = f"{self.key} (upload_id={self.upload_id}"
        if self.initiated is not None:
            line += f", initiated {self.initiated.isoformat()}"
        return line + ")"


# ------------------------------------------------------------------
# Multipart upload state
# ------------------------------------------------------------------


class UploadSession(BaseModel):
    """One in-progress multipart upload on the storage service."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str
    upload_id: str


class PartDescriptor(BaseModel):
    """One uploaded part: its 1-based number and the etag the service returned."""

    model_config = ConfigDict(frozen=True)

    part_number: int = Field(ge=1)
    etag: str

    def to_completed_part(self) -> dict[str, object]:
        """Return the ``CompletedPart`` dict expected by the S3 API."""
        return {"PartNumber": self.part_number, "ETag": self.etag}


class CompletedUpload(BaseModel):
    """Result of a successfully completed multipart upload."""

    model_config = ConfigDict(frozen=True)

    session: UploadSession
    parts: list[PartDescriptor] = []
