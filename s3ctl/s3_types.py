"""Type definitions for S3 client interfaces."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class S3Client(Protocol):
    """Structural protocol for a boto3 S3 client (subset used by s3ctl)."""

    def create_bucket(self, **kwargs: Any) -> dict[str, Any]:
        """Create a bucket."""
        ...

    def delete_bucket(self, *, Bucket: str) -> dict[str, Any]:  # noqa: N803
        """Delete an empty bucket."""
        ...

    def head_bucket(self, *, Bucket: str) -> dict[str, Any]:  # noqa: N803
        """Check that a bucket exists and is accessible."""
        ...

    def list_buckets(self) -> dict[str, Any]:
        """List buckets owned by the caller."""
        ...

    def list_objects_v2(self, **kwargs: str) -> dict[str, Any]:
        """List objects in a bucket."""
        ...

    def upload_file(
        self,
        filename: str,
        bucket: str,
        key: str,
        Callback: Callable[[int], object] | None = None,  # noqa: N803
    ) -> None:
        """Upload a local file to S3."""
        ...

    def get_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:  # noqa: N803
        """Retrieve an object from S3."""
        ...

    def delete_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:  # noqa: N803
        """Delete an object from S3."""
        ...

    def list_multipart_uploads(self, **kwargs: str) -> dict[str, Any]:
        """List in-progress multipart uploads of a bucket."""
        ...

    def create_multipart_upload(
        self,
        *,
        Bucket: str,  # noqa: N803
        Key: str,  # noqa: N803
    ) -> dict[str, Any]:
        """Initiate a multipart upload."""
        ...

    def upload_part(
        self,
        *,
        Bucket: str,  # noqa: N803
        Key: str,  # noqa: N803
        UploadId: str,  # noqa: N803
        PartNumber: int,  # noqa: N803
        Body: IO[bytes],  # noqa: N803
    ) -> dict[str, Any]:
        """Upload one part of a multipart upload."""
        ...

    def complete_multipart_upload(
        self,
        *,
        Bucket: str,  # noqa: N803
        Key: str,  # noqa: N803
        UploadId: str,  # noqa: N803
        MultipartUpload: dict[str, Any],  # noqa: N803
    ) -> dict[str, Any]:
        """Complete a multipart upload from its uploaded parts."""
        ...

    def abort_multipart_upload(
        self,
        *,
        Bucket: str,  # noqa: N803
        Key: str,  # noqa: N803
        UploadId: str,  # noqa: N803
    ) -> dict[str, Any]:
        """Abort a multipart upload and discard its parts."""
        ...

    def close(self) -> None:
        """Close the underlying HTTP connections."""
        ...
