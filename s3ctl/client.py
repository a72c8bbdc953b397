"""Storage client: one boto3 S3 client wrapped behind s3ctl's own call contract."""

from __future__ import annotations

import errno
import os
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from tqdm import tqdm

from s3ctl.exceptions import LocalFileError, RemoteCallError
from s3ctl.models import (
    BucketInfo,
    MultipartUploadInfo,
    ObjectInfo,
    PartDescriptor,
    UploadSession,
)
from s3ctl.s3_utils import is_not_found, make_s3_client, s3_retry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType

    from s3ctl.config import S3Config
    from s3ctl.s3_types import S3Client

# Socket-level failures only; other OSErrors are local file problems.
_REMOTE_ERRORS = (ClientError, BotoCoreError, Boto3Error, ConnectionError, TimeoutError)

_US_EAST_1 = "us-east-1"


@contextmanager
def _remote_call(operation: str) -> Iterator[None]:
    """Convert any SDK or transport failure inside the block to RemoteCallError."""
    try:
        yield
    except _REMOTE_ERRORS as e:
        raise RemoteCallError(operation, e) from e


# ---------------------------------------------------------------------------
# Retried read-only requests
# ---------------------------------------------------------------------------


@s3_retry
def _list_buckets_raw(s3: S3Client) -> dict[str, Any]:
    return s3.list_buckets()


@s3_retry
def _head_bucket_raw(s3: S3Client, bucket: str) -> None:
    s3.head_bucket(Bucket=bucket)


@s3_retry
def _list_objects_page(s3: S3Client, kwargs: dict[str, str]) -> dict[str, Any]:
    return s3.list_objects_v2(**kwargs)


@s3_retry
def _list_uploads_page(s3: S3Client, kwargs: dict[str, str]) -> dict[str, Any]:
    return s3.list_multipart_uploads(**kwargs)


@s3_retry
def _get_object_bytes(s3: S3Client, bucket: str, key: str) -> bytes:
    resp = s3.get_object(Bucket=bucket, Key=key)
    body: bytes = resp["Body"].read()
    return body


class StorageClient:
    """Object-storage operations used by the s3ctl commands.

    Constructed once per invocation and passed to each command.  Every
    failure of the underlying SDK surfaces as :class:`RemoteCallError`.

    Usage::

        with StorageClient.from_config(cfg) as client:
            client.list_buckets()
    """

    def __init__(self, s3: S3Client, region: str) -> None:
        """Wrap an already constructed boto3 S3 client bound to *region*."""
        self._s3 = s3
        self.region = region

    @classmethod
    def from_config(cls, cfg: S3Config) -> StorageClient:
        """Build a client from resolved settings (region, endpoint, profile)."""
        with _remote_call("create_client"):
            s3, region = make_s3_client(cfg)
        return cls(s3, region)

    def __enter__(self) -> StorageClient:
        """Enter the context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close HTTP connections of the wrapped client."""
        self._s3.close()

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------

    def create_bucket(self, bucket: str, location: str | None = None) -> None:
        """Create *bucket* constrained to *location* (client region by default)."""
        location = location or self.region
        kwargs: dict[str, Any] = {"Bucket": bucket}
        # S3 rejects an explicit us-east-1 location constraint.
        if location != _US_EAST_1:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": location}
        logger.debug(f"create_bucket {bucket} (location={location})")
        with _remote_call("create_bucket"):
            self._s3.create_bucket(**kwargs)

    def delete_bucket(self, bucket: str) -> None:
        """Delete an empty bucket."""
        with _remote_call("delete_bucket"):
            self._s3.delete_bucket(Bucket=bucket)

    def bucket_exists(self, bucket: str) -> bool:
        """Return True when *bucket* exists and is accessible.

        A 404 answer means "does not exist"; any other failure (including
        403) is raised as :class:`RemoteCallError`.
        """
        try:
            _head_bucket_raw(self._s3, bucket)
        except ClientError as e:
            if is_not_found(e):
                return False
            raise RemoteCallError("head_bucket", e) from e
        except _REMOTE_ERRORS as e:
            raise RemoteCallError("head_bucket", e) from e
        return True

    def list_buckets(self) -> list[BucketInfo]:
        """List all buckets owned by the caller."""
        with _remote_call("list_buckets"):
            resp = _list_buckets_raw(self._s3)
        return [
            BucketInfo(name=b["Name"], creation_date=b.get("CreationDate"))
            for b in resp.get("Buckets", [])
        ]

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def list_objects(self, bucket: str, prefix: str = "") -> list[ObjectInfo]:
        """List every object of *bucket* under *prefix*, following pagination."""
        objects: list[ObjectInfo] = []
        kwargs: dict[str, str] = {"Bucket": bucket}
        if prefix:
            kwargs["Prefix"] = prefix
        while True:
            with _remote_call("list_objects"):
                resp = _list_objects_page(self._s3, kwargs)
            objects.extend(
                ObjectInfo(
                    key=obj["Key"],
                    size=int(obj.get("Size", 0)),
                    last_modified=obj.get("LastModified"),
                    etag=str(obj.get("ETag", "")),
                )
                for obj in resp.get("Contents", [])
            )
            if not resp.get("IsTruncated"):
                break
            kwargs["ContinuationToken"] = resp["NextContinuationToken"]
        return objects

    def put_object(self, bucket: str, key: str, path: Path) -> None:
        """Upload the local file at *path* to ``bucket/key``."""
        try:
            size = path.stat().st_size
        except OSError as e:
            raise LocalFileError(path, e) from e
        if not path.is_file():
            raise LocalFileError(
                path, IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR))
            )
        try:
            with (
                tqdm(
                    total=size,
                    desc=f"Uploading {path.name}",
                    unit="B",
                    unit_scale=True,
                    leave=False,
                ) as bar,
                _remote_call("put_object"),
            ):
                self._s3.upload_file(str(path), bucket, key, Callback=bar.update)
        except OSError as e:
            raise LocalFileError(path, e) from e
        logger.debug(f"put_object s3://{bucket}/{key} ({size} bytes)")

    def get_object(self, bucket: str, key: str) -> bytes:
        """Return the full body of ``bucket/key``."""
        with _remote_call("get_object"):
            return _get_object_bytes(self._s3, bucket, key)

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete ``bucket/key``."""
        with _remote_call("delete_object"):
            self._s3.delete_object(Bucket=bucket, Key=key)

    # ------------------------------------------------------------------
    # Multipart uploads
    # ------------------------------------------------------------------

    def list_multipart_uploads(self, bucket: str) -> list[MultipartUploadInfo]:
        """List in-progress multipart uploads of *bucket*."""
        uploads: list[MultipartUploadInfo] = []
        kwargs: dict[str, str] = {"Bucket": bucket}
        while True:
            with _remote_call("list_multipart_uploads"):
                resp = _list_uploads_page(self._s3, kwargs)
            uploads.extend(
                MultipartUploadInfo(
                    key=u["Key"],
                    upload_id=u["UploadId"],
                    initiated=u.get("Initiated"),
                )
                for u in resp.get("Uploads", [])
            )
            if not resp.get("IsTruncated"):
                break
            kwargs["KeyMarker"] = resp["NextKeyMarker"]
            kwargs["UploadIdMarker"] = resp["NextUploadIdMarker"]
        return uploads

    def initiate_multipart(self, bucket: str, key: str) -> UploadSession:
        """Start a multipart upload and return its session.

        The bucket and key echoed back by the service are authoritative
        from here on.
        """
        with _remote_call("create_multipart_upload"):
            resp = self._s3.create_multipart_upload(Bucket=bucket, Key=key)
        return UploadSession(
            bucket=resp.get("Bucket") or bucket,
            key=resp.get("Key") or key,
            upload_id=resp["UploadId"],
        )

    def upload_part(
        self,
        session: UploadSession,
        part_number: int,
        body: IO[bytes],
    ) -> str:
        """Upload one part and return the etag the service assigned to it."""
        with _remote_call("upload_part"):
            resp = self._s3.upload_part(
                Bucket=session.bucket,
                Key=session.key,
                UploadId=session.upload_id,
                PartNumber=part_number,
                Body=body,
            )
        etag = resp.get("ETag")
        if not etag:
            raise RemoteCallError(
                "upload_part", ValueError(f"no ETag returned for part {part_number}")
            )
        return str(etag)

    def complete_multipart(
        self,
        session: UploadSession,
        parts: list[PartDescriptor],
    ) -> None:
        """Finish *session*, assembling *parts* in the given order."""
        with _remote_call("complete_multipart_upload"):
            self._s3.complete_multipart_upload(
                Bucket=session.bucket,
                Key=session.key,
                UploadId=session.upload_id,
                MultipartUpload={"Parts": [p.to_completed_part() for p in parts]},
            )

    def abort_multipart(self, session: UploadSession) -> None:
        """Abort *session* and let the service discard its uploaded parts."""
        with _remote_call("abort_multipart_upload"):
            self._s3.abort_multipart_upload(
                Bucket=session.bucket,
                Key=session.key,
                UploadId=session.upload_id,
            )
