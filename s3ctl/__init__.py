"""s3ctl -- object storage command-line client."""

from s3ctl.client import StorageClient
from s3ctl.config import S3Config
from s3ctl.exceptions import (
    LocalFileError,
    MultipartUploadError,
    RemoteCallError,
    S3ctlError,
)
from s3ctl.models import (
    BucketInfo,
    CompletedUpload,
    MultipartUploadInfo,
    ObjectInfo,
    PartDescriptor,
    UploadSession,
)
from s3ctl.multipart import MultipartUploader, iter_part_paths

__all__ = [
    "BucketInfo",
    "CompletedUpload",
    "LocalFileError",
    "MultipartUploadError",
    "MultipartUploadInfo",
    "MultipartUploader",
    "ObjectInfo",
    "PartDescriptor",
    "RemoteCallError",
    "S3Config",
    "S3ctlError",
    "StorageClient",
    "UploadSession",
    "iter_part_paths",
]
