"""Shared S3 utilities: client construction, read retries and error helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError
from botocore.exceptions import ConnectionError as BotoConnectionError
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from s3ctl.config import DEFAULT_REGION

if TYPE_CHECKING:
    from s3ctl.config import S3Config
    from s3ctl.s3_types import S3Client

# Only for idempotent reads; mutating and multipart calls are never retried.
s3_retry = retry(
    retry=retry_if_exception_type((OSError, ConnectionError, BotoConnectionError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchBucket", "NotFound", "NoSuchKey"})


def resolve_region(cfg: S3Config, session: boto3.Session | None = None) -> str:
    """Pick the region: configured value, then the AWS profile's, then default."""
    if cfg.region:
        return cfg.region
    if session is not None and session.region_name:
        return session.region_name
    return DEFAULT_REGION


def make_s3_client(cfg: S3Config) -> tuple[S3Client, str]:
    """Create a boto3 S3 client from *cfg*.

    Returns the client together with the region it was bound to.
    """
    session = boto3.Session(profile_name=cfg.profile or None)
    region = resolve_region(cfg, session)
    logger.trace(
        f"Creating S3 client (region={region}, "
        f"endpoint={cfg.endpoint_url or 'default'}, "
        f"profile={cfg.profile or 'default'})"
    )
    client: S3Client = session.client(
        "s3",
        region_name=region,
        endpoint_url=cfg.endpoint_url or None,
    )
    return client, region


def error_code(exc: BaseException) -> str:
    """Return the service error code of a ``ClientError`` (empty otherwise)."""
    if not isinstance(exc, ClientError):
        return ""
    return str(exc.response.get("Error", {}).get("Code", ""))


def is_not_found(exc: BaseException) -> bool:
    """Return True when *exc* is a 404-style ``ClientError``."""
    return error_code(exc) in _NOT_FOUND_CODES
