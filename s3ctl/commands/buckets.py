"""Implementation of the bucket commands.

``create-bucket``, ``delete-bucket``, ``exist-bucket`` and ``list-buckets``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    import argparse

    from s3ctl.client import StorageClient


def run_create_bucket(client: StorageClient, args: argparse.Namespace) -> None:
    """Create a bucket in the ``--re`` region, or the client's region."""
    location = args.location or client.region
    client.create_bucket(args.bucket, location)
    logger.info(f"Bucket {args.bucket!r} created in {location}.")


def run_delete_bucket(client: StorageClient, args: argparse.Namespace) -> None:
    """Delete an (empty) bucket."""
    client.delete_bucket(args.bucket)
    logger.info(f"Bucket {args.bucket!r} deleted.")


def run_exist_bucket(client: StorageClient, args: argparse.Namespace) -> None:
    """Report whether a bucket exists and is accessible."""
    if client.bucket_exists(args.bucket):
        logger.info(f"Bucket {args.bucket!r} exists.")
    else:
        logger.info(f"Bucket {args.bucket!r} does not exist.")


def run_list_buckets(client: StorageClient, _args: argparse.Namespace) -> None:
    """Log every bucket owned by the caller."""
    buckets = client.list_buckets()
    logger.info("List of Buckets:")
    if not buckets:
        logger.info("No buckets found.")
        return
    for idx, bucket in enumerate(buckets):
        logger.info(f"{idx}: {bucket.format_display()}")
