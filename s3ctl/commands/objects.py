"""Implementation of the object commands.

``create-object``, ``delete-object``, ``get-object`` and ``list-objects``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from s3ctl.exceptions import LocalFileError

if TYPE_CHECKING:
    import argparse

    from s3ctl.client import StorageClient


def run_create_object(client: StorageClient, args: argparse.Namespace) -> None:
    """Upload a local file as ``bucket/key``."""
    path = Path(args.obj)
    client.put_object(args.bucket, args.key, path)
    logger.info(f"Uploaded {path} to s3://{args.bucket}/{args.key}.")


def run_delete_object(client: StorageClient, args: argparse.Namespace) -> None:
    """Delete ``bucket/key``."""
    client.delete_object(args.bucket, args.key)
    logger.info(f"Deleted s3://{args.bucket}/{args.key}.")


def run_get_object(client: StorageClient, args: argparse.Namespace) -> None:
    """Fetch ``bucket/key`` into ``--output``, or log it when it is text."""
    body = client.get_object(args.bucket, args.key)
    if args.output:
        out_path = Path(args.output)
        try:
            out_path.write_bytes(body)
        except OSError as e:
            raise LocalFileError(out_path, e) from e
        logger.info(
            f"Saved s3://{args.bucket}/{args.key} to {out_path} ({len(body)} bytes)."
        )
        return
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning(
            f"Object s3://{args.bucket}/{args.key} is binary ({len(body)} bytes); "
            "use --output to save it to a file."
        )
        return
    logger.info(f"Object received ({len(body)} bytes):\n{text}")


def run_list_objects(client: StorageClient, args: argparse.Namespace) -> None:
    """Log every object of a bucket (optionally under ``--prefix``)."""
    objects = client.list_objects(args.bucket, args.prefix or "")
    logger.info(f"Objects in Bucket: {args.bucket}:")
    if not objects:
        logger.info("No Objects in the bucket")
        return
    for idx, obj in enumerate(objects):
        logger.info(f"{idx}: {obj.format_display()}")
