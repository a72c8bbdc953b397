"""Implementation of the multipart commands.

``multipart-upload``, ``list-multiparts`` and ``abort-multipart``.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from loguru import logger

from s3ctl.exceptions import MultipartUploadError
from s3ctl.models import UploadSession
from s3ctl.multipart import MultipartUploader, abort_quietly

if TYPE_CHECKING:
    import argparse

    from s3ctl.client import StorageClient


def run_multipart_upload(
    client: StorageClient,
    args: argparse.Namespace,
    stdin: TextIO | None = None,
) -> None:
    """Upload ``bucket/key`` from part files named on standard input.

    On failure the open session is either aborted (``--abort-on-error``)
    or reported so it can be aborted later; the error is then re-raised.
    """
    lines = stdin if stdin is not None else sys.stdin
    try:
        MultipartUploader(client).run(args.bucket, args.key, lines)
    except MultipartUploadError as e:
        if e.session is not None:
            _handle_open_session(client, e.session, abort=args.abort_on_error)
        raise


def _handle_open_session(
    client: StorageClient,
    session: UploadSession,
    *,
    abort: bool,
) -> None:
    if abort and abort_quietly(client, session):
        return
    logger.warning(
        f"Multipart upload upload_id={session.upload_id} is left open. "
        f"Abort it with: s3ctl abort-multipart {session.bucket} {session.key} "
        f"{session.upload_id}"
    )


def run_list_multiparts(client: StorageClient, args: argparse.Namespace) -> None:
    """Log in-progress multipart uploads of a bucket."""
    uploads = client.list_multipart_uploads(args.bucket)
    if not uploads:
        logger.info("No multipart uploads in progress.")
        return
    logger.info(f"Multipart uploads in {args.bucket}:")
    for idx, upload in enumerate(uploads):
        logger.info(f"{idx}: {upload.format_display()}")


def run_abort_multipart(client: StorageClient, args: argparse.Namespace) -> None:
    """Abort an in-progress multipart upload by its upload id."""
    session = UploadSession(bucket=args.bucket, key=args.key, upload_id=args.upload_id)
    client.abort_multipart(session)
    logger.info(f"Aborted multipart upload upload_id={args.upload_id}.")
