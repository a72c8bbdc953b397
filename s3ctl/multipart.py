"""Interactive multipart upload: initiate, upload one part per input line, complete.

The upload is strictly sequential.  Part paths are read lazily from a text
stream, one per line, so a failed part stops reading immediately.  Input
ends at the ``END`` sentinel or at end of stream, whichever comes first,
and the upload is then completed with the parts collected so far (possibly
none).

Failures are raised as :class:`MultipartUploadError`; the orchestrator
never aborts the remote session itself.  Callers that want cleanup use
:func:`abort_quietly` with the session carried by the error.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from s3ctl.exceptions import LocalFileError, MultipartUploadError, RemoteCallError
from s3ctl.models import CompletedUpload, PartDescriptor

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from s3ctl.client import StorageClient
    from s3ctl.models import UploadSession

END_SENTINEL = "END"

PHASE_INITIATE = "initiate"
PHASE_UPLOAD_PART = "upload_part"
PHASE_COMPLETE = "complete"


def iter_part_paths(lines: Iterable[str]) -> Iterator[Path]:
    """Yield part file paths from *lines* until ``END`` or end of input.

    Only the trailing line terminator is removed; any other whitespace is
    part of the path.
    """
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line == END_SENTINEL:
            return
        yield Path(line)


class MultipartUploader:
    """Drive one multipart upload against a :class:`StorageClient`."""

    def __init__(self, client: StorageClient) -> None:
        """Bind the uploader to an already configured storage client."""
        self._client = client

    def run(self, bucket: str, key: str, lines: Iterable[str]) -> CompletedUpload:
        """Upload ``bucket/key`` from the part files named in *lines*.

        Raises
        ------
        MultipartUploadError
            When initiation, any part upload or the completion fails.
            ``error.session`` is ``None`` only for an initiation failure.

        """
        try:
            session = self._client.initiate_multipart(bucket, key)
        except RemoteCallError as e:
            raise MultipartUploadError(PHASE_INITIATE, e) from e
        logger.info(
            f"1. Initiated multipart upload of s3://{session.bucket}/{session.key} "
            f"(upload_id={session.upload_id})."
        )

        logger.info(
            f"2. Enter part file names one per line ({END_SENTINEL} to finish):"
        )
        parts = self._upload_parts(session, lines)

        try:
            self._client.complete_multipart(session, parts)
        except RemoteCallError as e:
            raise MultipartUploadError(PHASE_COMPLETE, e, session, parts) from e
        logger.info(f"3. Completed multipart upload ({len(parts)} parts).")
        return CompletedUpload(session=session, parts=parts)

    def _upload_parts(
        self,
        session: UploadSession,
        lines: Iterable[str],
    ) -> list[PartDescriptor]:
        """Upload each listed file as the next part; return the descriptors."""
        parts: list[PartDescriptor] = []
        for path in iter_part_paths(lines):
            part_number = len(parts) + 1
            try:
                etag = self._upload_one(session, part_number, path)
            except (RemoteCallError, LocalFileError) as e:
                raise MultipartUploadError(PHASE_UPLOAD_PART, e, session, parts) from e
            parts.append(PartDescriptor(part_number=part_number, etag=etag))
            logger.info(f"   part {part_number}: {path} (etag={etag})")
        return parts

    def _upload_one(self, session: UploadSession, part_number: int, path: Path) -> str:
        try:
            fh = path.open("rb")
        except OSError as e:
            raise LocalFileError(path, e) from e
        with fh:
            try:
                return self._client.upload_part(session, part_number, fh)
            except OSError as e:
                raise LocalFileError(path, e) from e


def abort_quietly(client: StorageClient, session: UploadSession) -> bool:
    """Best-effort abort of *session*.  Returns True when the abort succeeded.

    An abort failure is logged, not raised: the caller is already handling
    the error that made the abort necessary.
    """
    try:
        client.abort_multipart(session)
    except RemoteCallError as e:
        logger.error(f"Could not abort upload_id={session.upload_id}: {e}")
        return False
    logger.info(f"Aborted multipart upload upload_id={session.upload_id}.")
    return True
