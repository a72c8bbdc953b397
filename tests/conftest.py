"""Shared pytest fixtures for s3ctl tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from s3ctl.client import StorageClient

if TYPE_CHECKING:
    from pathlib import Path


def client_error(code: str, operation: str = "Operation") -> ClientError:
    """Build a botocore ``ClientError`` with the given service error code."""
    return ClientError(
        {"Error": {"Code": code, "Message": f"simulated {code}"}},
        operation,
    )


def make_s3_mock(etags: list[str] | None = None) -> MagicMock:
    """Create a mock boto3 S3 client with a working multipart happy path.

    ``upload_part`` answers with *etags* in order (``e1``, ``e2``, ...
    by default).
    """
    s3 = MagicMock()
    s3.create_multipart_upload.return_value = {
        "Bucket": "test-bucket",
        "Key": "big.bin",
        "UploadId": "upload-1",
    }
    s3.upload_part.side_effect = [
        {"ETag": etag} for etag in (etags or [f"e{i}" for i in range(1, 11)])
    ]
    s3.complete_multipart_upload.return_value = {}
    return s3


@pytest.fixture
def s3() -> MagicMock:
    """Mock boto3 S3 client."""
    return make_s3_mock()


@pytest.fixture
def storage(s3: MagicMock) -> StorageClient:
    """StorageClient wrapping the mock S3 client."""
    return StorageClient(s3, "us-west-2")


@pytest.fixture
def part_files(tmp_path: Path) -> list[Path]:
    """Three small local files usable as upload parts."""
    paths = []
    for i, name in enumerate(["fileA.bin", "fileB.bin", "fileC.bin"]):
        path = tmp_path / name
        path.write_bytes(bytes([i]) * 16)
        paths.append(path)
    return paths


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config and S3CTL_* variables out of every test."""
    for var in ("S3CTL_REGION", "S3CTL_ENDPOINT_URL", "S3CTL_PROFILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("S3CTL_CONFIG", str(tmp_path / "no-config.yaml"))
