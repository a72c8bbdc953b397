"""CLI integration tests: argument parsing, dispatch and exit behavior."""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ProfileNotFound
from loguru import logger

from s3ctl.cli import CliApp
from s3ctl.client import StorageClient
from tests.conftest import client_error, make_s3_mock

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def messages() -> Iterator[list[str]]:
    """Capture loguru messages emitted during the test."""
    captured: list[str] = []
    sink_id = logger.add(lambda m: captured.append(m.record["message"]), level="INFO")
    try:
        yield captured
    finally:
        logger.remove(sink_id)


def _run(s3: MagicMock, argv: list[str]) -> None:
    """Run the CLI with a StorageClient backed by *s3*."""
    with patch(
        "s3ctl.cli.open_client", return_value=StorageClient(s3, "us-west-2")
    ):
        CliApp().run(argv)


# ---------------------------------------------------------------------------
# Bucket and object commands
# ---------------------------------------------------------------------------


def test_create_bucket_with_re(s3: MagicMock) -> None:
    _run(s3, ["create-bucket", "new-bucket", "--re", "eu-west-3"])
    s3.create_bucket.assert_called_once_with(
        Bucket="new-bucket",
        CreateBucketConfiguration={"LocationConstraint": "eu-west-3"},
    )


def test_list_buckets_empty(s3: MagicMock, messages: list[str]) -> None:
    s3.list_buckets.return_value = {"Buckets": []}
    _run(s3, ["list-buckets"])
    assert "No buckets found." in messages


def test_list_objects_output(s3: MagicMock, messages: list[str]) -> None:
    s3.list_objects_v2.return_value = {
        "Contents": [{"Key": "a.txt", "Size": 3}],
        "IsTruncated": False,
    }
    _run(s3, ["list-objects", "test-bucket"])
    assert "Objects in Bucket: test-bucket:" in messages
    assert "0: a.txt (3 bytes)" in messages


def test_exist_bucket_missing(s3: MagicMock, messages: list[str]) -> None:
    s3.head_bucket.side_effect = client_error("404", "HeadBucket")
    _run(s3, ["exist-bucket", "nope"])
    assert any("does not exist" in m for m in messages)


def test_get_object_to_file(s3: MagicMock, tmp_path: Path) -> None:
    s3.get_object.return_value = {"Body": io.BytesIO(b"\x00\x01binary")}
    out = tmp_path / "out.bin"
    _run(s3, ["get-object", "test-bucket", "k", "--output", str(out)])
    assert out.read_bytes() == b"\x00\x01binary"


def test_get_object_logs_text(s3: MagicMock, messages: list[str]) -> None:
    s3.get_object.return_value = {"Body": io.BytesIO(b"hello")}
    _run(s3, ["get-object", "test-bucket", "k"])
    assert any(m.endswith("hello") for m in messages)


def test_get_object_binary_body_reports_size(s3: MagicMock) -> None:
    body = b"\xff\xfe\x00binary"
    s3.get_object.return_value = {"Body": io.BytesIO(body)}
    records: list[tuple[str, str]] = []
    sink_id = logger.add(
        lambda m: records.append((m.record["level"].name, m.record["message"])),
        level="INFO",
    )
    try:
        _run(s3, ["get-object", "test-bucket", "blob.bin"])
    finally:
        logger.remove(sink_id)

    warnings = [msg for level, msg in records if level == "WARNING"]
    assert len(warnings) == 1
    assert f"{len(body)} bytes" in warnings[0]
    assert "--output" in warnings[0]
    infos = [msg for level, msg in records if level == "INFO"]
    assert not any("binary" in m or "Object received" in m for m in infos)


def test_create_object_missing_file_exits(s3: MagicMock, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _run(s3, ["create-object", "b", "k", str(tmp_path / "missing.txt")])
    assert "missing.txt" in str(exc_info.value.code)


def test_remote_error_exits_with_message(s3: MagicMock) -> None:
    s3.delete_bucket.side_effect = client_error("BucketNotEmpty", "DeleteBucket")
    with pytest.raises(SystemExit) as exc_info:
        _run(s3, ["delete-bucket", "full"])
    assert "BucketNotEmpty" in str(exc_info.value.code)
    s3.close.assert_called_once()


def test_missing_subcommand_exits() -> None:
    with pytest.raises(SystemExit):
        CliApp().run([])


def test_unknown_profile_exits_with_message() -> None:
    with (
        patch(
            "s3ctl.s3_utils.boto3.Session",
            side_effect=ProfileNotFound(profile="does-not-exist"),
        ),
        pytest.raises(SystemExit) as exc_info,
    ):
        CliApp().run(["--profile", "does-not-exist", "list-buckets"])

    message = str(exc_info.value.code)
    assert message.startswith("Error: create_client failed")
    assert "does-not-exist" in message


def test_global_flags_reach_config(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("s3:\n  region: eu-west-1\n", encoding="utf-8")
    s3 = make_s3_mock()
    s3.list_buckets.return_value = {"Buckets": []}

    with patch(
        "s3ctl.commands._helpers.StorageClient.from_config",
        return_value=StorageClient(s3, "ca-central-1"),
    ) as from_config:
        CliApp().run(
            [
                "--region",
                "ca-central-1",
                "--endpoint-url",
                "http://localhost:9000",
                "--config",
                str(cfg_path),
                "list-buckets",
            ]
        )

    cfg = from_config.call_args.args[0]
    assert cfg.region == "ca-central-1"
    assert cfg.endpoint_url == "http://localhost:9000"


# ---------------------------------------------------------------------------
# Multipart commands
# ---------------------------------------------------------------------------


def test_multipart_upload_reads_stdin(
    s3: MagicMock,
    part_files: list[Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        "sys.stdin", io.StringIO(f"{part_files[0]}\n{part_files[1]}\nEND\n")
    )
    _run(s3, ["multipart-upload", "test-bucket", "big.bin"])

    parts = s3.complete_multipart_upload.call_args.kwargs["MultipartUpload"]["Parts"]
    assert parts == [{"PartNumber": 1, "ETag": "e1"}, {"PartNumber": 2, "ETag": "e2"}]


def test_multipart_failure_leaves_session_and_hints_abort(
    s3: MagicMock,
    part_files: list[Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    s3.upload_part.side_effect = client_error("InternalError", "UploadPart")
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{part_files[0]}\nEND\n"))
    warnings: list[str] = []
    sink_id = logger.add(
        lambda m: warnings.append(m.record["message"]), level="WARNING"
    )
    try:
        with pytest.raises(SystemExit) as exc_info:
            _run(s3, ["multipart-upload", "test-bucket", "big.bin"])
    finally:
        logger.remove(sink_id)

    assert "upload_part" in str(exc_info.value.code)
    s3.abort_multipart_upload.assert_not_called()
    s3.complete_multipart_upload.assert_not_called()
    assert any(
        "s3ctl abort-multipart test-bucket big.bin upload-1" in m for m in warnings
    )


def test_multipart_failure_with_abort_on_error(
    s3: MagicMock,
    part_files: list[Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    s3.upload_part.side_effect = client_error("InternalError", "UploadPart")
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{part_files[0]}\n"))

    with pytest.raises(SystemExit):
        _run(s3, ["multipart-upload", "test-bucket", "big.bin", "--abort-on-error"])

    s3.abort_multipart_upload.assert_called_once_with(
        Bucket="test-bucket", Key="big.bin", UploadId="upload-1"
    )


def test_multipart_initiate_failure_has_nothing_to_abort(
    s3: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    s3.create_multipart_upload.side_effect = client_error(
        "NoSuchBucket", "CreateMultipartUpload"
    )
    monkeypatch.setattr("sys.stdin", io.StringIO("END\n"))

    with pytest.raises(SystemExit) as exc_info:
        _run(s3, ["multipart-upload", "nope", "big.bin", "--abort-on-error"])

    assert "initiate" in str(exc_info.value.code)
    s3.abort_multipart_upload.assert_not_called()
    s3.upload_part.assert_not_called()


def test_list_multiparts_empty(s3: MagicMock, messages: list[str]) -> None:
    s3.list_multipart_uploads.return_value = {"IsTruncated": False}
    _run(s3, ["list-multiparts", "test-bucket"])
    assert "No multipart uploads in progress." in messages


def test_list_multiparts_lists_uploads(s3: MagicMock, messages: list[str]) -> None:
    initiated = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    s3.list_multipart_uploads.return_value = {
        "Uploads": [
            {"Key": "big.bin", "UploadId": "u-1", "Initiated": initiated},
            {"Key": "other.bin", "UploadId": "u-2"},
        ],
        "IsTruncated": False,
    }

    _run(s3, ["list-multiparts", "test-bucket"])

    assert "Multipart uploads in test-bucket:" in messages
    assert (
        "0: big.bin (upload_id=u-1, initiated 2024-01-02T03:04:05+00:00)" in messages
    )
    assert "1: other.bin (upload_id=u-2)" in messages


def test_abort_multipart(s3: MagicMock) -> None:
    _run(s3, ["abort-multipart", "test-bucket", "big.bin", "upload-7"])
    s3.abort_multipart_upload.assert_called_once_with(
        Bucket="test-bucket", Key="big.bin", UploadId="upload-7"
    )
