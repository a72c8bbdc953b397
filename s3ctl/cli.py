"""CLI entry point for s3ctl."""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from s3ctl.commands._helpers import open_client
from s3ctl.commands.buckets import (
    run_create_bucket,
    run_delete_bucket,
    run_exist_bucket,
    run_list_buckets,
)
from s3ctl.commands.multipart import (
    run_abort_multipart,
    run_list_multiparts,
    run_multipart_upload,
)
from s3ctl.commands.objects import (
    run_create_object,
    run_delete_object,
    run_get_object,
    run_list_objects,
)
from s3ctl.exceptions import S3ctlError

if TYPE_CHECKING:
    from collections.abc import Callable

    from s3ctl.client import StorageClient

    _Handler = Callable[[StorageClient, argparse.Namespace], None]


class CliApp:
    """Command-line interface for s3ctl."""

    def __init__(self) -> None:
        """Initialize parser and command definitions."""
        self._parser = self._build_parser()
        self._handlers: dict[str, _Handler] = {
            "create-bucket": run_create_bucket,
            "delete-bucket": run_delete_bucket,
            "exist-bucket": run_exist_bucket,
            "list-buckets": run_list_buckets,
            "list-objects": run_list_objects,
            "create-object": run_create_object,
            "delete-object": run_delete_object,
            "get-object": run_get_object,
            "multipart-upload": run_multipart_upload,
            "list-multiparts": run_list_multiparts,
            "abort-multipart": run_abort_multipart,
        }

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Object storage (S3) command-line client.",
        )
        parser.add_argument(
            "--region",
            "-r",
            default=None,
            help="Region to connect to (overrides S3CTL_REGION and config).",
        )
        parser.add_argument(
            "--endpoint-url",
            default=None,
            help="Custom endpoint for S3-compatible services.",
        )
        parser.add_argument(
            "--profile",
            default=None,
            help="AWS profile name to take credentials from.",
        )
        parser.add_argument(
            "--config",
            default=None,
            help=(
                "Path to YAML config (default: ~/.config/s3ctl/config.yaml "
                "or S3CTL_CONFIG)."
            ),
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        self._add_bucket_parsers(subparsers)
        self._add_object_parsers(subparsers)
        self._add_multipart_parsers(subparsers)

        return parser

    def _add_bucket_parsers(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the bucket command parsers."""
        parser = subparsers.add_parser("create-bucket", help="Create a bucket.")
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument(
            "--re",
            dest="location",
            default=None,
            help="Bucket location (defaults to the resolved region).",
        )

        parser = subparsers.add_parser("delete-bucket", help="Delete an empty bucket.")
        parser.add_argument("bucket", help="Bucket name.")

        parser = subparsers.add_parser(
            "exist-bucket",
            help="Check whether a bucket exists and is accessible.",
        )
        parser.add_argument("bucket", help="Bucket name.")

        subparsers.add_parser("list-buckets", help="List all buckets.")

    def _add_object_parsers(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the object command parsers."""
        parser = subparsers.add_parser("list-objects", help="List objects in a bucket.")
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument(
            "--prefix",
            default=None,
            help="Only list keys starting with this prefix.",
        )

        parser = subparsers.add_parser(
            "create-object",
            help="Upload a local file as an object.",
        )
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument("key", help="Object key.")
        parser.add_argument("obj", help="Path to the local file.")

        parser = subparsers.add_parser("delete-object", help="Delete an object.")
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument("key", help="Object key.")

        parser = subparsers.add_parser("get-object", help="Download an object.")
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument("key", help="Object key.")
        parser.add_argument(
            "--output",
            "-o",
            default=None,
            help="Write the object to this file instead of logging its text.",
        )

    def _add_multipart_parsers(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the multipart command parsers."""
        parser = subparsers.add_parser(
            "multipart-upload",
            help=(
                "Upload an object in parts. Part file paths are read from "
                "stdin, one per line; END or end of input completes the upload."
            ),
        )
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument("key", help="Object key.")
        parser.add_argument(
            "--abort-on-error",
            action="store_true",
            help="Abort the remote upload session when a step fails.",
        )

        parser = subparsers.add_parser(
            "list-multiparts",
            help="List in-progress multipart uploads of a bucket.",
        )
        parser.add_argument("bucket", help="Bucket name.")

        parser = subparsers.add_parser(
            "abort-multipart",
            help="Abort an in-progress multipart upload.",
        )
        parser.add_argument("bucket", help="Bucket name.")
        parser.add_argument("key", help="Object key.")
        parser.add_argument("upload_id", help="Upload ID to abort.")

    def _run_command(self, args: argparse.Namespace) -> None:
        """Dispatch parsed args to the target command implementation."""
        handler = self._handlers.get(args.command)
        if handler is None:
            sys.exit(f"Unknown command: {args.command}")
        with open_client(args) as client:
            handler(client, args)

    def run(self, argv: list[str] | None = None) -> None:
        """Run the CLI with the given arguments."""
        args = self._parser.parse_args(argv)
        try:
            self._run_command(args)
        except S3ctlError as e:
            sys.exit(f"Error: {e}")


def main(argv: list[str] | None = None) -> None:
    """Compatibility entry point for setuptools/CLI wrappers."""
    CliApp().run(argv)


if __name__ == "__main__":
    main()
