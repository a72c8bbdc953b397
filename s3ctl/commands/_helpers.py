"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from s3ctl.client import StorageClient
from s3ctl.config import S3Config

if TYPE_CHECKING:
    import argparse


def load_config(args: argparse.Namespace) -> S3Config:
    """Resolve settings from the config file, env and global CLI flags."""
    overrides = S3Config(
        region=args.region,
        endpoint_url=args.endpoint_url,
        profile=args.profile,
    )
    config_path = Path(args.config) if args.config else None
    return S3Config.load(config_path=config_path, overrides=overrides)


def open_client(args: argparse.Namespace) -> StorageClient:
    """Build the storage client used for the whole invocation."""
    return StorageClient.from_config(load_config(args))
