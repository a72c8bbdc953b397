"""Configuration loading with priority: CLI flags > env > config file > defaults."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel

CONFIG_DIR = Path.home() / ".config" / "s3ctl"
CONFIG_PATH = CONFIG_DIR / "config.yaml"

DEFAULT_REGION = "us-west-2"
"""Region used when neither flags, env, config nor the AWS profile name one."""


def get_config_path(config_path: Path | None = None) -> Path:
    """Return path to config file.

    Uses *config_path* if provided, otherwise S3CTL_CONFIG env var,
    otherwise default CONFIG_PATH.
    """
    if config_path is not None:
        return config_path
    path = os.environ.get("S3CTL_CONFIG")
    return Path(path) if path else CONFIG_PATH


def _load_raw_yaml(path: Path) -> dict[str, object]:
    """Load a YAML file and return its top-level mapping (or empty dict)."""
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        logger.warning(f"Invalid config format in {path}; expected mapping.")
        return {}
    return data


class S3Config(BaseModel):
    """Connection settings for the storage service.

    Every field is optional: credentials and anything left unset are
    resolved by boto3's own provider chain.
    """

    region: str | None = None
    endpoint_url: str | None = None
    profile: str | None = None

    @classmethod
    def _from_s3_section(cls, data: dict[str, object]) -> S3Config:
        """Build from a raw YAML top-level dict (reads the ``s3`` key)."""
        section = data.get("s3", {})
        if not isinstance(section, dict):
            return cls()
        return cls(
            **{
                k: str(v)
                for k, v in section.items()
                if k in cls.model_fields and v is not None
            }
        )

    @classmethod
    def from_file(cls, path: Path = CONFIG_PATH) -> S3Config:
        """Load config from a YAML file.  Returns empty config if file is missing."""
        if not path.is_file():
            return cls()
        logger.trace(f"Loading config from {path}")
        return cls._from_s3_section(_load_raw_yaml(path))

    @classmethod
    def from_env(cls) -> S3Config:
        """Build config from environment variables."""
        return cls(
            region=os.environ.get("S3CTL_REGION"),
            endpoint_url=os.environ.get("S3CTL_ENDPOINT_URL"),
            profile=os.environ.get("S3CTL_PROFILE"),
        )

    def merge(self, override: S3Config) -> S3Config:
        """Return a new config where *override* values take priority over self.

        Only non-empty / non-None values from *override* win.
        """
        return S3Config(
            region=override.region or self.region,
            endpoint_url=override.endpoint_url or self.endpoint_url,
            profile=override.profile or self.profile,
        )

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        overrides: S3Config | None = None,
    ) -> S3Config:
        """Merge file, env and CLI overrides: file < env < overrides."""
        file_cfg = cls.from_file(get_config_path(config_path))
        cfg = file_cfg.merge(cls.from_env())
        if overrides is not None:
            cfg = cfg.merge(overrides)
        return cfg
