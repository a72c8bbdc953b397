"""Per-command implementations for the s3ctl CLI."""
