"""Configuration management for nested-division.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from .emitter import DEFAULT_TABLE


@dataclass(frozen=True)
class BuildConfig:
    """Settings for one build run."""
    data_dir: Path = Path("./data")
    output: Path = Path("./division.sql")
    sink: str = "sql"  # "sql", "sqlite"
    table: str = DEFAULT_TABLE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BuildConfig":
        return cls(
            data_dir=Path(os.getenv("DIVISION_DATA_DIR", "./data")),
            output=Path(os.getenv("DIVISION_OUTPUT", "./division.sql")),
            sink=os.getenv("DIVISION_SINK", "sql"),
            table=os.getenv("DIVISION_TABLE", DEFAULT_TABLE),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def override(self, **changes) -> "BuildConfig":
        """Copy with the non-None values of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
