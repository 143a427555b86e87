"""Tool locations and runtime flags."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import Verbosity

ENV_PREFIX = "SONUS_"
PROGRESS_SUFFIX = ".sonustmp"  #: Extension of progress log files.


class SonusConfig(BaseSettings):
    """Where the converter and prober live and how jobs report progress.

    Fields not given explicitly are read from ``SONUS_*`` environment
    variables. Instances are immutable and passed explicitly to every
    operation, so several configurations can be used side by side.
    """

    ffmpeg: str = Field(default="ffmpeg", description="Path or name of the converter binary.")
    ffprobe: str = Field(default="ffprobe", description="Path or name of the prober binary.")
    tmp_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Directory holding progress log files.",
    )
    progress: bool = Field(default=False, description="Redirect converter output to a progress file.")
    verbosity: Verbosity = Field(default=Verbosity.QUIET, description="Status reporting level.")

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="forbid")

    @field_validator("ffmpeg", "ffprobe")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("binary path must not be empty")
        return v

    @field_validator("tmp_dir")
    @classmethod
    def _expand_tmp_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("verbosity", mode="before")
    @classmethod
    def _parse_verbosity(cls, v: object) -> Verbosity:
        """Accept enum members, integers or case-insensitive level names."""
        if isinstance(v, Verbosity):
            return v
        if isinstance(v, int):
            return Verbosity(v)
        if isinstance(v, str):
            token = v.strip()
            try:
                return Verbosity[token.upper()]
            except KeyError:
                try:
                    return Verbosity(int(token))
                except (ValueError, KeyError):
                    pass
        raise ValueError("verbosity must be one of quiet, commands, output, or 0/1/2")

    @classmethod
    def from_env(cls, **overrides: Any) -> SonusConfig:
        """Build a config from the environment with keyword ``overrides`` on top.

        ``None`` overrides are ignored so unset CLI options fall through.
        """
        return cls(**{k: v for k, v in overrides.items() if v is not None})

    def progress_path(self, job_id: str) -> Path:
        """Return the progress log path for ``job_id``."""
        return self.tmp_dir / f"{job_id}{PROGRESS_SUFFIX}"


__all__ = ["ENV_PREFIX", "PROGRESS_SUFFIX", "SonusConfig"]
