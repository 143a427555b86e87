"""Records derived from converter and prober output."""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterVersion:
    """Version triple reported by ``ffmpeg -version``.

    Fields are ``None`` when the banner could not be parsed in best-effort
    mode, or when the release omits the revision number.
    """

    major: int | None = None
    minor: int | None = None
    revision: int | None = None
    banner: str = ""

    @property
    def parsed(self) -> bool:
        """Whether at least the major and minor numbers were recognized."""
        return self.major is not None and self.minor is not None

    def as_tuple(self) -> tuple[int | None, int | None, int | None]:
        """Return ``(major, minor, revision)``."""
        return self.major, self.minor, self.revision

    def __str__(self) -> str:
        parts = [p for p in self.as_tuple() if p is not None]
        return ".".join(str(p) for p in parts)


@dataclass(frozen=True)
class ProgressSnapshot:
    """State of a running conversion read from its progress log."""

    duration: str
    current: str
    progress: int

    def as_dict(self) -> dict[str, str | int]:
        """Return the snapshot as a mapping."""
        return {"Duration": self.duration, "Current": self.current, "Progress": self.progress}

    def to_json(self) -> str:
        """Return the snapshot serialized as JSON."""
        return json.dumps(self.as_dict())


@dataclass
class ExecutionResult:
    """Result of running a conversion."""

    success: bool
    command: str = ""
    error: str = ""
    output: str = ""
    progress_id: str | None = None
    pid: int | None = None

    @property
    def detached(self) -> bool:
        """Whether the converter was left running in the background."""
        return self.pid is not None


__all__ = ["ConverterVersion", "ExecutionResult", "ProgressSnapshot"]
