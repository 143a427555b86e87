"""Context shared by introspection queries and job execution."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Self

from diskcache import Cache

from .config import SonusConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

_CACHE_DIR = Path(os.getenv("SONUS_CACHE", tempfile.gettempdir())) / "sonus-cache"


def open_cache(directory: str | Path | None = None) -> Cache:
    """Return a disk cache for capability listings."""
    return Cache(str(directory or _CACHE_DIR))


@dataclass(slots=True)
class ToolContext:
    """Configuration plus optional cache and status routing.

    ``cache`` is ``None`` by default, in which case every query runs the
    external binary again.
    """

    config: SonusConfig = field(default_factory=SonusConfig.from_env)
    cache: Cache | None = None
    status_callback: Callable[[str], None] | None = None

    def close(self) -> None:
        """Close any open resources."""
        if self.cache is not None:
            self.cache.close()

    def __enter__(self) -> Self:
        """Return ``self`` when entering a context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close resources when exiting a context."""
        self.close()

    def __del__(self) -> None:  # pragma: no cover - cleanup
        """Ensure cache is closed on garbage collection."""
        with suppress(Exception):
            self.close()


__all__ = ["ToolContext", "open_cache"]
