"""Poll the progress log of a running conversion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sonus.tools.parsers import parse_progress

if TYPE_CHECKING:
    from sonus.models.config import SonusConfig
    from sonus.models.media import ProgressSnapshot

logger = logging.getLogger(__name__)


def read_progress_log(config: SonusConfig, job_id: str) -> str | None:
    """Return the raw log of ``job_id``, or ``None`` if missing, unreadable or empty."""
    path = config.progress_path(job_id)
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        logger.debug("No readable progress log at %s", path)
        return None
    return content or None


def get_progress(config: SonusConfig, job_id: str, *, strict: bool = False) -> ProgressSnapshot | None:
    """Return the latest progress of ``job_id``.

    The log grows while the converter runs, so successive calls see
    increasing positions. A job whose log does not exist yet returns
    ``None``. Logs written before the first status line are reported at 0%
    unless ``strict`` is set, in which case they raise ``ParseError``.
    """
    content = read_progress_log(config, job_id)
    if content is None:
        return None
    return parse_progress(content, strict=strict)


def get_progress_json(config: SonusConfig, job_id: str, *, strict: bool = False) -> str | None:
    """Return :func:`get_progress` serialized as JSON."""
    snapshot = get_progress(config, job_id, strict=strict)
    return snapshot.to_json() if snapshot is not None else None


__all__ = ["get_progress", "get_progress_json", "read_progress_log"]
