"""Utility functions for time parsing and status emission."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
else:
    from collections import abc

    Callable = abc.Callable

from pytimeparse2 import parse as parse_duration

from sonus.models.types import Verbosity

logger = logging.getLogger(__name__)

_MAX_TIMESTAMP_FIELDS = 3
_PERCENT_MAX = 100


def timestamp_to_seconds(text: str) -> float:
    """Convert ``HH:MM:SS[.ff]`` (or a shorter ``MM:SS``/``SS``) to seconds.

    The seconds field may carry a fraction; minutes and hours must be whole
    numbers.

    Raises:
        ValueError: If ``text`` is not a timestamp.

    """
    fields = text.strip().split(":")
    if not fields[0] or len(fields) > _MAX_TIMESTAMP_FIELDS:
        raise ValueError(f"Invalid timestamp: {text!r}")
    fields.reverse()
    total = float(fields[0])
    if len(fields) > 1:
        total += int(fields[1]) * 60
    if len(fields) == _MAX_TIMESTAMP_FIELDS:
        total += int(fields[2]) * 3600
    return total


def seconds_to_timestamp(seconds: float) -> str:
    """Format whole seconds as ``HH:MM:SS``.

    Fractions are dropped, so only integer inputs round-trip through
    :func:`timestamp_to_seconds` exactly.
    """
    whole = int(seconds)
    if whole < 0:
        raise ValueError(f"Negative duration: {seconds}")
    h, remainder = divmod(whole, 3600)
    m, s = divmod(remainder, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def progress_percentage(current: float, total: float) -> int:
    """Return ``current / total`` as a whole percentage in ``[0, 100]``.

    Halves round up. A non-positive ``total`` yields ``0``.
    """
    if total <= 0:
        return 0
    percent = math.floor(current / total * _PERCENT_MAX + 0.5)
    return max(0, min(_PERCENT_MAX, percent))


def parse_timespan_to_seconds(s: str | None) -> float | None:
    """Convert a human time span such as ``"90s"`` or ``"1m30s"`` to seconds.

    Raises:
        ValueError: If ``s`` cannot be parsed.

    """
    if not s:
        return None
    parsed = parse_duration(s)
    if parsed is None:
        raise ValueError(f"Unable to parse timespan: {s}")
    return float(parsed)


def emit_status(message: str, *, status_callback: Callable[[str], None] | None) -> None:
    """Send ``message`` to the CLI, logger, or a custom callback.

    * ``print`` - direct terminal output.
    * ``None`` - route messages through ``logger.info``.
    * Any other ``Callable[[str], None]`` - for tests or embedding code.
    """
    if status_callback is None:
        logger.info(message)
        return
    if status_callback is print:
        print(  # noqa: T201
            message,
            end="" if "\r" in message and "\n" not in message else "\n",
            flush=True,
        )
        return
    status_callback(message)


def format_action_label(*, dry_run: bool = False, cached: bool = False, detached: bool = False) -> str:
    """Return a short action label for command banners."""
    if cached:
        return "Cached"
    if dry_run:
        return "Command"
    if detached:
        return "Launching"
    return "Running"


def maybe_log_command(
    *,
    verbosity: Verbosity,
    dry_run: bool,
    status_callback: Callable[[str], None] | None,
    banner: str,
) -> None:
    """Log a command banner at ``Verbosity.COMMANDS`` and above, or on dry runs."""
    if verbosity >= Verbosity.COMMANDS or dry_run:
        emit_status(banner, status_callback=status_callback)


__all__ = [
    "emit_status",
    "format_action_label",
    "maybe_log_command",
    "parse_timespan_to_seconds",
    "progress_percentage",
    "seconds_to_timestamp",
    "timestamp_to_seconds",
]
