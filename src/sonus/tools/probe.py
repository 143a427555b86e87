"""Prober helpers."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from sonus.models.errors import ParseError
from sonus.models.types import MediaInfoFormat, Verbosity

from .cli import run_ffprobe

if TYPE_CHECKING:
    from sonus.models.context import ToolContext

_QUIET = ["-v", "quiet"]
_PRINT_FORMAT = ["-print_format"]
_SHOW_FORMAT_AND_STREAMS = ["-show_format", "-show_streams", "-pretty"]
_INPUT_PREFIX = "-i "

logger = logging.getLogger(__name__)


def normalize_input(path: str) -> str:
    """Drop a leading ``-i `` that callers sometimes pass along with the path."""
    if path.startswith(_INPUT_PREFIX):
        return path[len(_INPUT_PREFIX) :]
    return path


def media_info_args(path: str, fmt: MediaInfoFormat = MediaInfoFormat.JSON) -> list[str]:
    """Return prober arguments reporting format and streams of ``path``."""
    return [*_QUIET, *_PRINT_FORMAT, fmt.value, *_SHOW_FORMAT_AND_STREAMS, "-i", normalize_input(path)]


def get_media_info(
    ctx: ToolContext,
    path: str,
    fmt: MediaInfoFormat | str = MediaInfoFormat.JSON,
    *,
    strict: bool = True,
) -> dict[str, Any] | str:
    """Describe the container and streams of ``path``.

    JSON reports are decoded into a mapping; XML and CSV reports are returned
    as text.

    Raises:
        ExternalProcessError: If the prober is missing or fails.
        ParseError: If a JSON report cannot be decoded in strict mode.

    """
    fmt = MediaInfoFormat(fmt)
    out = run_ffprobe(
        ctx.config,
        media_info_args(path, fmt),
        status_callback=ctx.status_callback,
        list_cmd=ctx.config.verbosity >= Verbosity.COMMANDS,
    )
    if fmt is not MediaInfoFormat.JSON:
        return out
    try:
        data = json.loads(out)
    except json.JSONDecodeError as e:
        if strict:
            raise ParseError(f"Prober returned invalid JSON: {e}", text=out) from e
        logger.warning("Prober returned invalid JSON for %s", path)
        return {}
    if not isinstance(data, dict):
        if strict:
            raise ParseError("Prober JSON report is not an object", text=out)
        return {}
    return data


__all__ = ["get_media_info", "media_info_args", "normalize_input"]
