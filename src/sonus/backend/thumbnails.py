"""Extract scene-change thumbnails from a video."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sonus.models.errors import ExternalProcessError, InvalidArgumentError
from sonus.models.result import Err, Ok, Result
from sonus.models.types import Verbosity
from sonus.tools.cli import run_ffmpeg

from .builder.command_args import INPUT_FLAG, VARIABLE_FRAME_RATE, VIDEO_FILTER, VIDEO_FRAMES

if TYPE_CHECKING:
    from sonus.models.context import ToolContext

SCENE_CHANGE_FILTER = r"select=gt(scene\,0.5)"  #: Keep frames that differ strongly from the previous one.
DEFAULT_COUNT = 5
DEFAULT_IMAGE_FORMAT = "png"

logger = logging.getLogger(__name__)


def thumbnail_args(path: str, output_prefix: str, count: int, fmt: str = DEFAULT_IMAGE_FORMAT) -> tuple[str, ...]:
    """Return converter arguments writing ``<prefix>01.<fmt>``, ``<prefix>02.<fmt>``, ..."""
    return (
        *INPUT_FLAG,
        path,
        *VIDEO_FILTER,
        SCENE_CHANGE_FILTER,
        *VIDEO_FRAMES,
        str(count),
        *VARIABLE_FRAME_RATE,
        f"{output_prefix}%02d.{fmt}",
    )


def get_thumbnails(
    ctx: ToolContext,
    path: str,
    output_prefix: str,
    count: int = DEFAULT_COUNT,
    fmt: str = DEFAULT_IMAGE_FORMAT,
) -> Result[bool]:
    """Write up to ``count`` thumbnails taken at scene changes.

    Returns ``Ok(True)`` once the converter exits successfully; the image
    files themselves are not checked.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        return Err(InvalidArgumentError(f"Thumbnail count must be a positive integer, got {count!r}"))
    try:
        run_ffmpeg(
            ctx.config,
            thumbnail_args(path, output_prefix, count, fmt),
            status_callback=ctx.status_callback,
            list_cmd=ctx.config.verbosity >= Verbosity.COMMANDS,
        )
    except ExternalProcessError as e:
        logger.warning("Thumbnail extraction failed for %s", path, exc_info=e)
        return Err(e)
    return Ok(True)


__all__ = ["get_thumbnails", "thumbnail_args"]
