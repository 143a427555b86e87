"""Converter version and capability queries."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from sonus.models.types import TrackType, Verbosity

from . import parsers
from .cli import cache_key, join_command, run_ffmpeg
from .helpers import format_action_label, maybe_log_command

if TYPE_CHECKING:
    from sonus.models.context import ToolContext
    from sonus.models.media import ConverterVersion
    from sonus.models.types import MuxSupport

VERSION_ARGS = ["-version"]
FORMATS_ARGS = ["-formats"]
ENCODERS_ARGS = ["-encoders"]
DECODERS_ARGS = ["-decoders"]

logger = logging.getLogger(__name__)


def _listing(ctx: ToolContext, args: list[str]) -> str:
    """Run the converter with ``args``, going through the cache when one is set."""
    key = None
    if ctx.cache is not None:
        binary = shutil.which(ctx.config.ffmpeg) or ctx.config.ffmpeg
        key = cache_key([binary, *args])
        cached = ctx.cache.get(key)
        if isinstance(cached, str):
            logger.debug("Cache hit for %s", args)
            maybe_log_command(
                verbosity=ctx.config.verbosity,
                dry_run=False,
                status_callback=ctx.status_callback,
                banner=f"{format_action_label(cached=True)}: {join_command(ctx.config.ffmpeg, args)}",
            )
            return cached
    out = run_ffmpeg(
        ctx.config,
        args,
        status_callback=ctx.status_callback,
        list_cmd=ctx.config.verbosity >= Verbosity.COMMANDS,
    )
    if key is not None and ctx.cache is not None:
        ctx.cache[key] = out
    return out


def get_converter_version(ctx: ToolContext, *, strict: bool = True) -> ConverterVersion:
    """Return the installed converter's version."""
    return parsers.parse_version(_listing(ctx, VERSION_ARGS), strict=strict)


def get_supported_formats(ctx: ToolContext, *, strict: bool = True) -> dict[str, MuxSupport]:
    """Return every container format with its demux/mux support."""
    return parsers.parse_formats(_listing(ctx, FORMATS_ARGS), strict=strict)


def _codecs(ctx: ToolContext, args: list[str], track: TrackType, *, strict: bool) -> list[str]:
    return parsers.codec_names(_listing(ctx, args), track, strict=strict)


def get_supported_audio_encoders(ctx: ToolContext, *, strict: bool = True) -> list[str]:
    """Return names of the audio encoders the converter provides."""
    return _codecs(ctx, ENCODERS_ARGS, TrackType.AUDIO, strict=strict)


def get_supported_video_encoders(ctx: ToolContext, *, strict: bool = True) -> list[str]:
    """Return names of the video encoders the converter provides."""
    return _codecs(ctx, ENCODERS_ARGS, TrackType.VIDEO, strict=strict)


def get_supported_audio_decoders(ctx: ToolContext, *, strict: bool = True) -> list[str]:
    """Return names of the audio decoders the converter provides."""
    return _codecs(ctx, DECODERS_ARGS, TrackType.AUDIO, strict=strict)


def get_supported_video_decoders(ctx: ToolContext, *, strict: bool = True) -> list[str]:
    """Return names of the video decoders the converter provides."""
    return _codecs(ctx, DECODERS_ARGS, TrackType.VIDEO, strict=strict)


def can_encode(ctx: ToolContext, name: str, *, strict: bool = True) -> bool:
    """Return True if ``name`` is an audio or video encoder."""
    names = get_supported_audio_encoders(ctx, strict=strict) + get_supported_video_encoders(ctx, strict=strict)
    return name in names


def can_decode(ctx: ToolContext, name: str, *, strict: bool = True) -> bool:
    """Return True if ``name`` is an audio or video decoder."""
    names = get_supported_audio_decoders(ctx, strict=strict) + get_supported_video_decoders(ctx, strict=strict)
    return name in names


__all__ = [
    "can_decode",
    "can_encode",
    "get_converter_version",
    "get_supported_audio_decoders",
    "get_supported_audio_encoders",
    "get_supported_formats",
    "get_supported_video_decoders",
    "get_supported_video_encoders",
]
