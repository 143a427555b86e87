"""Fluent converter command builder and output parsers."""

from .backend import ConversionBuilder, convert, execute, get_progress, get_progress_json, get_thumbnails
from .models import (
    ConverterVersion,
    Err,
    ExecutionResult,
    ExternalProcessError,
    InvalidArgumentError,
    MediaInfoFormat,
    Ok,
    ParseError,
    ProgressSnapshot,
    SonusConfig,
    SonusError,
    ToolContext,
    TrackType,
)
from .tools import (
    can_decode,
    can_encode,
    get_converter_version,
    get_media_info,
    get_supported_audio_decoders,
    get_supported_audio_encoders,
    get_supported_formats,
    get_supported_video_decoders,
    get_supported_video_encoders,
)

__all__ = [
    "ConversionBuilder",
    "ConverterVersion",
    "Err",
    "ExecutionResult",
    "ExternalProcessError",
    "InvalidArgumentError",
    "MediaInfoFormat",
    "Ok",
    "ParseError",
    "ProgressSnapshot",
    "SonusConfig",
    "SonusError",
    "ToolContext",
    "TrackType",
    "can_decode",
    "can_encode",
    "convert",
    "execute",
    "get_converter_version",
    "get_media_info",
    "get_progress",
    "get_progress_json",
    "get_supported_audio_decoders",
    "get_supported_audio_encoders",
    "get_supported_formats",
    "get_supported_video_decoders",
    "get_supported_video_encoders",
    "get_thumbnails",
]
