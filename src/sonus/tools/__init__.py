"""Converter and prober helper utilities."""

from . import capabilities, parsers, probe
from .capabilities import (
    can_decode,
    can_encode,
    get_converter_version,
    get_supported_audio_decoders,
    get_supported_audio_encoders,
    get_supported_formats,
    get_supported_video_decoders,
    get_supported_video_encoders,
)
from .cli import join_command, run_ffmpeg, run_ffprobe
from .helpers import progress_percentage, seconds_to_timestamp, timestamp_to_seconds
from .probe import get_media_info

__all__ = [
    "can_decode",
    "can_encode",
    "capabilities",
    "get_converter_version",
    "get_media_info",
    "get_supported_audio_decoders",
    "get_supported_audio_encoders",
    "get_supported_formats",
    "get_supported_video_decoders",
    "get_supported_video_encoders",
    "join_command",
    "parsers",
    "probe",
    "progress_percentage",
    "run_ffmpeg",
    "run_ffprobe",
    "seconds_to_timestamp",
    "timestamp_to_seconds",
]
