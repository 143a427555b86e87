"""Per-track argument helpers."""

from sonus.models.types import TrackType

BITRATE_UNIT = "k"  #: Suffix appended to bitrates, kilobits per second.


def codec_flag(track: TrackType) -> tuple[str, ...]:
    """Return codec flag for a track type, e.g. ``-c:a``."""
    return (f"-c:{track.stream_key}",)


def bitrate_flag(track: TrackType) -> tuple[str, ...]:
    """Return bitrate flag for a track type, e.g. ``-b:v``."""
    return (f"-b:{track.stream_key}",)


def codec(track: TrackType, name: str) -> tuple[str, ...]:
    """Return the token selecting encoder ``name`` for ``track``."""
    return (*codec_flag(track), name)


def bitrate(track: TrackType, kbps: str) -> tuple[str, ...]:
    """Return the token setting a constant bitrate for ``track``."""
    return (*bitrate_flag(track), f"{kbps}{BITRATE_UNIT}")
