"""Parsers for the converter's textual output.

Each parser takes raw text and a ``strict`` flag. Strict parsing raises
:class:`~sonus.models.errors.ParseError` when the text does not look like the
expected listing; best-effort parsing returns whatever could be recognized.
"""

from __future__ import annotations

import logging
import re

from sonus.models.errors import ParseError
from sonus.models.media import ConverterVersion, ProgressSnapshot
from sonus.models.types import MuxSupport, TrackType

from .helpers import progress_percentage, timestamp_to_seconds

logger = logging.getLogger(__name__)

VERSION_RE = re.compile(r"ffmpeg version n?(?P<major>\d{1,3})\.(?P<minor>\d{1,3})(?:\.(?P<revision>\d{1,3}))?")
FORMAT_LINE_RE = re.compile(r"^ (?P<mux>D | E|DE)[ d]? +(?P<format>\S+)", re.MULTILINE)
CODEC_LINE_RE = re.compile(r"^ (?P<kind>[AVS])[.\w]{5} (?P<name>\w[\w.-]*)", re.MULTILINE)
DURATION_RE = re.compile(r"Duration: (.*?), start:")
TIME_RE = re.compile(r"time=(.*?) bitrate")

_KIND_BY_TRACK = {TrackType.AUDIO: "A", TrackType.VIDEO: "V"}


def _excerpt(text: str, limit: int = 80) -> str:
    first = text.strip().splitlines()[0] if text.strip() else ""
    return first if len(first) <= limit else f"{first[:limit]}..."


def parse_version(text: str, *, strict: bool = True) -> ConverterVersion:
    """Parse ``ffmpeg version MAJOR.MINOR[.REVISION]`` from the banner line."""
    banner = text.strip().splitlines()[0].strip() if text.strip() else ""
    match = VERSION_RE.search(banner)
    if match is None:
        if strict:
            raise ParseError(f"Unrecognized version banner: {_excerpt(text)!r}", text=text)
        logger.warning("Unrecognized version banner: %r", _excerpt(text))
        return ConverterVersion(banner=banner)
    revision = match.group("revision")
    return ConverterVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        revision=int(revision) if revision is not None else None,
        banner=banner,
    )


def parse_formats(text: str, *, strict: bool = True) -> dict[str, MuxSupport]:
    """Parse a ``-formats`` listing into ``{name: MuxSupport}``.

    Comma separated aliases such as ``matroska,webm`` become one entry each.
    """
    formats: dict[str, MuxSupport] = {}
    for match in FORMAT_LINE_RE.finditer(text):
        support = MuxSupport(match.group("mux").strip())
        for name in match.group("format").split(","):
            if name:
                formats[name] = support
    if not formats and strict:
        raise ParseError(f"No formats found in listing: {_excerpt(text)!r}", text=text)
    return formats


def parse_codec_listing(text: str, *, strict: bool = True) -> dict[str, list[str]]:
    """Group ``-encoders``/``-decoders`` entries by capability marker.

    Returns a mapping of ``"A"``, ``"V"`` and ``"S"`` to codec names in
    listing order.
    """
    grouped: dict[str, list[str]] = {"A": [], "V": [], "S": []}
    for match in CODEC_LINE_RE.finditer(text):
        grouped[match.group("kind")].append(match.group("name"))
    if strict and not any(grouped.values()):
        raise ParseError(f"No codecs found in listing: {_excerpt(text)!r}", text=text)
    return grouped


def codec_names(text: str, track: TrackType, *, strict: bool = True) -> list[str]:
    """Return codec names of ``track`` kind from a codec listing."""
    return parse_codec_listing(text, strict=strict)[_KIND_BY_TRACK[track]]


def parse_progress(text: str, *, strict: bool = True) -> ProgressSnapshot:
    """Derive a progress snapshot from a converter log.

    The duration comes from the first ``Duration: ..., start:`` banner and the
    current position from the last ``time=... bitrate`` status line.
    """
    duration_match = DURATION_RE.search(text)
    if duration_match is None:
        if strict:
            raise ParseError("Progress log has no duration", text=text)
        return ProgressSnapshot(duration="", current="", progress=0)
    raw_duration = duration_match.group(1)

    times = TIME_RE.findall(text)
    if not times:
        if strict:
            raise ParseError("Progress log has no time= status line", text=text)
        return ProgressSnapshot(duration=raw_duration, current="", progress=0)
    raw_time = times[-1]

    try:
        duration = timestamp_to_seconds(raw_duration)
        current = timestamp_to_seconds(raw_time)
    except ValueError as e:
        if strict:
            raise ParseError(f"Invalid timestamp in progress log: {e}", text=text) from e
        logger.debug("Unparsable progress timestamps %r / %r", raw_duration, raw_time)
        return ProgressSnapshot(duration=raw_duration, current=raw_time, progress=0)
    return ProgressSnapshot(
        duration=raw_duration,
        current=raw_time,
        progress=progress_percentage(current, duration),
    )


__all__ = [
    "codec_names",
    "parse_codec_listing",
    "parse_formats",
    "parse_progress",
    "parse_version",
]
