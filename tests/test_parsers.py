"""Tests for converter output parsers."""

import pytest

from sonus.models import MuxSupport, ParseError, TrackType
from sonus.tools import parsers

from .conftest import DECODERS_OUTPUT, ENCODERS_OUTPUT, FORMATS_OUTPUT, PROGRESS_LOG, VERSION_OUTPUT


def test_parse_version() -> None:
    """Read major, minor and revision from the banner line."""
    version = parsers.parse_version(VERSION_OUTPUT)
    assert version.as_tuple() == (4, 4, 2)
    assert version.banner.startswith("ffmpeg version 4.4.2")
    assert str(version) == "4.4.2"


def test_parse_version_without_revision() -> None:
    """Accept two-part releases and ``n`` prefixed git tags."""
    assert parsers.parse_version("ffmpeg version 6.1 Copyright").as_tuple() == (6, 1, None)
    assert parsers.parse_version("ffmpeg version n5.1.4 Copyright").as_tuple() == (5, 1, 4)


def test_parse_version_only_reads_first_line() -> None:
    """Ignore version-like text after the banner."""
    with pytest.raises(ParseError):
        parsers.parse_version("ffmpeg version N-112233-gdeadbeef\nffmpeg version 1.2.3")


def test_parse_version_best_effort() -> None:
    """Return empty fields instead of raising when asked to."""
    version = parsers.parse_version("command not found", strict=False)
    assert version.as_tuple() == (None, None, None)
    assert not version.parsed
    assert version.banner == "command not found"


def test_parse_formats() -> None:
    """Map every format name, including aliases, to its mux flags."""
    formats = parsers.parse_formats(FORMATS_OUTPUT)
    assert formats == {
        "3dostr": MuxSupport.DEMUX,
        "3g2": MuxSupport.MUX,
        "matroska": MuxSupport.BOTH,
        "webm": MuxSupport.BOTH,
        "mp3": MuxSupport.BOTH,
        "wav": MuxSupport.DEMUX,
    }
    assert formats["mp3"].can_mux
    assert not formats["wav"].can_mux


def test_parse_formats_with_device_column() -> None:
    """Handle the device marker column printed by newer releases."""
    text = " D.. = Demuxing supported\n ---\n D d alsa            ALSA audio input\n DE  mp4             MP4\n"
    assert parsers.parse_formats(text) == {"alsa": MuxSupport.DEMUX, "mp4": MuxSupport.BOTH}


def test_parse_formats_empty() -> None:
    """Raise on unexpected output unless best effort is requested."""
    with pytest.raises(ParseError):
        parsers.parse_formats("Unrecognized option 'formats'")
    assert parsers.parse_formats("", strict=False) == {}


def test_codec_names_by_track() -> None:
    """Split encoder listings by capability marker and skip the legend."""
    assert parsers.codec_names(ENCODERS_OUTPUT, TrackType.AUDIO) == ["aac", "libmp3lame", "mp3"]
    assert parsers.codec_names(ENCODERS_OUTPUT, TrackType.VIDEO) == ["libx264", "mpeg4"]
    grouped = parsers.parse_codec_listing(DECODERS_OUTPUT)
    assert grouped == {"A": ["flac", "mp3float"], "V": ["h264", "vp9"], "S": ["ass"]}


def test_codec_listing_empty() -> None:
    """An empty listing is an error in strict mode only."""
    with pytest.raises(ParseError):
        parsers.parse_codec_listing("Encoders:\n")
    assert parsers.codec_names("", TrackType.AUDIO, strict=False) == []


def test_parse_progress() -> None:
    """Use the first duration and the last time= status."""
    snapshot = parsers.parse_progress(PROGRESS_LOG)
    assert snapshot.duration == "01:02:03.50"
    assert snapshot.current == "00:31:01.75"
    assert snapshot.progress == 50


def test_parse_progress_zero_duration() -> None:
    """Report 0% instead of dividing by zero."""
    log = "  Duration: 00:00:00.00, start: 0.000000\nsize=1kB time=00:00:01.00 bitrate=8.0kbits/s\n"
    assert parsers.parse_progress(log).progress == 0


def test_parse_progress_before_first_status_line() -> None:
    """A log without time= lines is incomplete."""
    log = "  Duration: 00:01:00.00, start: 0.000000, bitrate: 128 kb/s\n"
    with pytest.raises(ParseError):
        parsers.parse_progress(log)
    snapshot = parsers.parse_progress(log, strict=False)
    assert (snapshot.duration, snapshot.current, snapshot.progress) == ("00:01:00.00", "", 0)


def test_parse_progress_unknown_duration() -> None:
    """Streams without a known duration cannot report a percentage."""
    log = "  Duration: N/A, start: 0.000000\nsize=1kB time=00:00:01.00 bitrate=8.0kbits/s\n"
    with pytest.raises(ParseError):
        parsers.parse_progress(log)
    assert parsers.parse_progress(log, strict=False).progress == 0


def test_parse_progress_without_duration() -> None:
    """Text with no duration banner is not a progress log."""
    with pytest.raises(ParseError):
        parsers.parse_progress("hello")
    assert parsers.parse_progress("hello", strict=False).as_dict() == {"Duration": "", "Current": "", "Progress": 0}
