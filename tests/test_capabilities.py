"""Tests for converter capability queries."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from diskcache import Cache

from sonus.models import ExternalProcessError, MuxSupport, ParseError, SonusConfig, ToolContext, Verbosity
from sonus.tools import capabilities

from .conftest import DECODERS_OUTPUT, ENCODERS_OUTPUT, FORMATS_OUTPUT, VERSION_OUTPUT

if TYPE_CHECKING:
    from collections.abc import Sequence

LISTINGS = {
    "-version": VERSION_OUTPUT,
    "-formats": FORMATS_OUTPUT,
    "-encoders": ENCODERS_OUTPUT,
    "-decoders": DECODERS_OUTPUT,
}


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Serve canned listings and record every converter invocation."""
    recorded: list[list[str]] = []

    def fake_run(config: SonusConfig, args: Sequence[str], **_: object) -> str:
        recorded.append([config.ffmpeg, *args])
        return LISTINGS[args[0]]

    monkeypatch.setattr(capabilities, "run_ffmpeg", fake_run)
    return recorded


def test_get_converter_version(ctx: ToolContext, calls: list[list[str]]) -> None:
    """Run ``-version`` and parse the banner."""
    version = capabilities.get_converter_version(ctx)
    assert (version.major, version.minor, version.revision) == (4, 4, 2)
    assert calls == [["ffmpeg", "-version"]]


def test_get_supported_formats(ctx: ToolContext, calls: list[list[str]]) -> None:
    """Run ``-formats`` and map names to mux flags."""
    formats = capabilities.get_supported_formats(ctx)
    assert formats["mp3"] is MuxSupport.BOTH
    assert formats["3dostr"] is MuxSupport.DEMUX
    assert calls == [["ffmpeg", "-formats"]]


def test_encoder_and_decoder_lists(ctx: ToolContext, calls: list[list[str]]) -> None:
    """Query encoders and decoders per track type."""
    assert capabilities.get_supported_audio_encoders(ctx) == ["aac", "libmp3lame", "mp3"]
    assert capabilities.get_supported_video_encoders(ctx) == ["libx264", "mpeg4"]
    assert capabilities.get_supported_audio_decoders(ctx) == ["flac", "mp3float"]
    assert capabilities.get_supported_video_decoders(ctx) == ["h264", "vp9"]
    assert [c[1] for c in calls] == ["-encoders", "-encoders", "-decoders", "-decoders"]


@pytest.mark.parametrize(
    ("name", "expected"),
    [("mp3", True), ("libx264", True), ("srt", False), ("flac", False), ("opus", False)],
)
def test_can_encode(ctx: ToolContext, calls: list[list[str]], name: str, expected: bool) -> None:
    """Encodable iff listed as an audio or video encoder."""
    assert capabilities.can_encode(ctx, name) is expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [("h264", True), ("mp3float", True), ("ass", False), ("mp3", False)],
)
def test_can_decode(ctx: ToolContext, calls: list[list[str]], name: str, expected: bool) -> None:
    """Decodable iff listed as an audio or video decoder."""
    assert capabilities.can_decode(ctx, name) is expected


def test_queries_are_not_cached_by_default(ctx: ToolContext, calls: list[list[str]]) -> None:
    """Run the converter on every call without a cache."""
    capabilities.can_encode(ctx, "mp3")
    capabilities.can_encode(ctx, "mp3")
    assert len(calls) == 4


def test_queries_use_cache(config: SonusConfig, calls: list[list[str]], tmp_path: Path) -> None:
    """Serve repeated listings from the disk cache."""
    with ToolContext(config=config, cache=Cache(str(tmp_path / "cache"))) as ctx:
        assert capabilities.get_supported_formats(ctx)["mp3"] is MuxSupport.BOTH
        assert capabilities.get_supported_formats(ctx)["mp3"] is MuxSupport.BOTH
    assert calls == [["ffmpeg", "-formats"]]


def test_cache_invalidated_when_binary_changes(tmp_path: Path, calls: list[list[str]]) -> None:
    """A modified converter binary misses the cache."""
    binary = tmp_path / "ffmpeg"
    binary.write_text("v1")
    config = SonusConfig(ffmpeg=str(binary), tmp_dir=tmp_path)
    with ToolContext(config=config, cache=Cache(str(tmp_path / "cache"))) as ctx:
        capabilities.get_converter_version(ctx)
        capabilities.get_converter_version(ctx)
        assert len(calls) == 1
        binary.write_text("version two")
        capabilities.get_converter_version(ctx)
        assert len(calls) == 2


def test_best_effort_version(ctx: ToolContext, monkeypatch: pytest.MonkeyPatch) -> None:
    """Unexpected banners raise unless best effort is requested."""
    monkeypatch.setattr(capabilities, "run_ffmpeg", lambda *_a, **_k: "avconv version 12\n")
    with pytest.raises(ParseError):
        capabilities.get_converter_version(ctx)
    assert capabilities.get_converter_version(ctx, strict=False).major is None


def test_missing_binary_raises(tmp_path: Path) -> None:
    """Report a missing converter as an external process failure."""
    ctx = ToolContext(config=SonusConfig(ffmpeg=str(tmp_path / "no-such-ffmpeg"), tmp_dir=tmp_path))
    with pytest.raises(ExternalProcessError):
        capabilities.get_supported_formats(ctx)


def test_cache_hit_announced(tmp_path: Path, calls: list[list[str]]) -> None:
    """Cached listings are announced with the ``Cached`` label."""
    seen: list[str] = []
    config = SonusConfig(tmp_dir=tmp_path, verbosity=Verbosity.COMMANDS)
    with ToolContext(config=config, cache=Cache(str(tmp_path / "cache")), status_callback=seen.append) as ctx:
        capabilities.get_supported_formats(ctx)
        assert seen == []
        capabilities.get_supported_formats(ctx)
    assert seen == ["Cached: ffmpeg -formats"]
    assert len(calls) == 1
