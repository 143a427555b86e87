"""Shared pytest fixtures.

Provides a config whose temporary directory lives under ``tmp_path`` and
canned converter listings so no test needs a real ffmpeg.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sonus.models import SonusConfig, ToolContext

if TYPE_CHECKING:
    from pathlib import Path

VERSION_OUTPUT = """ffmpeg version 4.4.2-0ubuntu0.22.04.1 Copyright (c) 2000-2021 the FFmpeg developers
built with gcc 11 (Ubuntu 11.2.0-19ubuntu1)
configuration: --prefix=/usr --extra-version=0ubuntu0.22.04.1
libavutil      56. 70.100 / 56. 70.100
"""

FORMATS_OUTPUT = """File formats:
 D. = Demuxing supported
 .E = Muxing supported
 --
 D  3dostr          3DO STR
  E 3g2             3GP2 (3GPP file format)
 DE matroska,webm   Matroska / WebM
 DE mp3             MP3 (MPEG audio layer 3)
 D  wav             WAV / WAVE (Waveform Audio)
"""

ENCODERS_OUTPUT = """Encoders:
 V..... = Video
 A..... = Audio
 S..... = Subtitle
 .F.... = Frame-level multithreading
 ..S... = Slice-level multithreading
 ...X.. = Codec is experimental
 ....B. = Supports draw_horiz_band
 .....D = Supports direct rendering method 1
 ------
 V..... libx264              libx264 H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10 (codec h264)
 V....D mpeg4                MPEG-4 part 2
 A..... aac                  AAC (Advanced Audio Coding)
 A..... libmp3lame           libmp3lame MP3 (MPEG audio layer 3) (codec mp3)
 A..X.. mp3                  MP3 (experimental test entry)
 S..... srt                  SubRip subtitle
"""

DECODERS_OUTPUT = """Decoders:
 V..... = Video
 A..... = Audio
 S..... = Subtitle
 ------
 VFS..D h264                 H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10
 V....D vp9                  Google VP9
 A....D flac                 FLAC (Free Lossless Audio Codec)
 A....D mp3float             MP3 (MPEG audio layer 3)
 S..... ass                  ASS (Advanced SSA) subtitle
"""

PROGRESS_LOG = (
    "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mp4':\n"
    "  Duration: 01:02:03.50, start: 0.000000, bitrate: 1205 kb/s\n"
    "Output #0, mp3, to 'out.mp3':\n"
    "size=     256kB time=00:10:00.00 bitrate= 192.0kbits/s speed=40x\r"
    "size=    1024kB time=00:31:01.75 bitrate= 192.0kbits/s speed=41x\r"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore ``SONUS_*`` variables from the developer's shell."""
    for name in ("FFMPEG", "FFPROBE", "TMP_DIR", "PROGRESS", "VERBOSITY"):
        monkeypatch.delenv(f"SONUS_{name}", raising=False)


@pytest.fixture
def config(tmp_path: Path) -> SonusConfig:
    """Config with a private temporary directory."""
    return SonusConfig(ffmpeg="ffmpeg", ffprobe="ffprobe", tmp_dir=tmp_path / "progress")


@pytest.fixture
def progress_config(config: SonusConfig) -> SonusConfig:
    """Config with progress tracking enabled."""
    return config.model_copy(update={"progress": True})


@pytest.fixture
def ctx(config: SonusConfig) -> ToolContext:
    """Tool context without a cache."""
    return ToolContext(config=config)
