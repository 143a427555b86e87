"""Enumerations shared by the builder, parsers and CLI."""

from enum import Enum, IntEnum


class TrackType(str, Enum):
    """Stream kinds that accept per-track codec and bitrate flags."""

    AUDIO = "audio"
    VIDEO = "video"

    @property
    def stream_key(self) -> str:
        """Single-letter stream specifier used in ``-c:<k>`` style flags."""
        return self.value[0]


class MediaInfoFormat(str, Enum):
    """Output representations supported by the prober."""

    JSON = "json"
    XML = "xml"
    CSV = "csv"


class MuxSupport(str, Enum):
    """Demux/mux capability column of ``-formats`` listings."""

    DEMUX = "D"
    MUX = "E"
    BOTH = "DE"

    @property
    def can_demux(self) -> bool:
        """Whether the format can be read."""
        return self in {MuxSupport.DEMUX, MuxSupport.BOTH}

    @property
    def can_mux(self) -> bool:
        """Whether the format can be written."""
        return self in {MuxSupport.MUX, MuxSupport.BOTH}


class Verbosity(IntEnum):
    """How much of the converter's activity is reported."""

    QUIET = 0
    COMMANDS = 1
    OUTPUT = 2


__all__ = ["MediaInfoFormat", "MuxSupport", "TrackType", "Verbosity"]
