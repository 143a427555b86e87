"""Chainable builder accumulating converter arguments."""

from __future__ import annotations

import logging
import math
import os
import re
import shlex
from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeAlias

from sonus.backend import executor
from sonus.models.context import ToolContext
from sonus.models.errors import InvalidArgumentError
from sonus.models.result import Err, Ok, Result
from sonus.models.types import TrackType
from sonus.tools.cli import join_command

from . import stream_args
from .command_args import AUDIO_CHANNELS, AUDIO_RATE, INPUT_FLAG, KEEP_OUTPUT, OVERWRITE_OUTPUT, TIME_LIMIT

if TYPE_CHECKING:
    from sonus.models.media import ExecutionResult

logger = logging.getLogger(__name__)

Token: TypeAlias = tuple[str, ...]
RawArgs: TypeAlias = str | Sequence[str]

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _format_number(value: object) -> str | None:
    """Return ``value`` rendered for the command line, or ``None`` if not numeric.

    Integers, finite floats and ASCII decimal strings qualify; booleans do not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_RE.fullmatch(text):
            return None
        return text if math.isfinite(float(text)) else None
    return None


def _path_arg(value: object) -> str | None:
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    return value if isinstance(value, str) else None


def _track(value: object) -> TrackType | None:
    try:
        return TrackType(value)
    except (TypeError, ValueError):
        return None


class ConversionBuilder:
    """Accumulate inputs, outputs and encoder parameters for one conversion.

    Every configuration call returns :class:`~sonus.models.result.Ok` wrapping
    the builder, or :class:`~sonus.models.result.Err` wrapping an
    :class:`~sonus.models.errors.InvalidArgumentError` without changing any
    state. Parameter tokens keep their call order.
    """

    def __init__(self, ctx: ToolContext | None = None) -> None:
        self.ctx = ctx if ctx is not None else ToolContext()
        self._inputs: list[Token] = []
        self._outputs: list[Token] = []
        self._parameters: list[Token] = []
        self._progress_id: str | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.render()!r})"

    @property
    def inputs(self) -> tuple[Token, ...]:
        """Input tokens in insertion order."""
        return tuple(self._inputs)

    @property
    def outputs(self) -> tuple[Token, ...]:
        """Output tokens in insertion order."""
        return tuple(self._outputs)

    @property
    def parameters(self) -> tuple[Token, ...]:
        """Parameter tokens in insertion order."""
        return tuple(self._parameters)

    @property
    def progress_id(self) -> str | None:
        """Explicit progress identifier, if one was set."""
        return self._progress_id

    def _reject(self, message: str) -> Err:
        logger.debug("Rejected builder argument: %s", message)
        return Err(InvalidArgumentError(message))

    def _param(self, token: Token) -> Ok[ConversionBuilder]:
        self._parameters.append(token)
        return Ok(self)

    def add_input(self, path: str | os.PathLike[str]) -> Result[ConversionBuilder]:
        """Add an input file."""
        arg = _path_arg(path)
        if arg is None:
            return self._reject(f"Input path must be a string, got {type(path).__name__}")
        self._inputs.append((*INPUT_FLAG, arg))
        return Ok(self)

    def add_output(self, path: str | os.PathLike[str]) -> Result[ConversionBuilder]:
        """Add an output file."""
        arg = _path_arg(path)
        if arg is None:
            return self._reject(f"Output path must be a string, got {type(path).__name__}")
        self._outputs.append((arg,))
        return Ok(self)

    def set_progress_id(self, progress_id: str) -> Result[ConversionBuilder]:
        """Name the progress file this job reports into."""
        if not progress_id or not isinstance(progress_id, str):
            return self._reject("Progress id must be a non-empty string")
        self._progress_id = progress_id
        return Ok(self)

    def set_overwrite(self, overwrite: bool = True) -> Result[ConversionBuilder]:  # noqa: FBT001, FBT002
        """Always (``True``) or never (``False``) overwrite existing outputs."""
        if not isinstance(overwrite, bool):
            return self._reject(f"Overwrite flag must be a bool, got {overwrite!r}")
        return self._param(OVERWRITE_OUTPUT if overwrite else KEEP_OUTPUT)

    def set_time_limit(self, seconds: float | str) -> Result[ConversionBuilder]:
        """Stop the converter after ``seconds``."""
        value = _format_number(seconds)
        if value is None:
            return self._reject(f"Time limit must be numeric, got {seconds!r}")
        return self._param((*TIME_LIMIT, value))

    def set_codec(self, name: str, track_type: TrackType | str = TrackType.AUDIO) -> Result[ConversionBuilder]:
        """Select the encoder for the audio or video track."""
        if not isinstance(name, str) or not name.strip():
            return self._reject("Codec name must be a non-empty string")
        track = _track(track_type)
        if track is None:
            return self._reject(f"Track type must be audio or video, got {track_type!r}")
        return self._param(stream_args.codec(track, name))

    def set_bitrate(
        self,
        kbps: float | str,
        track_type: TrackType | str = TrackType.AUDIO,
    ) -> Result[ConversionBuilder]:
        """Set a constant bitrate, in kilobits per second, for a track."""
        value = _format_number(kbps)
        if value is None:
            return self._reject(f"Bitrate must be numeric, got {kbps!r}")
        track = _track(track_type)
        if track is None:
            return self._reject(f"Track type must be audio or video, got {track_type!r}")
        return self._param(stream_args.bitrate(track, value))

    def set_channels(self, count: int | str) -> Result[ConversionBuilder]:
        """Set the number of audio channels."""
        value = _format_number(count)
        if value is None:
            return self._reject(f"Channel count must be numeric, got {count!r}")
        return self._param((*AUDIO_CHANNELS, value))

    def set_frequency(self, hz: int | str) -> Result[ConversionBuilder]:
        """Set the audio sample rate."""
        value = _format_number(hz)
        if value is None:
            return self._reject(f"Frequency must be numeric, got {hz!r}")
        return self._param((*AUDIO_RATE, value))

    def arguments(self, raw_args: RawArgs | None = None) -> tuple[str, ...]:
        """Return converter arguments: inputs, parameters, then outputs.

        ``raw_args`` replaces the accumulated parameters. A string is split
        with shell rules.
        """
        if raw_args is None:
            params = tuple(arg for token in self._parameters for arg in token)
        elif isinstance(raw_args, str):
            params = tuple(shlex.split(raw_args))
        else:
            params = tuple(str(a) for a in raw_args)
        inputs = tuple(arg for token in self._inputs for arg in token)
        outputs = tuple(arg for token in self._outputs for arg in token)
        return inputs + params + outputs

    def render(self, raw_args: RawArgs | None = None) -> str:
        """Return the full command line as a shell-safe string."""
        return join_command(self.ctx.config.ffmpeg, self.arguments(raw_args))

    def execute(
        self,
        raw_args: RawArgs | None = None,
        *,
        detach: bool | None = None,
        dry_run: bool = False,
    ) -> ExecutionResult:
        """Run the conversion; see :func:`sonus.backend.executor.execute`."""
        return executor.execute(self, raw_args, detach=detach, dry_run=dry_run)


def convert(ctx: ToolContext | None = None) -> ConversionBuilder:
    """Start a new conversion."""
    return ConversionBuilder(ctx)


__all__ = ["ConversionBuilder", "convert"]
