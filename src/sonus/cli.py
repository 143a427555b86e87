"""Command-line interface entry point."""

from __future__ import annotations

import json
import sys
from enum import Enum
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Group, Parameter
from pydantic import BaseModel, Field

from .backend import convert as new_conversion
from .backend import executor, get_progress, get_thumbnails
from .models import MediaInfoFormat, SonusConfig, SonusError, ToolContext, Verbosity, open_cache
from .tools import capabilities, probe
from .tools.helpers import emit_status, parse_timespan_to_seconds

if TYPE_CHECKING:
    from collections.abc import Callable

    from .models import Result

TOOLS_GROUP = Group.create_ordered("Tools")
AUDIO_GROUP = Group.create_ordered("Audio")
VIDEO_GROUP = Group.create_ordered("Video")
JOB_GROUP = Group.create_ordered("Job")

app = App(name="sonus", help="Build converter commands and inspect converter output.")


class CodecKind(str, Enum):
    """Which codec listing to print."""

    AUDIO = "audio"
    VIDEO = "video"
    ALL = "all"


@Parameter(name="*", group=TOOLS_GROUP)
class ToolOptions(BaseModel):
    """Overrides for the ``SONUS_*`` environment configuration."""

    ffmpeg: str | None = Field(default=None, description="Converter binary.")
    ffprobe: str | None = Field(default=None, description="Prober binary.")
    tmp_dir: Path | None = Field(default=None, description="Directory for progress logs.")
    verbosity: Verbosity | None = Field(default=None, description="quiet, commands or output.")
    cache: bool = Field(default=False, description="Cache converter listings on disk between runs.")

    def config(self, **extra: object) -> SonusConfig:
        """Return the environment config with these overrides applied."""
        return SonusConfig.from_env(**self.model_dump(exclude={"cache"}), **extra)

    def context(self, **extra: object) -> ToolContext:
        """Return a context printing status lines to the terminal."""
        return ToolContext(
            config=self.config(**extra),
            cache=open_cache() if self.cache else None,
            status_callback=print,
        )


def _tools(tools: ToolOptions | None) -> ToolOptions:
    return tools if tools is not None else ToolOptions()


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2))  # noqa: T201


@app.command
def version(*, best_effort: bool = False, tools: ToolOptions | None = None) -> int:
    """Print the converter version."""
    found = capabilities.get_converter_version(_tools(tools).context(), strict=not best_effort)
    print(found if found.parsed else found.banner)  # noqa: T201
    return 0


@app.command
def formats(*, tools: ToolOptions | None = None) -> int:
    """Print supported container formats with their demux/mux flags."""
    found = capabilities.get_supported_formats(_tools(tools).context())
    _print_json({name: support.value for name, support in found.items()})
    return 0


def _print_codecs(audio: Callable[[], list[str]], video: Callable[[], list[str]], kind: CodecKind) -> int:
    names: list[str] = []
    if kind in {CodecKind.AUDIO, CodecKind.ALL}:
        names += audio()
    if kind in {CodecKind.VIDEO, CodecKind.ALL}:
        names += video()
    for name in names:
        print(name)  # noqa: T201
    return 0


@app.command
def encoders(*, kind: CodecKind = CodecKind.ALL, tools: ToolOptions | None = None) -> int:
    """Print encoder names."""
    ctx = _tools(tools).context()
    return _print_codecs(
        partial(capabilities.get_supported_audio_encoders, ctx),
        partial(capabilities.get_supported_video_encoders, ctx),
        kind,
    )


@app.command
def decoders(*, kind: CodecKind = CodecKind.ALL, tools: ToolOptions | None = None) -> int:
    """Print decoder names."""
    ctx = _tools(tools).context()
    return _print_codecs(
        partial(capabilities.get_supported_audio_decoders, ctx),
        partial(capabilities.get_supported_video_decoders, ctx),
        kind,
    )


@app.command(name="can-encode")
def can_encode(name: str, *, tools: ToolOptions | None = None) -> int:
    """Exit with 0 if the converter can encode NAME."""
    ok = capabilities.can_encode(_tools(tools).context(), name)
    print("yes" if ok else "no")  # noqa: T201
    return 0 if ok else 1


@app.command(name="can-decode")
def can_decode(name: str, *, tools: ToolOptions | None = None) -> int:
    """Exit with 0 if the converter can decode NAME."""
    ok = capabilities.can_decode(_tools(tools).context(), name)
    print("yes" if ok else "no")  # noqa: T201
    return 0 if ok else 1


@app.command
def info(
    path: str,
    *,
    format: MediaInfoFormat = MediaInfoFormat.JSON,  # noqa: A002
    tools: ToolOptions | None = None,
) -> int:
    """Print the prober's format and stream report for PATH."""
    report = probe.get_media_info(_tools(tools).context(), path, format)
    if isinstance(report, str):
        print(report)  # noqa: T201
    else:
        _print_json(report)
    return 0


@app.command
def thumbnails(
    path: str,
    prefix: str,
    *,
    count: int = 5,
    image_format: str = "png",
    tools: ToolOptions | None = None,
) -> int:
    """Write up to COUNT scene-change thumbnails named PREFIX01.png, PREFIX02.png, ..."""
    result = get_thumbnails(_tools(tools).context(), path, prefix, count, image_format)
    return _exit_code(result)


@app.command
def progress(job_id: str, *, tools: ToolOptions | None = None) -> int:
    """Print the progress of JOB_ID as JSON."""
    snapshot = get_progress(_tools(tools).config(), job_id)
    if snapshot is None:
        print(f"No progress log for job {job_id}", file=sys.stderr)  # noqa: T201
        return 1
    print(snapshot.to_json())  # noqa: T201
    return 0


def _exit_code(result: Result[object]) -> int:
    if not result:
        print(result.reason, file=sys.stderr)  # noqa: T201
        return 1
    return 0


@app.command(name="convert")
def convert_command(
    *,
    inputs: Annotated[list[str], Parameter(name=["--input", "-i"], group=JOB_GROUP)],
    outputs: Annotated[list[str], Parameter(name=["--output", "-o"], group=JOB_GROUP)],
    codec: Annotated[str | None, Parameter(group=AUDIO_GROUP)] = None,
    bitrate: Annotated[float | None, Parameter(group=AUDIO_GROUP)] = None,
    channels: Annotated[int | None, Parameter(group=AUDIO_GROUP)] = None,
    frequency: Annotated[int | None, Parameter(group=AUDIO_GROUP)] = None,
    video_codec: Annotated[str | None, Parameter(group=VIDEO_GROUP)] = None,
    video_bitrate: Annotated[float | None, Parameter(group=VIDEO_GROUP)] = None,
    overwrite: Annotated[bool | None, Parameter(group=JOB_GROUP)] = None,
    time_limit: Annotated[str | None, Parameter(group=JOB_GROUP)] = None,
    raw: Annotated[str | None, Parameter(group=JOB_GROUP)] = None,
    progress_id: Annotated[str | None, Parameter(group=JOB_GROUP)] = None,
    track_progress: Annotated[bool | None, Parameter(name="--progress", group=JOB_GROUP)] = None,
    detach: Annotated[bool | None, Parameter(group=JOB_GROUP)] = None,
    dry_run: Annotated[bool, Parameter(group=JOB_GROUP)] = False,
    tools: ToolOptions | None = None,
) -> int:
    """Convert INPUTS to OUTPUTS.

    Parameters are passed to the converter in the order audio, video, job;
    ``--raw`` replaces all of them with a literal argument string.
    """
    ctx = _tools(tools).context(progress=track_progress)
    builder = new_conversion(ctx)
    steps: list[Callable[[], Result[object]]] = [partial(builder.add_input, p) for p in inputs]
    steps += [partial(builder.add_output, p) for p in outputs]
    if codec is not None:
        steps.append(partial(builder.set_codec, codec, "audio"))
    if bitrate is not None:
        steps.append(partial(builder.set_bitrate, bitrate, "audio"))
    if channels is not None:
        steps.append(partial(builder.set_channels, channels))
    if frequency is not None:
        steps.append(partial(builder.set_frequency, frequency))
    if video_codec is not None:
        steps.append(partial(builder.set_codec, video_codec, "video"))
    if video_bitrate is not None:
        steps.append(partial(builder.set_bitrate, video_bitrate, "video"))
    if overwrite is not None:
        steps.append(partial(builder.set_overwrite, overwrite))
    if time_limit is not None:
        steps.append(partial(builder.set_time_limit, parse_timespan_to_seconds(time_limit)))
    if progress_id is not None:
        steps.append(partial(builder.set_progress_id, progress_id))
    for step in steps:
        if (code := _exit_code(step())) != 0:
            return code
    result = builder.execute(raw, detach=detach, dry_run=dry_run)
    if dry_run:
        return 0
    if result.output:
        emit_status(result.output.rstrip("\n"), status_callback=ctx.status_callback)
    return executor.report(result, status_callback=ctx.status_callback)


def main(argv: list[str] | None = None) -> int:
    """Run the sonus CLI."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        return app(argv)
    except (SonusError, ValueError) as e:
        print(f"sonus: {e}", file=sys.stderr)  # noqa: T201
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
