"""Execute conversions built with :class:`ConversionBuilder`."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from sonus.models.errors import ExternalProcessError
from sonus.models.media import ExecutionResult
from sonus.models.types import Verbosity
from sonus.tools.cli import join_command, run_ffmpeg, run_to_file, spawn_detached
from sonus.tools.helpers import emit_status, format_action_label, maybe_log_command

if TYPE_CHECKING:
    from collections.abc import Callable

    from sonus.models.config import SonusConfig

    from .builder.command_builder import ConversionBuilder, RawArgs

CONVERSION_FAILED = "Conversion failed"

logger = logging.getLogger(__name__)


def default_progress_id() -> str:
    """Return the current Unix time in seconds."""
    return str(int(time.time()))


def resolve_progress_path(config: SonusConfig, progress_id: str | None) -> tuple[str, Path]:
    """Return the progress id to use and its log path, creating ``tmp_dir``.

    Raises:
        OSError: If the temporary directory cannot be created.

    """
    job_id = progress_id or default_progress_id()
    config.tmp_dir.mkdir(parents=True, exist_ok=True)
    return job_id, config.progress_path(job_id)


def execute(
    builder: ConversionBuilder,
    raw_args: RawArgs | None = None,
    *,
    detach: bool | None = None,
    dry_run: bool = False,
) -> ExecutionResult:
    """Run the converter with the builder's arguments.

    With progress tracking enabled, combined output goes to
    ``<tmp_dir>/<progress_id>.sonustmp`` instead of being captured.

    ``detach`` selects the launch mode: ``True`` starts the converter in the
    background and returns at once, ``False`` waits for it to exit. ``None``
    detaches exactly when progress tracking is enabled, so the log can be
    polled while the job runs. There is no timeout besides ``-timelimit``.
    """
    ctx = builder.ctx
    config = ctx.config
    args = builder.arguments(raw_args)
    command = join_command(config.ffmpeg, args)
    background = config.progress if detach is None else detach

    maybe_log_command(
        verbosity=config.verbosity,
        dry_run=dry_run,
        status_callback=ctx.status_callback,
        banner=f"{format_action_label(dry_run=dry_run, detached=background)}: {command}",
    )
    if dry_run:
        return ExecutionResult(success=True, command=command, progress_id=builder.progress_id)

    progress_id: str | None = None
    try:
        if config.progress:
            progress_id, log_path = resolve_progress_path(config, builder.progress_id)
        else:
            log_path = Path(os.devnull)
        if background:
            proc = spawn_detached(config.ffmpeg, args, log_path)
            logger.info("Started converter (pid %s): %s", proc.pid, command)
            return ExecutionResult(success=True, command=command, progress_id=progress_id, pid=proc.pid)
        if config.progress:
            run_to_file(config.ffmpeg, args, log_path)
            return ExecutionResult(success=True, command=command, progress_id=progress_id)
        output = run_ffmpeg(
            config,
            args,
            verbose=config.verbosity >= Verbosity.OUTPUT,
            status_callback=ctx.status_callback,
        )
    except ExternalProcessError as e:
        logger.warning("%s: %s", CONVERSION_FAILED, command, exc_info=e)
        return ExecutionResult(
            success=False,
            command=command,
            error=f"{CONVERSION_FAILED}: {e}",
            output=e.output,
            progress_id=progress_id,
        )
    except OSError as e:
        return ExecutionResult(success=False, command=command, error=f"{CONVERSION_FAILED}: {e}")
    return ExecutionResult(success=True, command=command, output=output)


def report(result: ExecutionResult, *, status_callback: Callable[[str], None] | None = None) -> int:
    """Emit a one-line summary of ``result`` and return an exit code."""
    if not result.success:
        emit_status(result.error, status_callback=status_callback)
        return 1
    if result.detached:
        emit_status(f"Started pid {result.pid}, progress id {result.progress_id}", status_callback=status_callback)
    elif result.progress_id:
        emit_status(f"Finished, progress id {result.progress_id}", status_callback=status_callback)
    return 0


__all__ = ["CONVERSION_FAILED", "default_progress_id", "execute", "report", "resolve_progress_path"]
