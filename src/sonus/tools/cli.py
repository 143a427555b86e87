"""Helpers for executing the converter and prober binaries."""

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from sonus.models.config import SonusConfig
from sonus.models.errors import ExternalProcessError

from .helpers import emit_status

_VIDEO_FILTER = "-vf"

logger = logging.getLogger(__name__)


def cache_key(cmd: Sequence[str | Path]) -> tuple[Any, ...]:
    """Return a cache key for ``cmd`` based on tokens and file metadata.

    Tokens naming existing files (including the binary itself) contribute
    their modification time and size, so a replaced binary misses the cache.
    """
    key_parts: list[Any] = []
    for token in cmd:
        s = str(token)
        key_parts.append(s)
        if s.startswith("-"):
            continue
        path = Path(s)
        if path.is_file():
            try:
                stat = path.stat()
            except OSError:
                continue
            key_parts.extend([int(stat.st_mtime_ns), stat.st_size])
    return tuple(key_parts)


def _run_streaming(
    cmd: list[str],
    *,
    creationflags: int,
    log: Callable[[str], None],
) -> str:
    """Run a command, streaming combined stdout/stderr and returning output."""
    with subprocess.Popen(  # noqa: S603
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        bufsize=1,
        creationflags=creationflags,
    ) as p:
        output_chunks: list[str] = []
        if p.stdout is None:  # pragma: no cover - defensive
            raise RuntimeError("Failed to capture subprocess stdout")
        buf = ""
        for line in iter(p.stdout.readline, ""):
            output_chunks.append(line)
            parts = line.split("\r")
            buf += parts[0]
            for part in parts[1:]:
                log(buf + "\r")
                buf = part
            if buf.endswith("\n"):
                log(buf[:-1])
                buf = ""
        if buf:
            log(buf)
        p.wait()
        output = "".join(output_chunks)
        if p.returncode:
            raise subprocess.CalledProcessError(p.returncode or 1, cmd, output)
        return output


def _failure(exe: str | Path, args: Sequence[str | Path], exc: Exception) -> ExternalProcessError:
    command = join_command(exe, args)
    if isinstance(exc, subprocess.CalledProcessError):
        output = exc.stdout if isinstance(exc.stdout, str) else ""
        return ExternalProcessError(
            f"{command} exited with status {exc.returncode}",
            returncode=exc.returncode,
            output=output,
        )
    return ExternalProcessError(f"Unable to run {command}: {exc}")


def run(
    exe: str | Path,
    args: Sequence[str | Path],
    *,
    verbose: bool = False,
    status_callback: Callable[[str], None] | None = None,
    list_cmd: bool = False,
) -> str:
    """Run an executable and return its combined stdout/stderr.

    When ``verbose`` is ``True``, stream output lines to ``status_callback``
    (or the logger) as the process runs.

    Raises:
        ExternalProcessError: If the binary is missing or exits non-zero.

    """
    cmd = [str(exe), *[str(a) for a in args]]

    def log(message: str) -> None:
        emit_status(message, status_callback=status_callback)

    if list_cmd:
        log(f"Running: {join_command(exe, args)}")
    logger.debug("Running: %s", join_command(exe, args))

    creationflags = getattr(subprocess, "CREATE_NO_WINDOW", 0)
    try:
        if verbose:
            return _run_streaming(cmd, creationflags=creationflags, log=log)
        proc = subprocess.run(  # noqa: S603
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            creationflags=creationflags,
            check=True,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        raise _failure(exe, args, e) from e
    return proc.stdout


def run_to_file(exe: str | Path, args: Sequence[str | Path], log_path: Path) -> None:
    """Run an executable to completion with combined output written to ``log_path``.

    Raises:
        ExternalProcessError: If the binary is missing or exits non-zero.

    """
    cmd = [str(exe), *[str(a) for a in args]]
    logger.debug("Running: %s > %s", join_command(exe, args), log_path)
    try:
        with log_path.open("w", encoding="utf-8") as fh:
            subprocess.run(  # noqa: S603
                cmd,
                stdout=fh,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
                check=True,
            )
    except (subprocess.CalledProcessError, OSError) as e:
        raise _failure(exe, args, e) from e


def spawn_detached(exe: str | Path, args: Sequence[str | Path], log_path: Path) -> subprocess.Popen[bytes]:
    """Start an executable in the background with output appended to ``log_path``.

    The child gets its own session so it outlives the caller's terminal.

    Raises:
        ExternalProcessError: If the binary cannot be started.

    """
    cmd = [str(exe), *[str(a) for a in args]]
    logger.debug("Launching: %s > %s", join_command(exe, args), log_path)
    kwargs: dict[str, Any] = {}
    if os.name == "nt":
        kwargs["creationflags"] = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
            subprocess, "CREATE_NEW_PROCESS_GROUP", 0
        )
    else:
        kwargs["start_new_session"] = True
    try:
        with log_path.open("w", encoding="utf-8") as fh:
            return subprocess.Popen(  # noqa: S603
                cmd,
                stdout=fh,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                **kwargs,
            )
    except OSError as e:
        raise _failure(exe, args, e) from e


def run_ffmpeg(config: SonusConfig, args: Sequence[str | Path], **kwargs: Any) -> str:
    """Run the configured converter; see :func:`run`."""
    return run(config.ffmpeg, args, **kwargs)


def run_ffprobe(config: SonusConfig, args: Sequence[str | Path], **kwargs: Any) -> str:
    """Run the configured prober; see :func:`run`."""
    return run(config.ffprobe, args, **kwargs)


def quote_arg(arg: str, *, force: bool = False) -> str:
    """Quote argument if needed."""
    if os.name == "nt":
        quoted = subprocess.list2cmdline([arg])
        if force and quoted == arg:
            return f'"{arg}"'
        return quoted
    quoted = shlex.quote(arg)
    if force and quoted == arg:
        return f"'{arg}'"
    return quoted


def join_command(exe: str | Path, args: Sequence[str | Path]) -> str:
    """Format a command as a single shell-safe string."""
    parts = [str(exe), *[str(a) for a in args]]
    return " ".join(quote_arg(part, force=i > 0 and parts[i - 1] == _VIDEO_FILTER) for i, part in enumerate(parts))


__all__ = [
    "cache_key",
    "join_command",
    "quote_arg",
    "run",
    "run_ffmpeg",
    "run_ffprobe",
    "run_to_file",
    "spawn_detached",
]
