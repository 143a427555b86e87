"""Expose models and type definitions."""

from .config import PROGRESS_SUFFIX, SonusConfig
from .context import ToolContext, open_cache
from .errors import ExternalProcessError, InvalidArgumentError, ParseError, SonusError
from .media import ConverterVersion, ExecutionResult, ProgressSnapshot
from .result import Err, Ok, Result
from .types import MediaInfoFormat, MuxSupport, TrackType, Verbosity

__all__ = [
    "PROGRESS_SUFFIX",
    "ConverterVersion",
    "Err",
    "ExecutionResult",
    "ExternalProcessError",
    "InvalidArgumentError",
    "MediaInfoFormat",
    "MuxSupport",
    "Ok",
    "ParseError",
    "ProgressSnapshot",
    "Result",
    "SonusConfig",
    "SonusError",
    "ToolContext",
    "TrackType",
    "Verbosity",
    "open_cache",
]
