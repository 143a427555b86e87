"""Backend utilities for building, executing and monitoring conversions."""

from .builder import ConversionBuilder, convert
from .executor import execute
from .progress import get_progress, get_progress_json
from .thumbnails import get_thumbnails

__all__ = [
    "ConversionBuilder",
    "convert",
    "execute",
    "get_progress",
    "get_progress_json",
    "get_thumbnails",
]
