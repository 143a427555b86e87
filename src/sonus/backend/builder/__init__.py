"""Command construction for the converter."""

from .command_builder import ConversionBuilder, convert

__all__ = ["ConversionBuilder", "convert"]
