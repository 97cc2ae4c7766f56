"""Testing utilities for tuntest."""

from .helpers import BytesSink, byte_source, parse_response, with_timeout

__all__ = [
    "BytesSink",
    "byte_source",
    "parse_response",
    "with_timeout",
]
