"""Errors raised by tuntest."""


class TunTestError(Exception):
    """Base class for all tuntest errors."""
    pass


class PathError(TunTestError):
    """Raised when a directory cannot be resolved to an absolute path."""
    pass


class LibraryBuildError(TunTestError):
    """Raised when a response library cannot be built from a directory tree.

    The build is all-or-nothing, the underlying cause is chained.
    """
    pass


class FileResponseError(TunTestError, OSError):
    """Raised when a file cannot be opened or read into a canned response."""
    pass


class RequestParseError(TunTestError, ValueError):
    """Raised when an inbound HTTP request is malformed."""
    pass
