"""In-memory library of canned HTTP responses built from a directory tree.

Every regular file under the root becomes one complete HTTP response,
keyed by its path relative to the root's parent: with root ``./data`` the
file ``data/foo/bar.zip`` is served under ``/data/foo/bar.zip``.

The library is built once, up front, and never changes afterwards, so the
returned handler can serve from many tasks or threads without locking.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional

import anyio
import anyio.to_thread
from anyio.abc import ByteReceiveStream, ByteSendStream
from typing_extensions import override

from .errors import FileResponseError, LibraryBuildError, PathError
from .http.headers import Headers
from .http.response import HttpResponse, content_type_for, not_found_response, serialize
from .proto import RoutingDescriptor


log = logging.getLogger(__name__)


async def file_response(path: str | os.PathLike[str]) -> bytes:
    """
    Return a complete ``200 OK`` HTTP/1.0 response with the file as body.

    Content-Type is resolved from the file extension. Raises
    FileResponseError if the file cannot be opened or read.
    """
    headers = Headers({"Content-Type": content_type_for(path)})
    try:
        async with await anyio.open_file(path, "rb") as f:
            return await serialize(HttpResponse(status=200, version=(1, 0), headers=headers, body=f))
    except OSError as e:
        raise FileResponseError(f"failed to open file {os.fspath(path)!r}: {e}") from e


def _walk_files(root: str) -> list[str]:
    def onerror(err: OSError) -> None:
        raise err

    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            # fifos, sockets and devices are not servable
            if stat.S_ISREG(os.stat(path).st_mode):
                files.append(path)
    return files


def _url_path(path: str, prefix: str) -> str:
    return "/" + os.path.relpath(path, prefix).replace(os.sep, "/")


class ResponseLibrary(Mapping[str, bytes]):
    """
    Read-only map of URL path to serialized HTTP response.

    Instances are also proxy functions: calling one with (sink, source,
    descriptor) ignores ``source`` and writes the response cached for
    ``descriptor.url_path``, or a 404 when there is none.
    """

    def __init__(
        self,
        responses: Mapping[str, bytes],
        *,
        root: str = "",
        not_found: Optional[bytes] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._responses = MappingProxyType(dict(responses))
        self.root = root
        self._not_found = not_found
        self._logger = logger or log

    @override
    def __getitem__(self, url_path: str) -> bytes:
        return self._responses[url_path]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._responses)

    @override
    def __len__(self) -> int:
        return len(self._responses)

    @override
    def __repr__(self) -> str:
        return f"ResponseLibrary(root={self.root!r}, resources={len(self)})"

    async def not_found(self) -> bytes:
        """Serialized 404 response sent on a lookup miss."""
        if self._not_found is None:
            self._not_found = await serialize(not_found_response())
        return self._not_found

    async def __call__(self, sink: ByteSendStream, source: ByteReceiveStream, descriptor: RoutingDescriptor) -> None:
        b = self._responses.get(descriptor.url_path)
        if b is None:
            self._logger.warning("Resource not found for %s", descriptor)
            # only the 404 is written on a miss
            b = await self.not_found()
        await sink.send(b)


async def build_response_library(
    directory: str | os.PathLike[str],
    *,
    logger: Optional[logging.Logger] = None,
) -> ResponseLibrary:
    """
    Load every regular file under ``directory`` into a ResponseLibrary.

    Raises PathError if ``directory`` cannot be made absolute and
    LibraryBuildError if any part of the tree cannot be read. No partial
    library is ever returned.
    """
    logger = logger or log
    try:
        root = os.path.abspath(os.fspath(directory))
    except (OSError, TypeError, ValueError) as e:
        raise PathError(f"failed to get directory absolute path {directory!r}: {e}") from e

    if not await anyio.Path(root).is_dir():
        raise LibraryBuildError(f"failed to read directory {root!r}: not a directory")

    try:
        files = await anyio.to_thread.run_sync(_walk_files, root)
    except OSError as e:
        raise LibraryBuildError(f"failed to read directory {root!r}: {e}") from e

    prefix = os.path.dirname(root)
    responses: dict[str, bytes] = {}
    for path in files:
        url_path = _url_path(path, prefix)
        try:
            responses[url_path] = await file_response(path)
        except OSError as e:
            raise LibraryBuildError(f"failed to read directory {root!r}: {e}") from e
        logger.debug("Loaded %s as %s", path, url_path)

    logger.debug("Built response library from %s with %d resources", root, len(responses))
    return ResponseLibrary(
        responses,
        root=root,
        not_found=await serialize(not_found_response()),
        logger=logger,
    )
