"""Helpers for testing proxy functions."""

from __future__ import annotations

from typing import Any, Coroutine

from typing_extensions import TypeVar

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream

from ..http.headers import Headers


T = TypeVar("T")


def byte_source(*chunks: bytes) -> MemoryObjectReceiveStream[bytes]:
    """Return a receive stream that yields ``chunks`` and then ends."""
    send, receive = anyio.create_memory_object_stream[bytes](max(len(chunks), 1))
    with send:
        for chunk in chunks:
            send.send_nowait(chunk)
    return receive


class BytesSink:
    """Collects everything sent to it."""

    def __init__(self):
        self.chunks: list[bytes] = []

    async def send(self, item: bytes) -> None:
        self.chunks.append(bytes(item))

    @property
    def data(self) -> bytes:
        return b"".join(self.chunks)


async def with_timeout(coro: Coroutine[Any, Any, T], timeout: float) -> T:
    """Await ``coro``, raising TimeoutError after ``timeout`` seconds."""
    with anyio.fail_after(timeout):
        return await coro


def parse_response(raw: bytes) -> tuple[tuple[int, int], int, str, Headers, bytes]:
    """Split raw response bytes into (version, status, reason, headers, body)."""
    head, sep, body = raw.partition(b"\r\n\r\n")
    if not sep:
        raise ValueError("incomplete response header")
    lines = head.decode("iso-8859-1").split("\r\n")
    version, status, reason = lines[0].split(" ", 2)
    major, minor = version.removeprefix("HTTP/").split(".")
    headers = Headers(tuple(line.split(": ", 1)) for line in lines[1:])
    return (int(major), int(minor)), int(status), reason, headers, body
