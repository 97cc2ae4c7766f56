"""HTTP response framing.

Responses are built by hand (status line, headers, body) rather than through
a server framework, so the output can be compared byte-for-byte against
canned fixtures.

Features:
- HTTP/1.0 by default, any major/minor version accepted
- Headers emitted in insertion order
- Readable bodies (AnyIO files and byte streams) drained into memory
- Unknown-length bodies (no Content-Length, close-delimited)
"""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass, field
from typing import Any

import anyio

from .headers import Headers


DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Marks a body of unknown length: no Content-Length header is written.
UNKNOWN_LENGTH = -1

_STATUS_TEXT: dict[int, str] = {
    200: "OK",
    404: "Not Found",
}


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """
    Abstract description of an HTTP response.

    Attributes:
        status: Status code
        reason: Status text, derived from the status code when omitted
        version: Protocol version as (major, minor)
        headers: Response headers, serialized in insertion order
        body: bytes, a readable source (``read()`` or ``receive()``), or None for no body
        content_length: Body length; None to compute it, UNKNOWN_LENGTH to omit it
    """
    status: int = 200
    reason: str | None = None
    version: tuple[int, int] = (1, 0)
    headers: Headers = field(default_factory=Headers)
    body: Any = None
    content_length: int | None = None

    def __post_init__(self):
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers(self.headers))
        if isinstance(self.body, (bytes, bytearray, memoryview)):
            if self.content_length not in (None, UNKNOWN_LENGTH) and self.content_length != len(self.body):
                raise ValueError(
                    f"content length {self.content_length} does not match body length {len(self.body)}"
                )
        elif self.body is None and self.content_length not in (None, 0, UNKNOWN_LENGTH):
            raise ValueError(f"content length {self.content_length} given without a body")

    @property
    def status_text(self) -> str:
        if self.reason is not None:
            return self.reason
        return _STATUS_TEXT.get(self.status, "Unknown")

    def status_line(self) -> str:
        major, minor = self.version
        return f"HTTP/{major}.{minor} {self.status} {self.status_text}\r\n"


def content_type_for(path: str | os.PathLike[str], default: str = DEFAULT_CONTENT_TYPE) -> str:
    """Resolve a MIME type from the file extension of ``path``."""
    _, ext = os.path.splitext(os.fspath(path))
    if not ext:
        return default
    return mimetypes.types_map.get(ext.lower()) or default


def not_found_response() -> HttpResponse:
    return HttpResponse(status=404)


async def _drain(body: Any) -> bytes | None:
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if hasattr(body, "read"):
        data = await body.read()
        return data if isinstance(data, bytes) else bytes(data)
    if hasattr(body, "receive"):
        buf = bytearray()
        while True:
            try:
                chunk = await body.receive()
            except anyio.EndOfStream:
                break
            buf.extend(chunk)
        return bytes(buf)
    raise TypeError(f"unsupported body type: {type(body).__name__}")


async def serialize(response: HttpResponse, *, default_length: bool = True) -> bytes:
    """
    Serialize ``response`` to wire bytes.

    A readable body is read to the end first. Content-Length is the drained
    length unless the response asked for UNKNOWN_LENGTH. A response without
    a body gets ``Content-Length: 0`` when ``default_length`` is set, and no
    header otherwise; an empty body always gets ``Content-Length: 0``.

    Raises OSError when the body cannot be read or its length disagrees with
    the declared content length.
    """
    body = await _drain(response.body)
    headers = response.headers.copy()
    length = response.content_length

    if body is None:
        if default_length and length != UNKNOWN_LENGTH:
            headers["Content-Length"] = "0"
    elif length != UNKNOWN_LENGTH:
        if length is not None and length != len(body):
            raise OSError(f"content length {length} does not match body length {len(body)}")
        headers["Content-Length"] = str(len(body))

    start = response.status_line().encode("latin-1")
    return start + headers.to_bytes() + b"\r\n" + (body or b"")
