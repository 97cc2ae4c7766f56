"""Reading a single HTTP/1.x request off a byte stream."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import unquote

import anyio
from anyio.abc import AnyByteReceiveStream
from anyio.streams.buffered import BufferedByteReceiveStream

from ..errors import RequestParseError
from .headers import Headers


MAX_HEADER_BYTES = 64 * 1024
MAX_BODY_BYTES = 16 * 1024 * 1024
MAX_LINE_BYTES = 4096

_HEX = re.compile(rb"^[0-9a-fA-F]+$")
_VERSION = re.compile(r"^HTTP/\d\.\d$")


@dataclass(frozen=True, slots=True)
class HttpRequest:
    method: str
    target: str
    version: str
    headers: Headers = field(default_factory=Headers)
    # None when the request carried no body framing at all
    body: bytes | None = None

    @property
    def path(self) -> str:
        return unquote(self.target.split("?", 1)[0])


def _parse_head(head: bytes) -> tuple[str, str, str, Headers]:
    # head is the request line + header lines, without the terminating blank line
    lines = head.decode("iso-8859-1").split("\r\n")
    if not lines or not lines[0]:
        raise RequestParseError("missing request line")

    parts = lines[0].split(" ")
    if len(parts) != 3 or not all(parts):
        raise RequestParseError(f"invalid request line: {lines[0]!r}")
    method, target, version = parts
    if not _VERSION.match(version):
        raise RequestParseError(f"invalid http version: {version!r}")

    headers = Headers()
    for line in lines[1:]:
        if ":" not in line:
            raise RequestParseError(f"malformed header line: {line!r}")
        k, v = line.split(":", 1)
        if not k.strip() or k != k.strip():
            raise RequestParseError(f"malformed header name: {k!r}")
        headers[k] = v.strip()
    return method, target, version, headers


async def _read_line(stream: BufferedByteReceiveStream) -> bytes:
    try:
        return await stream.receive_until(b"\r\n", MAX_LINE_BYTES)
    except anyio.IncompleteRead as e:
        raise RequestParseError("unexpected end of stream in chunked body") from e
    except anyio.DelimiterNotFound as e:
        raise RequestParseError("chunk line too long") from e


async def _read_exactly(stream: BufferedByteReceiveStream, n: int) -> bytes:
    try:
        return await stream.receive_exactly(n)
    except anyio.IncompleteRead as e:
        raise RequestParseError(f"unexpected end of stream, wanted {n} body bytes") from e


async def _read_chunked(stream: BufferedByteReceiveStream, max_body_bytes: int) -> bytes:
    buf = bytearray()
    while True:
        size_text = (await _read_line(stream)).split(b";", 1)[0].strip()
        if not _HEX.match(size_text):
            raise RequestParseError(f"invalid chunk size: {size_text!r}")
        size = int(size_text, 16)
        if size == 0:
            break
        if len(buf) + size > max_body_bytes:
            raise RequestParseError("request body too large")
        buf.extend(await _read_exactly(stream, size))
        if await _read_exactly(stream, 2) != b"\r\n":
            raise RequestParseError("missing chunk terminator")

    # trailers, up to the blank line
    while await _read_line(stream):
        pass
    return bytes(buf)


async def _read_body(stream: BufferedByteReceiveStream, headers: Headers, max_body_bytes: int) -> bytes | None:
    encoding = headers.get("Transfer-Encoding")
    if encoding is not None:
        codings = [c.strip().lower() for c in encoding.split(",")]
        if codings[-1] != "chunked":
            raise RequestParseError(f"unsupported transfer encoding: {encoding!r}")
        return await _read_chunked(stream, max_body_bytes)

    length_text = headers.get("Content-Length")
    if length_text is None:
        return None
    if not length_text.isdigit():
        raise RequestParseError(f"invalid content length: {length_text!r}")
    length = int(length_text)
    if length > max_body_bytes:
        raise RequestParseError("request body too large")
    return await _read_exactly(stream, length)


async def read_request(
    source: AnyByteReceiveStream,
    *,
    max_header_bytes: int = MAX_HEADER_BYTES,
    max_body_bytes: int = MAX_BODY_BYTES,
) -> HttpRequest:
    """
    Read one HTTP request from ``source``.

    The body is framed by Content-Length or chunked Transfer-Encoding and is
    fully buffered. A request with neither has ``body=None``; a request with
    ``Content-Length: 0`` has ``body=b""``.

    Raises RequestParseError on malformed or truncated input.
    """
    stream = BufferedByteReceiveStream(source)
    try:
        head = await stream.receive_until(b"\r\n\r\n", max_header_bytes)
    except anyio.IncompleteRead as e:
        raise RequestParseError("unexpected end of stream in request header") from e
    except anyio.DelimiterNotFound as e:
        raise RequestParseError("request header too large") from e

    method, target, version, headers = _parse_head(head)
    body = await _read_body(stream, headers, max_body_bytes)
    return HttpRequest(method=method, target=target, version=version, headers=headers, body=body)
