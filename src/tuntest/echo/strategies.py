"""Echo strategies: turn inbound bytes into an outbound response."""

from __future__ import annotations

import anyio
from anyio.abc import ByteReceiveStream, ByteSendStream

from ..http.request import HttpRequest, read_request
from ..http.response import HttpResponse, serialize
from ..proto import RoutingDescriptor


async def echo_raw(sink: ByteSendStream, source: ByteReceiveStream, descriptor: RoutingDescriptor) -> None:
    """Copy everything from ``source`` to ``sink`` verbatim."""
    while True:
        try:
            chunk = await source.receive()
        except anyio.EndOfStream:
            return
        await sink.send(chunk)


def echo_response(request: HttpRequest) -> HttpResponse:
    """200 OK mirroring the request body; no body if the request had none."""
    if request.body is None:
        return HttpResponse(status=200, version=(1, 0))
    return HttpResponse(
        status=200,
        version=(1, 0),
        body=request.body,
        content_length=len(request.body),
    )


async def echo_http(sink: ByteSendStream, source: ByteReceiveStream, descriptor: RoutingDescriptor) -> None:
    """
    Read one HTTP request from ``source`` and answer with its body.

    An empty request body is answered with ``Content-Length: 0``; a request
    without a body gets a response with no Content-Length header at all.

    Raises RequestParseError on malformed input, in which case nothing is
    written to ``sink``.
    """
    request = await read_request(source)
    response = echo_response(request)
    # no Content-Length header when the request had no body
    await sink.send(await serialize(response, default_length=response.body is not None))
