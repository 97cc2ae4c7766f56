"""
Fixture server example

Serves a directory of canned responses on one port and an HTTP echo on
another, both through tuntest proxy functions over plain TCP. A real tunnel
transport would build the RoutingDescriptor itself; here it is derived from
the request line.

Run:
  uv run python examples/serve_fixtures.py ./data

Then try:
  curl -i http://127.0.0.1:8080/data/foo/bar.zip
  curl -i http://127.0.0.1:8080/data/missing.txt
  curl -i -X POST http://127.0.0.1:8081/ -d 'hello there'
"""

from __future__ import annotations

import sys
from functools import partial

import anyio
from anyio.abc import SocketStream

from tuntest import (
    Protocol,
    RoutingDescriptor,
    build_response_library,
    debug_logging,
    echo_proxy,
    read_request,
)


async def handle_files(library, stream: SocketStream) -> None:
    async with stream:
        request = await read_request(stream)
        await library(stream, stream, RoutingDescriptor(protocol=Protocol.HTTP, url_path=request.path))


async def handle_echo(stream: SocketStream) -> None:
    async with stream:
        await echo_proxy(stream, stream, RoutingDescriptor(protocol=Protocol.HTTP))


async def main(directory: str) -> None:
    debug_logging()
    library = await build_response_library(directory)

    files = await anyio.create_tcp_listener(local_host="127.0.0.1", local_port=8080)
    echo = await anyio.create_tcp_listener(local_host="127.0.0.1", local_port=8081)

    print(f"Serving {len(library)} files from {library.root} on http://127.0.0.1:8080")
    print("Echoing HTTP on http://127.0.0.1:8081")
    print("Press Ctrl-C to stop.")

    async with anyio.create_task_group() as tg:
        tg.start_soon(files.serve, partial(handle_files, library))
        tg.start_soon(echo.serve, handle_echo)


if __name__ == "__main__":
    anyio.run(main, sys.argv[1] if len(sys.argv) > 1 else "./data")
