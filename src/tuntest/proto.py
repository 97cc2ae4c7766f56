"""Routing metadata handed to proxy functions by the tunnel transport."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from anyio.abc import ByteReceiveStream, ByteSendStream


class Protocol(Enum):
    """Protocol carried by a tunneled connection."""
    RAW = "raw"
    HTTP = "http"


@dataclass(frozen=True, slots=True)
class RoutingDescriptor:
    """
    Per-request routing metadata.

    Attributes:
        protocol: Protocol tag used to select an echo strategy
        url_path: URL path of the request, used by the response library
        forwarded_by: Tunnel peer that forwarded the request, informational
    """
    protocol: Protocol = Protocol.RAW
    url_path: str = ""
    forwarded_by: str = ""

    def __str__(self) -> str:
        protocol = getattr(self.protocol, "value", self.protocol)
        s = f"{protocol} {self.url_path or '-'}"
        if self.forwarded_by:
            s += f" (forwarded by {self.forwarded_by})"
        return s


# sink, source, descriptor. Neither stream is closed by the callee.
ProxyFunc = Callable[[ByteSendStream, ByteReceiveStream, RoutingDescriptor], Awaitable[None]]
