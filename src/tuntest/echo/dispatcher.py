"""Protocol dispatch for proxy functions."""

from __future__ import annotations

import threading
from typing import Dict, Optional

from anyio.abc import ByteReceiveStream, ByteSendStream

from ..proto import Protocol, ProxyFunc, RoutingDescriptor
from .strategies import echo_http, echo_raw


class ProtocolDispatcher:
    """
    Thread-safe map of protocol tags to proxy functions.

    Tags without a registered handler go to the fallback, raw echo unless
    another one is given. An unknown tag is never an error.
    """

    def __init__(self, handlers: Optional[Dict[Protocol, ProxyFunc]] = None, *, fallback: ProxyFunc = echo_raw):
        self._handlers: Dict[Protocol, ProxyFunc] = dict(handlers or {})
        self._fallback = fallback
        self._lock = threading.Lock()

    @property
    def fallback(self) -> ProxyFunc:
        return self._fallback

    def register(self, protocol: Protocol, func: ProxyFunc) -> bool:
        """
        Register a handler for a protocol.

        Returns True if successful, False if the protocol already has one.
        """
        with self._lock:
            if protocol in self._handlers:
                return False
            self._handlers[protocol] = func
            return True

    def unregister(self, protocol: Protocol) -> bool:
        """
        Remove the handler for a protocol.

        Returns True if successful, False if none was registered.
        """
        with self._lock:
            if protocol not in self._handlers:
                return False
            del self._handlers[protocol]
            return True

    def handler_for(self, protocol: Protocol) -> ProxyFunc:
        """Handler for ``protocol``, or the fallback."""
        with self._lock:
            return self._handlers.get(protocol, self._fallback)

    def registered(self) -> list[Protocol]:
        """Return list of all protocols with a registered handler."""
        with self._lock:
            return list(self._handlers.keys())

    async def __call__(self, sink: ByteSendStream, source: ByteReceiveStream, descriptor: RoutingDescriptor) -> None:
        await self.handler_for(descriptor.protocol)(sink, source, descriptor)


# Global dispatcher instance
_default_dispatcher = ProtocolDispatcher({Protocol.HTTP: echo_http})


def default_dispatcher() -> ProtocolDispatcher:
    return _default_dispatcher


async def echo_proxy(sink: ByteSendStream, source: ByteReceiveStream, descriptor: RoutingDescriptor) -> None:
    """Echo ``source`` back through ``sink`` according to ``descriptor.protocol``."""
    await _default_dispatcher(sink, source, descriptor)
