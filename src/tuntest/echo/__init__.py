"""Echo proxy functions and protocol dispatch."""

from .dispatcher import ProtocolDispatcher, default_dispatcher, echo_proxy
from .strategies import echo_http, echo_raw, echo_response

__all__ = [
    "ProtocolDispatcher",
    "default_dispatcher",
    "echo_proxy",
    "echo_http",
    "echo_raw",
    "echo_response",
]
