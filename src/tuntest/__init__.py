"""Echo and canned-response proxy functions for testing tunnel transports."""

from .proto import Protocol, RoutingDescriptor, ProxyFunc
from .errors import (
    TunTestError,
    PathError,
    LibraryBuildError,
    FileResponseError,
    RequestParseError,
)
from .http import Headers, HttpRequest, HttpResponse, content_type_for, read_request, serialize
from .echo import ProtocolDispatcher, echo_proxy, echo_http, echo_raw
from .library import ResponseLibrary, build_response_library, file_response
from .tlsconfig import CertKeyPair, tls_context, server_tls_context, client_tls_context
from .log import configure_logging, debug_logging

__all__ = [
    # Routing
    "Protocol",
    "RoutingDescriptor",
    "ProxyFunc",
    # Errors
    "TunTestError",
    "PathError",
    "LibraryBuildError",
    "FileResponseError",
    "RequestParseError",
    # HTTP framing
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "content_type_for",
    "read_request",
    "serialize",
    # Echo
    "ProtocolDispatcher",
    "echo_proxy",
    "echo_http",
    "echo_raw",
    # Response library
    "ResponseLibrary",
    "build_response_library",
    "file_response",
    # TLS
    "CertKeyPair",
    "tls_context",
    "server_tls_context",
    "client_tls_context",
    # Logging
    "configure_logging",
    "debug_logging",
]
