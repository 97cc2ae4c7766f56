"""Hand-built HTTP framing used by the echo strategies and the response library."""

from .headers import Headers, canonical_name
from .request import HttpRequest, read_request
from .response import (
    DEFAULT_CONTENT_TYPE,
    UNKNOWN_LENGTH,
    HttpResponse,
    content_type_for,
    not_found_response,
    serialize,
)

__all__ = [
    "Headers",
    "canonical_name",
    "HttpRequest",
    "read_request",
    "HttpResponse",
    "DEFAULT_CONTENT_TYPE",
    "UNKNOWN_LENGTH",
    "content_type_for",
    "not_found_response",
    "serialize",
]
