"""
Typed upstream failures.

Every way a third-party call can go wrong is raised as a subclass of
UpstreamError. The services catch UpstreamError and degrade to synthetic
data; anything else is treated as an internal error.
"""

from enum import Enum
from typing import Optional


class UpstreamErrorKind(str, Enum):
    TIMEOUT = 'timeout'
    HTTP_STATUS = 'http_status'
    MALFORMED = 'malformed'
    NETWORK = 'network'


class UpstreamError(Exception):
    """Base class for failures talking to a third-party API."""
    kind: UpstreamErrorKind

    def __init__(self, message: str, upstream: Optional[str] = None):
        super().__init__(message)
        self.upstream = upstream


class UpstreamTimeout(UpstreamError):
    """The upstream did not answer within the request timeout."""
    kind = UpstreamErrorKind.TIMEOUT


class UpstreamHttpError(UpstreamError):
    """The upstream answered with a non-2xx status."""
    kind = UpstreamErrorKind.HTTP_STATUS

    def __init__(self, message: str, status_code: int, upstream: Optional[str] = None):
        super().__init__(message, upstream)
        self.status_code = status_code


class UpstreamMalformed(UpstreamError):
    """The body was not JSON, or lacked the expected (non-empty) array field."""
    kind = UpstreamErrorKind.MALFORMED


class NetworkError(UpstreamError):
    """Transport-level failure (DNS, refused connection, TLS, ...)."""
    kind = UpstreamErrorKind.NETWORK
