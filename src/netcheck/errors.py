# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http.models import HttpResponse


class InvalidProbeURL(ValueError):
    """Raised when a hardcoded probe address does not parse."""

    def __init__(self, url: str):
        super().__init__(f"Invalid probe URL: {url!r}")
        self.url = url


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    METERED_DENIED = "METERED_DENIED"
    NOT_HTTP = "NOT_HTTP"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps name resolution failures in ConnectError; look at the cause first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)) or isinstance(cause, ssl_module.SSLError):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, TimeoutError):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


_ERROR_TYPE_CATEGORIES: dict[str, ErrorCategory] = {
    "TimeoutException": ErrorCategory.TIMEOUT,
    "ConnectTimeout": ErrorCategory.TIMEOUT,
    "ReadTimeout": ErrorCategory.TIMEOUT,
    "WriteTimeout": ErrorCategory.TIMEOUT,
    "PoolTimeout": ErrorCategory.TIMEOUT,
    "TimeoutError": ErrorCategory.TIMEOUT,
    "ConnectError": ErrorCategory.CONNECTION_ERROR,
    "ReadError": ErrorCategory.CONNECTION_ERROR,
    "RemoteProtocolError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionRefusedError": ErrorCategory.CONNECTION_ERROR,
    "SSLError": ErrorCategory.SSL_ERROR,
    "SSLCertVerificationError": ErrorCategory.SSL_ERROR,
    "gaierror": ErrorCategory.DNS_ERROR,
    "MeteredAccessDenied": ErrorCategory.METERED_DENIED,
}


def categorize_response(response: HttpResponse | None) -> ErrorCategory:
    """Classify a normalized response for diagnostics logging."""
    if response is None:
        return ErrorCategory.UNKNOWN_ERROR
    if response.ok:
        return ErrorCategory.NONE if response.status_code is not None else ErrorCategory.NOT_HTTP
    recorded = response.meta.get("error_category")
    if recorded in ErrorCategory.__members__:
        return ErrorCategory(recorded)
    return _ERROR_TYPE_CATEGORIES.get(response.error_type or "", ErrorCategory.UNKNOWN_ERROR)


__all__ = [
    "ErrorCategory",
    "InvalidProbeURL",
    "categorize_exception",
    "categorize_response",
]
