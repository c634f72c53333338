# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
netcheck package entrypoint.

netcheck decides whether the host has usable internet connectivity by
racing HTTP requests against well-known captive portal check endpoints.
HTTP behavior is abstracted behind an injectable client interface, and
probes, predicates and transport settings are immutable dataclasses.
"""

from .config import HttpSettings, load_http_settings
from .configuration import CachePolicy, ConnectivityConfiguration, IgnoreCache, UseCache
from .engine import ProbeCoordinator
from .errors import ErrorCategory, InvalidProbeURL
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RequestCachePolicy,
    ResponseCache,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .probe import (
    BUILTIN_PROBES,
    EXPECT_200,
    EXPECT_204,
    ConnectivityValidation,
    Probe,
    all_default_probes,
    default_probes,
)
from .runtime import NetCheck, check_connectivity
from .version import __version__

__all__ = [
    "BUILTIN_PROBES",
    "CachePolicy",
    "ConnectivityConfiguration",
    "ConnectivityValidation",
    "EXPECT_200",
    "EXPECT_204",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "IgnoreCache",
    "InvalidProbeURL",
    "NetCheck",
    "Probe",
    "ProbeCoordinator",
    "RequestCachePolicy",
    "ResponseCache",
    "StubHttpClient",
    "UseCache",
    "all_default_probes",
    "check_connectivity",
    "create_default_http_client",
    "default_probes",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
