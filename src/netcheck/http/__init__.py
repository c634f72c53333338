# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .cache import ResponseCache, send_with_cache
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse, RequestCachePolicy
from .url import parse_probe_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "RequestCachePolicy",
    "ResponseCache",
    "StubHttpClient",
    "create_default_http_client",
    "parse_probe_url",
    "send_with_cache",
]
