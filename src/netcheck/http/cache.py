# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response cache and the cache-directive helper for HttpClient implementations."""

from __future__ import annotations

import threading
from dataclasses import replace

from .client import HttpClient
from .models import HttpRequest, HttpResponse, RequestCachePolicy


class ResponseCache:
    """Thread-safe in-memory response store keyed by (method, url)."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], HttpResponse] = {}
        self._lock = threading.Lock()

    def get(self, request: HttpRequest) -> HttpResponse | None:
        with self._lock:
            return self._entries.get(request.cache_key)

    def store(self, request: HttpRequest, response: HttpResponse) -> None:
        if not response.is_http:
            return
        with self._lock:
            self._entries[request.cache_key] = response

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _cached_copy(response: HttpResponse) -> HttpResponse:
    return replace(response, meta={**response.meta, "from_cache": True})


def send_with_cache(
    client: HttpClient,
    request: HttpRequest,
    *,
    cache: ResponseCache | None = None,
) -> HttpResponse:
    """Execute a request honouring its cache directive against an optional store."""
    policy = request.cache_policy
    if cache is None or policy is RequestCachePolicy.RELOAD_IGNORING_CACHE_DATA:
        if policy is RequestCachePolicy.RETURN_CACHE_DATA_DONT_LOAD:
            return HttpResponse(ok=False, url=request.url, error_message="No cache configured", error_type="CacheMiss")
        return client.request(request)

    if policy in (RequestCachePolicy.RETURN_CACHE_DATA_ELSE_LOAD, RequestCachePolicy.RETURN_CACHE_DATA_DONT_LOAD):
        cached = cache.get(request)
        if cached is not None:
            return _cached_copy(cached)
        if policy is RequestCachePolicy.RETURN_CACHE_DATA_DONT_LOAD:
            return HttpResponse(ok=False, url=request.url, error_message="Response not cached", error_type="CacheMiss")

    response = client.request(request)
    cache.store(request, response)
    return response


__all__ = ["ResponseCache", "send_with_cache"]
