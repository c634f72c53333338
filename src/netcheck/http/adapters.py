# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable HttpClient implementations for tests and offline use."""

from __future__ import annotations

import threading
import time

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are keyed by URL. An optional per-URL delay simulates network
    latency; when the delay exceeds the request timeout the call fails the
    way a real transport timeout would.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self._responses = dict(responses or {})
        self._delays = dict(delays or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.completed: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse, *, delay: float | None = None) -> None:
        self._responses[url] = response
        if delay is not None:
            self._delays[url] = delay

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)

        delay = self._delays.get(request.url, 0.0)
        if delay > 0:
            if request.timeout is not None and delay > request.timeout:
                time.sleep(request.timeout)
                self._record_completion(request)
                return HttpResponse(
                    ok=False,
                    url=request.url,
                    error_message=f"Timed out after {request.timeout}s",
                    error_type="TimeoutException",
                )
            time.sleep(delay)

        self._record_completion(request)
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured")

    def _record_completion(self, request: HttpRequest) -> None:
        with self._lock:
            self.completed.append(request)

    def close(self) -> None:
        return None


__all__ = ["StubHttpClient"]
