# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import time

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RequestCachePolicy

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper.

    A single instance is shared by every worker of a race; ``httpx.Client``
    is safe to use from multiple threads.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _build_headers(self, request: HttpRequest) -> dict[str, str]:
        headers = {"User-Agent": self.settings.user_agent}
        if request.cache_policy is RequestCachePolicy.RELOAD_IGNORING_CACHE_DATA:
            headers.update(NO_CACHE_HEADERS)
        return headers

    def request(self, request: HttpRequest) -> HttpResponse:
        if self.settings.metered_network and not request.allows_metered_access:
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message="Request disallows metered access on a metered network",
                error_type="MeteredAccessDenied",
            )

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = 1024 * 1024

            timeout = request.timeout if request.timeout is not None else self.settings.timeout
            # httpx applies the timeout per phase; the request timeout bounds the whole exchange.
            deadline = time.monotonic() + timeout

            with self._client.stream(
                request.method,
                request.url,
                headers=self._build_headers(request),
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        return self._timed_out(request, timeout)
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                if time.monotonic() > deadline:
                    return self._timed_out(request, timeout)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers={key.lower(): value for key, value in resp.headers.items()},
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "body_bytes_limit": max_body_bytes,
                },
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc).value},
            )

    @staticmethod
    def _timed_out(request: HttpRequest, timeout: float) -> HttpResponse:
        return HttpResponse(
            ok=False,
            url=request.url,
            error_message=f"Request exceeded {timeout}s deadline",
            error_type="TimeoutException",
            meta={"error_category": ErrorCategory.TIMEOUT.value},
        )

    def close(self) -> None:
        self._client.close()
