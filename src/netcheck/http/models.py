# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across netcheck."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Headers = dict[str, str]


class RequestCachePolicy(str, Enum):
    """Per-request cache directive carried on every HttpRequest."""

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_CACHE_DATA = "reload_ignoring_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"


@dataclass(frozen=True)
class HttpRequest:
    """Fully resolved request descriptor consumed by HttpClient implementations.

    Instances are immutable and hashable; probes compare and deduplicate on
    this value.
    """

    url: str
    method: str = "GET"
    cache_policy: RequestCachePolicy = RequestCachePolicy.USE_PROTOCOL_CACHE_POLICY
    timeout: float | None = None
    allows_metered_access: bool = True
    allow_redirects: bool = True

    @property
    def cache_key(self) -> tuple[str, str]:
        return (self.method.upper(), self.url)


@dataclass
class HttpResponse:
    """Normalized HTTP response.

    ``ok`` reports transport success only; ``status_code`` is None when no
    HTTP status line was received.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_http(self) -> bool:
        """True when the transport produced an interpretable HTTP response."""
        return self.ok and self.status_code is not None
