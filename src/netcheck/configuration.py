# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transport configuration for connectivity probes.

A ConnectivityConfiguration describes how a probe's request is issued:
timeout, cache behaviour and whether metered (cellular) links may be used.
Instances are immutable; the ``with_*`` helpers derive new ones so calls
can be chained::

    config = ConnectivityConfiguration.DEFAULT.with_timeout(5.0).ignore_cache()
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Union

from .config import DEFAULT_TRANSPORT_TIMEOUT
from .http.cache import ResponseCache
from .http.models import RequestCachePolicy

DEFAULT_PROBE_TIMEOUT = 3.0


@dataclass(frozen=True)
class IgnoreCache:
    """Always load from the network; never read or write a cache."""


@dataclass(frozen=True)
class UseCache:
    """Use ``policy`` against an optional shared ``cache`` store."""

    policy: RequestCachePolicy = RequestCachePolicy.USE_PROTOCOL_CACHE_POLICY
    cache: ResponseCache | None = field(default=None, compare=False)


CachePolicy = Union[IgnoreCache, UseCache]


@dataclass(frozen=True)
class ConnectivityConfiguration:
    """Settings controlling how the HTTP client issues a probe request."""

    timeout: float | None = DEFAULT_PROBE_TIMEOUT
    cache_policy: CachePolicy = field(default_factory=IgnoreCache)
    allows_metered_access: bool = True

    DEFAULT: ClassVar[ConnectivityConfiguration]

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0 when provided")
        if not isinstance(self.cache_policy, (IgnoreCache, UseCache)):
            raise TypeError(f"Unsupported cache policy: {self.cache_policy!r}")

    def with_timeout(self, timeout: float | None) -> ConnectivityConfiguration:
        """Return a copy with ``timeout`` (None selects the transport default)."""
        return replace(self, timeout=timeout)

    def with_cache_policy(self, cache_policy: CachePolicy) -> ConnectivityConfiguration:
        return replace(self, cache_policy=cache_policy)

    def ignore_cache(self) -> ConnectivityConfiguration:
        return self.with_cache_policy(IgnoreCache())

    def with_metered_access(self, allowed: bool) -> ConnectivityConfiguration:
        return replace(self, allows_metered_access=allowed)

    def resolved_timeout(self) -> float:
        return self.timeout if self.timeout is not None else DEFAULT_TRANSPORT_TIMEOUT

    def request_cache_policy(self) -> RequestCachePolicy:
        if isinstance(self.cache_policy, UseCache):
            return self.cache_policy.policy
        return RequestCachePolicy.RELOAD_IGNORING_CACHE_DATA

    def cache_store(self) -> ResponseCache | None:
        if isinstance(self.cache_policy, UseCache):
            return self.cache_policy.cache
        return None


ConnectivityConfiguration.DEFAULT = ConnectivityConfiguration()


__all__ = [
    "CachePolicy",
    "ConnectivityConfiguration",
    "DEFAULT_PROBE_TIMEOUT",
    "IgnoreCache",
    "UseCache",
]
