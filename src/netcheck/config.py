# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Environment-backed transport settings for netcheck."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"netcheck/{__version__}"

# Matches the request timeout most platform HTTP stacks apply when none is set.
DEFAULT_TRANSPORT_TIMEOUT = 60.0


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP transport defaults."""

    timeout: float = DEFAULT_TRANSPORT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 1024 * 1024
    metered_network: bool = False
    max_workers: int | None = None

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("NETCHECK_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("NETCHECK_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("NETCHECK_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("NETCHECK_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("NETCHECK_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            metered_network=_bool_env("NETCHECK_METERED_NETWORK", cls.metered_network),
            max_workers=_optional_int_env("NETCHECK_MAX_WORKERS", cls.max_workers),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
