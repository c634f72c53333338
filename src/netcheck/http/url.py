# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared across probes."""

from __future__ import annotations

from urllib.parse import urlsplit

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def parse_probe_url(url: str | None) -> str | None:
    """
    Return the address when it is usable as a probe target, else None.

    A usable address is an absolute http(s) URL with a host. Surrounding
    whitespace is stripped; nothing else is rewritten.
    """
    raw = str(url or "").strip()
    if not raw:
        return None
    try:
        parts = urlsplit(raw)
        # Accessing .port validates the port component.
        _ = parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in SUPPORTED_SCHEMES or not parts.hostname:
        return None
    return raw


__all__ = ["SUPPORTED_SCHEMES", "parse_probe_url"]
