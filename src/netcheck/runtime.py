# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level netcheck facade and the ``check_connectivity`` entry point."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress
from typing import Union

from .config import load_http_settings
from .engine import ProbeCoordinator
from .http.client import HttpClient, create_default_http_client
from .probe.catalog import default_probes
from .probe.probe import Probe

ProbeSelection = Union[Probe, Iterable[Probe], None]


class NetCheck:
    """
    Convenience wrapper that shares one HTTP client across connectivity checks.

    Use it as a context manager so the client is closed when done.
    """

    def __init__(self, http_client: HttpClient | None = None):
        self.http_settings = load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.coordinator = ProbeCoordinator(self.http_client, self.http_settings)

    def check_connectivity(self, using: ProbeSelection = None) -> bool:
        """Return True when any selected probe confirms connectivity.

        ``using`` may be a single Probe, any iterable of probes (deduplicated
        by request) or None for the default probe set.
        """
        if isinstance(using, Probe):
            return self.coordinator.check(using)
        probes = default_probes() if using is None else using
        return self.coordinator.race(probes)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> NetCheck:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def check_connectivity(using: ProbeSelection = None, *, client: HttpClient | None = None) -> bool:
    """One-shot connectivity check.

    An injected ``client`` is left open; otherwise a default client is
    created for the call and closed afterwards.
    """
    if client is not None:
        return NetCheck(http_client=client).check_connectivity(using)
    # Closing after a win abandons losing requests mid-flight; their errors are discarded.
    with NetCheck() as checker:
        return checker.check_connectivity(using)


__all__ = ["NetCheck", "ProbeSelection", "check_connectivity"]
