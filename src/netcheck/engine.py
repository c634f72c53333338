# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe coordinator: races probes and returns on the first success."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from .config import HttpSettings, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .probe.probe import Probe

logger = logging.getLogger(__name__)


class ProbeCoordinator:
    """
    Runs connectivity probes against a shared HttpClient.

    ``race`` fans probes out to worker threads and decides on the calling
    thread: the first accepted probe wins, pending workers are cancelled and
    in-flight ones are abandoned without being awaited. ``False`` is only
    returned once every probe has reported.
    """

    def __init__(self, http_client: HttpClient | None = None, settings: HttpSettings | None = None):
        self.settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.settings)

    def check(self, probe: Probe, cancel_event: threading.Event | None = None) -> bool:
        return probe.execute(self.http_client, cancel_event)

    def race(self, probes: Iterable[Probe]) -> bool:
        unique = frozenset(probes)
        if not unique:
            return False
        if len(unique) == 1:
            (probe,) = unique
            return self.check(probe)

        cancel_event = threading.Event()
        max_workers = self.settings.max_workers or len(unique)
        executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="netcheck-probe")
        try:
            pending: dict[Future[bool], Probe] = {
                executor.submit(self.check, probe, cancel_event): probe for probe in unique
            }
            for future in as_completed(pending):
                probe = pending.pop(future)
                if future.result():
                    logger.debug("Connectivity confirmed by %s; abandoning %d probe(s)", probe.url, len(pending))
                    cancel_event.set()
                    return True
            logger.debug("All %d probe(s) failed", len(unique))
            return False
        finally:
            cancel_event.set()
            executor.shutdown(wait=False, cancel_futures=True)

    def close(self) -> None:
        self.http_client.close()


__all__ = ["ProbeCoordinator"]
