# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Probe: one self-describing connectivity check.

A probe pairs a resolved request with an acceptance predicate and the
transport configuration used to issue it. Probes compare and hash on the
request alone, so a set keeps one entry per distinct request even when two
entries would judge the response differently.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from ..configuration import ConnectivityConfiguration
from ..errors import InvalidProbeURL, categorize_exception, categorize_response
from ..http.cache import send_with_cache
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse
from ..http.url import parse_probe_url
from .validation import ConnectivityValidation

logger = logging.getLogger(__name__)


def build_request(url: str, configuration: ConnectivityConfiguration) -> HttpRequest:
    """Resolve a request descriptor for ``url`` from a transport configuration."""
    return HttpRequest(
        url=url,
        method="GET",
        cache_policy=configuration.request_cache_policy(),
        timeout=configuration.resolved_timeout(),
        allows_metered_access=configuration.allows_metered_access,
    )


@dataclass(frozen=True)
class Probe:
    request: HttpRequest
    validation: ConnectivityValidation = field(compare=False)
    configuration: ConnectivityConfiguration = field(default=ConnectivityConfiguration.DEFAULT, compare=False)

    @classmethod
    def from_url(
        cls,
        url: str,
        validation: ConnectivityValidation,
        configuration: ConnectivityConfiguration = ConnectivityConfiguration.DEFAULT,
    ) -> Probe:
        """Build a probe from a hardcoded address; raises InvalidProbeURL if it does not parse."""
        parsed = parse_probe_url(url)
        if parsed is None:
            raise InvalidProbeURL(url)
        return cls(build_request(parsed, configuration), validation, configuration)

    @classmethod
    def from_string(
        cls,
        url: str | None,
        validation: ConnectivityValidation,
        configuration: ConnectivityConfiguration = ConnectivityConfiguration.DEFAULT,
    ) -> Probe | None:
        """Build a probe from untrusted input; returns None if the address does not parse."""
        parsed = parse_probe_url(url)
        if parsed is None:
            return None
        return cls(build_request(parsed, configuration), validation, configuration)

    @property
    def url(self) -> str:
        return self.request.url

    def execute(
        self,
        client: HttpClient | None = None,
        cancel_event: threading.Event | None = None,
    ) -> bool:
        """Issue the request once and report whether the response is accepted.

        Never raises: every transport or predicate failure yields False.
        """
        if cancel_event is not None and cancel_event.is_set():
            return False

        owns_client = client is None
        active_client = client or create_default_http_client()
        try:
            response = self._send(active_client)
        finally:
            if owns_client:
                active_client.close()

        if cancel_event is not None and cancel_event.is_set():
            # Decided elsewhere; the outcome is discarded.
            return False

        if not response.is_http:
            logger.debug(
                "Probe %s failed: %s (%s)",
                self.url,
                response.error_message,
                categorize_response(response).value,
            )
            return False

        try:
            accepted = self.validation(self.request, response, response.content)
        except Exception:  # noqa: BLE001
            logger.exception("Acceptance predicate for %s raised", self.url)
            return False

        if not accepted:
            logger.debug("Probe %s rejected status %s", self.url, response.status_code)
        return accepted

    def _send(self, client: HttpClient) -> HttpResponse:
        try:
            return send_with_cache(client, self.request, cache=self.configuration.cache_store())
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=self.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc).value},
            )


__all__ = ["Probe", "build_request"]
