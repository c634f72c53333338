# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Built-in probes against well-known captive portal check endpoints.

See https://en.wikipedia.org/wiki/Captive_portal for the conventions each
endpoint follows.
"""

from __future__ import annotations

from collections.abc import Callable

from ..configuration import ConnectivityConfiguration
from .probe import Probe
from .validation import EXPECT_200, EXPECT_204

_DEFAULT = ConnectivityConfiguration.DEFAULT


def apple_captive(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://captive.apple.com", EXPECT_200, configuration)


def apple_library(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://www.apple.com/library/test/success.html", EXPECT_200, configuration)


def google_gstatic(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://www.gstatic.com/generate_204", EXPECT_204, configuration)


def cloudflare(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://cp.cloudflare.com/generate_204", EXPECT_204, configuration)


def microsoft(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://www.msftconnecttest.com/connecttest.txt", EXPECT_200, configuration)


def vivo_wifi(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://wifi.vivo.com.cn/generate_204", EXPECT_204, configuration)


def miui_connect(configuration: ConnectivityConfiguration = _DEFAULT) -> Probe:
    return Probe.from_url("http://connect.rom.miui.com/generate_204", EXPECT_204, configuration)


BUILTIN_PROBES: dict[str, Callable[..., Probe]] = {
    "apple_captive": apple_captive,
    "apple_library": apple_library,
    "google_gstatic": google_gstatic,
    "cloudflare": cloudflare,
    "microsoft": microsoft,
    "vivo_wifi": vivo_wifi,
    "miui_connect": miui_connect,
}

DEFAULT_PROBE_NAMES = ("apple_captive", "google_gstatic", "vivo_wifi")


def default_probes(configuration: ConnectivityConfiguration = _DEFAULT) -> frozenset[Probe]:
    """Small, operationally diverse set used when the caller supplies none."""
    return frozenset(BUILTIN_PROBES[name](configuration) for name in DEFAULT_PROBE_NAMES)


def all_default_probes(configuration: ConnectivityConfiguration = _DEFAULT) -> frozenset[Probe]:
    return frozenset(factory(configuration) for factory in BUILTIN_PROBES.values())


__all__ = [
    "BUILTIN_PROBES",
    "DEFAULT_PROBE_NAMES",
    "all_default_probes",
    "apple_captive",
    "apple_library",
    "cloudflare",
    "default_probes",
    "google_gstatic",
    "microsoft",
    "miui_connect",
    "vivo_wifi",
]
