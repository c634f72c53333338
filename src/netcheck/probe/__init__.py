# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe definitions, acceptance predicates and the built-in catalog."""

from .catalog import (
    BUILTIN_PROBES,
    DEFAULT_PROBE_NAMES,
    all_default_probes,
    apple_captive,
    apple_library,
    cloudflare,
    default_probes,
    google_gstatic,
    microsoft,
    miui_connect,
    vivo_wifi,
)
from .probe import Probe, build_request
from .validation import EXPECT_200, EXPECT_204, ConnectivityValidation, Validation

__all__ = [
    "BUILTIN_PROBES",
    "ConnectivityValidation",
    "DEFAULT_PROBE_NAMES",
    "EXPECT_200",
    "EXPECT_204",
    "Probe",
    "Validation",
    "all_default_probes",
    "apple_captive",
    "apple_library",
    "build_request",
    "cloudflare",
    "default_probes",
    "google_gstatic",
    "microsoft",
    "miui_connect",
    "vivo_wifi",
]
