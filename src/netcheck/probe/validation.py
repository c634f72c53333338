# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Acceptance predicates deciding whether a probe response means "connected"."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

from ..http.models import HttpRequest, HttpResponse

Validation = Callable[[HttpRequest, HttpResponse, bytes], bool]


@dataclass(frozen=True)
class ConnectivityValidation:
    """
    Wrapper around a pure acceptance predicate.

    The predicate receives the request descriptor, the normalized response
    and the body bytes. It runs on worker threads during a race, so it must
    not mutate shared state.
    """

    predicate: Validation

    EXPECT_200: ClassVar[ConnectivityValidation]
    EXPECT_204: ClassVar[ConnectivityValidation]

    def __call__(self, request: HttpRequest, response: HttpResponse, content: bytes) -> bool:
        return bool(self.predicate(request, response, content))

    @classmethod
    def validation(cls, predicate: Validation) -> ConnectivityValidation:
        return cls(predicate)

    @classmethod
    def status_code(cls, expected: int) -> ConnectivityValidation:
        """Accept exactly when the response status equals ``expected``."""

        def _matches(_request: HttpRequest, response: HttpResponse, _content: bytes) -> bool:
            return response.status_code == expected

        return cls(_matches)


# "Plain success page" and "empty-body quick check" captive portal conventions.
ConnectivityValidation.EXPECT_200 = ConnectivityValidation.status_code(200)
ConnectivityValidation.EXPECT_204 = ConnectivityValidation.status_code(204)

EXPECT_200 = ConnectivityValidation.EXPECT_200
EXPECT_204 = ConnectivityValidation.EXPECT_204

__all__ = ["ConnectivityValidation", "EXPECT_200", "EXPECT_204", "Validation"]
