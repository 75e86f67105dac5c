"""Monotonic request tokens used to tell the newest response from late ones."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import StrEnum

from artist_explorer.services.exceptions import StaleResponse


class RequestKind(StrEnum):
    SUGGESTION = "suggestion"
    SUBMIT = "submit"
    DETAIL = "detail"


@dataclass(frozen=True, slots=True)
class RequestToken:
    kind: RequestKind
    serial: int


class RequestTokenRegistry:
    """Mints tokens from one counter and tracks the newest serial per kind.

    Only the most recently minted token of a kind is current; kinds never
    supersede each other.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: dict[RequestKind, int] = {}

    def mint(self, kind: RequestKind) -> RequestToken:
        token = RequestToken(kind=kind, serial=next(self._counter))
        self._latest[kind] = token.serial
        return token

    def invalidate(self, kind: RequestKind) -> None:
        """Make every outstanding token of ``kind`` stale without starting a request."""

        self._latest[kind] = next(self._counter)

    def is_current(self, token: RequestToken) -> bool:
        return self._latest.get(token.kind) == token.serial

    def ensure_current(self, token: RequestToken) -> None:
        if not self.is_current(token):
            raise StaleResponse(
                f"{token.kind} response #{token.serial} superseded by #{self._latest.get(token.kind)}"
            )


__all__ = ["RequestKind", "RequestToken", "RequestTokenRegistry"]
