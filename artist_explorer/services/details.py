"""Detail lookup for a picked suggestion with latest-pick-wins semantics."""

from __future__ import annotations

from dataclasses import dataclass

from artist_explorer.domain.models import Entity
from artist_explorer.logging import logger
from artist_explorer.services.artist_api import ArtistApi
from artist_explorer.services.exceptions import SearchClientError
from artist_explorer.utils.tokens import RequestKind, RequestToken, RequestTokenRegistry

DETAIL_ERROR_MESSAGE = "Failed to load artist details."


@dataclass(frozen=True, slots=True)
class DetailOutcome:
    entity: Entity
    error: str | None = None


class EntityDetailResolver:
    """Fetches enriched details for the most recently picked entity.

    A failed fetch yields the summary back together with an error message.
    A fetch superseded by a newer pick raises ``StaleResponse``.
    """

    def __init__(self, api: ArtistApi, tokens: RequestTokenRegistry | None = None) -> None:
        self._api = api
        self._tokens = tokens or RequestTokenRegistry()

    def begin(self) -> RequestToken:
        return self._tokens.mint(RequestKind.DETAIL)

    def is_current(self, token: RequestToken) -> bool:
        return self._tokens.is_current(token)

    async def resolve(self, summary: Entity, token: RequestToken | None = None) -> DetailOutcome:
        token = token or self.begin()
        try:
            detail = await self._api.get_details(summary.id)
        except SearchClientError as exc:
            self._tokens.ensure_current(token)
            logger.warning("artist_details_failed", entity_id=summary.id, error=str(exc))
            return DetailOutcome(entity=summary, error=DETAIL_ERROR_MESSAGE)

        self._tokens.ensure_current(token)
        if detail.id != summary.id:
            logger.warning(
                "artist_details_id_mismatch",
                entity_id=summary.id,
                returned_id=detail.id,
            )
        return DetailOutcome(entity=summary.enrich(detail))


__all__ = [
    "DETAIL_ERROR_MESSAGE",
    "DetailOutcome",
    "EntityDetailResolver",
]
