"""HTTP client for the artist search backend."""

from __future__ import annotations

from typing import Any, Iterable, Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from artist_explorer.config import ApiSettings
from artist_explorer.domain.models import Entity, SearchPayload
from artist_explorer.logging import logger
from artist_explorer.services.exceptions import NetworkError, ServerError


class ArtistApi(Protocol):
    async def search(self, query: str, limit: int) -> SearchPayload: ...

    async def get_details(self, entity_id: str) -> Entity: ...


class ArtistSearchClient:
    """Talks to ``GET /search`` and ``GET /artist/{id}`` on the configured base URL."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: ApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or ApiSettings()

    async def search(self, query: str, limit: int) -> SearchPayload:
        query = query.strip()
        if not query:
            return SearchPayload()

        data = await self._get_json("search", "/search", params={"q": query, "limit": limit})
        if not isinstance(data, dict):
            raise ServerError(f"Search returned {type(data).__name__}, expected an object.")

        payload = SearchPayload(
            suggestions=tuple(_parse_rows(data.get("suggestions"), "suggestions")),
            results=tuple(_parse_rows(data.get("results"), "results")),
        )
        logger.debug(
            "artist_search_completed",
            query=query,
            suggestions=len(payload.suggestions),
            results=len(payload.results),
        )
        return payload

    async def get_details(self, entity_id: str) -> Entity:
        entity_id = (entity_id or "").strip()
        if not entity_id:
            raise ValueError("entity_id must not be empty")

        data = await self._get_json("artist_details", f"/artist/{quote(entity_id, safe='')}")
        if not isinstance(data, dict):
            raise ServerError(f"Artist details returned {type(data).__name__}, expected an object.")
        try:
            return Entity.model_validate(data)
        except ValidationError as exc:
            raise ServerError(f"Artist details payload is invalid: {exc.error_count()} error(s)") from exc

    async def _get_json(self, name: str, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.get(
                self._url(path),
                params=params,
                headers=self._headers(),
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            logger.warning("artist_api_status_error", operation=name, status_code=status_code)
            raise ServerError(f"{name} request failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            logger.warning("artist_api_request_error", operation=name, error=str(exc))
            raise NetworkError(f"{name} request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(f"{name} returned a body that is not JSON.") from exc

    def _url(self, path: str) -> str:
        return f"{str(self._settings.base_url).rstrip('/')}{path}"

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self._settings.user_agent}


def _parse_rows(rows: Any, field: str) -> Iterable[Entity]:
    if rows is None:
        return
    if not isinstance(rows, list):
        logger.warning("artist_payload_field_ignored", field=field, type=type(rows).__name__)
        return
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("artist_row_skipped", field=field, index=index, reason="not an object")
            continue
        try:
            yield Entity.model_validate(row)
        except ValidationError as exc:
            logger.warning(
                "artist_row_skipped",
                field=field,
                index=index,
                reason=f"{exc.error_count()} validation error(s)",
            )


__all__ = ["ArtistApi", "ArtistSearchClient"]
