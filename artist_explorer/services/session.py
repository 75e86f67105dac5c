"""Search session controller: query state, debounced suggestions, submits and picks."""

from __future__ import annotations

from typing import Any, Callable

from artist_explorer.config import SessionSettings
from artist_explorer.domain.models import Entity, SearchPayload, SessionPhase, SessionSnapshot
from artist_explorer.logging import logger
from artist_explorer.services.artist_api import ArtistApi
from artist_explorer.services.details import EntityDetailResolver
from artist_explorer.services.exceptions import SearchClientError, StaleResponse
from artist_explorer.utils.debounce import Debouncer
from artist_explorer.utils.tokens import RequestKind, RequestToken, RequestTokenRegistry

SEARCH_ERROR_MESSAGE = "Failed to search artists. Please try again."

Listener = Callable[[SessionSnapshot], Any]


class SearchSessionController:
    """Turns UI intents into fetches and applies only the newest response per kind.

    Suggestion, submit and detail fetches each mint a ``RequestToken``. A
    response whose token is no longer the latest of its kind is dropped.
    State is published as immutable ``SessionSnapshot`` objects.
    """

    def __init__(
        self,
        api: ArtistApi,
        settings: SessionSettings | None = None,
        *,
        tokens: RequestTokenRegistry | None = None,
        resolver: EntityDetailResolver | None = None,
    ) -> None:
        self._api = api
        self._settings = settings or SessionSettings()
        self._tokens = tokens or RequestTokenRegistry()
        self._resolver = resolver or EntityDetailResolver(api, self._tokens)
        self._debouncer = Debouncer(
            self._fetch_suggestions,
            self._settings.debounce_seconds,
            name="suggestions",
        )
        self._state = SessionSnapshot()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionSnapshot:
        return self._state

    def snapshot(self) -> SessionSnapshot:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_query_changed(self, text: str) -> None:
        if len(text) < self._settings.min_query_length:
            self._drop_suggestion_flow()
            self._update(
                query=text,
                phase=SessionPhase.IDLE,
                suggestions=(),
                show_suggestions=False,
                suggestion_loading=False,
                error=None,
            )
            return

        self._update(query=text, phase=SessionPhase.SUGGESTING, error=None)
        self._debouncer.trigger(text)

    async def on_submit(self) -> None:
        query = self._state.query
        if not query.strip():
            return

        self._drop_suggestion_flow()
        token = self._tokens.mint(RequestKind.SUBMIT)
        self._update(
            phase=SessionPhase.SUBMITTED,
            show_suggestions=False,
            suggestion_loading=False,
            submit_loading=True,
            error=None,
        )
        logger.info("search_submitted", query=query, serial=token.serial)

        try:
            payload, error = await self._search(token, query)
        except StaleResponse as exc:
            self._log_stale(token, exc)
            return

        self._update(results=payload.results, submit_loading=False, error=error)

    async def on_suggestion_selected(self, entity: Entity) -> None:
        self._drop_suggestion_flow()
        token = self._resolver.begin()
        self._update(
            query=entity.name,
            phase=SessionPhase.DETAIL_LOADING,
            show_suggestions=False,
            suggestion_loading=False,
            selected=entity,
            detail_loading=True,
            error=None,
        )
        logger.info("suggestion_selected", entity_id=entity.id, serial=token.serial)

        try:
            outcome = await self._resolver.resolve(entity, token)
        except StaleResponse as exc:
            self._log_stale(token, exc)
            return

        phase = self._state.phase
        if phase is SessionPhase.DETAIL_LOADING:
            phase = SessionPhase.DETAIL_READY
        self._update(
            selected=outcome.entity,
            phase=phase,
            detail_loading=False,
            error=outcome.error,
        )

    async def wait_idle(self) -> None:
        """Wait for debounced suggestion fetches that have already started."""

        await self._debouncer.wait()

    async def aclose(self) -> None:
        self._debouncer.cancel()
        await self._debouncer.wait()
        self._listeners.clear()

    async def _fetch_suggestions(self, query: str) -> None:
        token = self._tokens.mint(RequestKind.SUGGESTION)
        self._update(suggestion_loading=True, error=None)

        try:
            payload, error = await self._search(token, query)
        except StaleResponse as exc:
            self._log_stale(token, exc)
            return

        if error is not None:
            self._update(
                suggestions=(),
                show_suggestions=False,
                suggestion_loading=False,
                error=error,
            )
            return

        limit = self._settings.suggestion_display_limit
        self._update(
            suggestions=payload.suggestions[:limit],
            show_suggestions=True,
            suggestion_loading=False,
            error=None,
        )

    async def _search(self, token: RequestToken, query: str) -> tuple[SearchPayload, str | None]:
        try:
            payload = await self._api.search(query, self._settings.search_limit)
        except SearchClientError as exc:
            self._tokens.ensure_current(token)
            logger.warning(
                "artist_search_failed",
                kind=str(token.kind),
                query=query,
                error=str(exc),
            )
            return SearchPayload(), SEARCH_ERROR_MESSAGE

        self._tokens.ensure_current(token)
        return payload, None

    def _drop_suggestion_flow(self) -> None:
        # Pending timers never fire and in-flight suggestion responses go stale.
        self._debouncer.cancel()
        self._tokens.invalidate(RequestKind.SUGGESTION)

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("session_listener_failed", listener=repr(listener))

    @staticmethod
    def _log_stale(token: RequestToken, exc: StaleResponse) -> None:
        logger.debug(
            "stale_response_discarded",
            kind=str(token.kind),
            serial=token.serial,
            reason=str(exc),
        )


__all__ = ["SEARCH_ERROR_MESSAGE", "SearchSessionController"]
