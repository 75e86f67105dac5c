"""Text helpers for suggestion rows and result cards."""

from __future__ import annotations

from artist_explorer.domain.models import Entity, SessionSnapshot


def format_followers(entity: Entity) -> str:
    return f"{entity.followers:,}"


def suggestion_label(entity: Entity) -> str:
    return f"{entity.name} — {format_followers(entity)} followers"


def suggestion_rows(snapshot: SessionSnapshot) -> list[str]:
    """Labels of the rows the suggestion panel shows, in server order."""

    if not snapshot.suggestions_visible:
        return []
    return [suggestion_label(entity) for entity in snapshot.suggestions]


__all__ = ["format_followers", "suggestion_label", "suggestion_rows"]
