"""Pydantic models shared by the session controller, API client and UI helpers."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class ImageRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str | None = None
    width: int | None = None
    height: int | None = None


class Entity(BaseModel):
    """An artist as returned by the search backend.

    The backend is loose about shapes: ids arrive as ``spotifyId`` or ``id``,
    followers as a bare number or as ``{"total": n}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("spotifyId", "id"))
    name: str = ""
    followers: int = 0
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("imageUrl", "image_url"))
    images: tuple[ImageRef, ...] = ()
    genres: tuple[str, ...] = ()
    popularity: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _prefer_spotify_id(cls, data: Any) -> Any:
        # A null or empty spotifyId falls back to id.
        if isinstance(data, dict) and "spotifyId" in data:
            data = dict(data)
            data["id"] = data.pop("spotifyId") or data.get("id")
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str) and not value.strip():
            raise ValueError("entity id must not be blank")
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("followers", mode="before")
    @classmethod
    def _coerce_followers(cls, value: Any) -> int:
        if isinstance(value, dict):
            value = value.get("total")
        if value is None or isinstance(value, bool):
            return 0
        try:
            count = int(value)
        except (TypeError, ValueError):
            return 0
        return max(count, 0)

    @field_validator("image_url", mode="before")
    @classmethod
    def _blank_image_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("images", "genres", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("images", mode="before")
    @classmethod
    def _drop_malformed_images(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(item for item in value if isinstance(item, (dict, ImageRef)))
        return value

    def enrich(self, detail: Entity) -> Entity:
        """Overlay ``detail`` on this summary, keeping the summary's id."""

        update: dict[str, Any] = {"id": self.id}
        if detail.image_url is None:
            update["image_url"] = self.image_url
        if not detail.images:
            update["images"] = self.images
        if not detail.name:
            update["name"] = self.name
        return detail.model_copy(update=update)


class SearchPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    suggestions: tuple[Entity, ...] = ()
    results: tuple[Entity, ...] = ()


class SessionPhase(StrEnum):
    IDLE = "idle"
    SUGGESTING = "suggesting"
    SUBMITTED = "submitted"
    DETAIL_LOADING = "detail_loading"
    DETAIL_READY = "detail_ready"


class SessionSnapshot(BaseModel):
    """Immutable view of the controller state handed to renderers."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    phase: SessionPhase = SessionPhase.IDLE
    suggestions: tuple[Entity, ...] = ()
    show_suggestions: bool = False
    results: tuple[Entity, ...] = ()
    selected: Entity | None = None
    suggestion_loading: bool = False
    submit_loading: bool = False
    detail_loading: bool = False
    error: str | None = None

    @property
    def suggestions_visible(self) -> bool:
        return self.show_suggestions and bool(self.suggestions)

    @property
    def loading(self) -> bool:
        return self.suggestion_loading or self.submit_loading or self.detail_loading


__all__ = [
    "Entity",
    "ImageRef",
    "SearchPayload",
    "SessionPhase",
    "SessionSnapshot",
]
