"""Image reference resolution and placeholder geometry for artist rows and cards."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable

from artist_explorer.domain.models import Entity


class ImageSize(StrEnum):
    COMPACT = "compact"
    LARGE = "large"


class PlaceholderGlyph(StrEnum):
    PERSON = "person"
    IMAGE_OFF = "image_off"


@dataclass(frozen=True, slots=True)
class Placeholder:
    glyph: PlaceholderGlyph
    glyph_size: int
    width: str
    height: str
    border_radius: str


@dataclass(frozen=True, slots=True)
class ImageView:
    """What a renderer draws for one entity: a URL or a placeholder, never both."""

    alt: str
    url: str | None = None
    placeholder: Placeholder | None = None


PLACEHOLDERS: dict[ImageSize, Placeholder] = {
    ImageSize.COMPACT: Placeholder(
        glyph=PlaceholderGlyph.PERSON,
        glyph_size=20,
        width="40px",
        height="40px",
        border_radius="50%",
    ),
    ImageSize.LARGE: Placeholder(
        glyph=PlaceholderGlyph.IMAGE_OFF,
        glyph_size=40,
        width="100%",
        height="200px",
        border_radius="10px",
    ),
}


def resolve_image_url(entity: Entity | None) -> str | None:
    """Primary image first, then the first alternate image, else nothing."""

    if entity is None:
        return None
    if entity.image_url:
        return entity.image_url
    for image in entity.images[:1]:
        if image.url:
            return image.url
    return None


class ImageFailureFlags:
    """Sticky per-row flags for images that failed to load during rendering.

    A flag is keyed by entity id and remembers the URL that failed, so it
    resets by itself once the entity behind a row resolves to another URL.
    A failed URL is never handed out again for that entity.
    """

    def __init__(self) -> None:
        self._failed: dict[str, str] = {}

    def mark_failed(self, entity: Entity) -> None:
        url = resolve_image_url(entity)
        if url is not None:
            self._failed[entity.id] = url

    def has_failed(self, entity: Entity) -> bool:
        url = resolve_image_url(entity)
        return url is not None and self._failed.get(entity.id) == url

    def view(self, entity: Entity, size: ImageSize = ImageSize.LARGE) -> ImageView:
        url = resolve_image_url(entity)
        if url is None or self.has_failed(entity):
            return ImageView(alt=entity.name, placeholder=PLACEHOLDERS[size])
        return ImageView(alt=entity.name, url=url)

    def retain(self, entities: Iterable[Entity]) -> None:
        """Forget flags for rows that are no longer rendered."""

        keep = {entity.id for entity in entities}
        for entity_id in list(self._failed):
            if entity_id not in keep:
                del self._failed[entity_id]


__all__ = [
    "ImageFailureFlags",
    "ImageSize",
    "ImageView",
    "PLACEHOLDERS",
    "Placeholder",
    "PlaceholderGlyph",
    "resolve_image_url",
]
