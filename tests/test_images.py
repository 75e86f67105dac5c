"""Image URL resolution and sticky render-time failure flags."""

from artist_explorer.domain.models import ImageRef
from artist_explorer.ui.images import (
    PLACEHOLDERS,
    ImageFailureFlags,
    ImageSize,
    PlaceholderGlyph,
    resolve_image_url,
)
from fakes import artist

PRIMARY = "https://img.example/primary.jpg"
ALT = "https://img.example/alt.jpg"


def test_primary_image_wins():
    entity = artist("1", "A", image_url=PRIMARY, images=[ImageRef(url=ALT)])
    assert resolve_image_url(entity) == PRIMARY


def test_falls_back_to_first_alternate_image():
    entity = artist("1", "A", images=[ImageRef(url=ALT), ImageRef(url=PRIMARY)])
    assert resolve_image_url(entity) == ALT


def test_no_image_resolves_to_none():
    assert resolve_image_url(artist("1", "A", image_url="  ")) is None
    assert resolve_image_url(None) is None


def test_missing_image_renders_placeholder_per_size():
    flags = ImageFailureFlags()
    entity = artist("1", "A")

    compact = flags.view(entity, ImageSize.COMPACT)
    large = flags.view(entity, ImageSize.LARGE)

    assert compact.url is None
    assert compact.placeholder.glyph is PlaceholderGlyph.PERSON
    assert compact.placeholder.width == "40px"
    assert large.placeholder is PLACEHOLDERS[ImageSize.LARGE]
    assert large.placeholder.height == "200px"


def test_failed_url_sticks_until_entity_changes():
    flags = ImageFailureFlags()
    entity = artist("1", "A", image_url=PRIMARY)
    assert flags.view(entity).url == PRIMARY

    flags.mark_failed(entity)
    assert flags.view(entity).placeholder is not None
    assert flags.view(entity).url is None

    replaced = artist("1", "A", image_url=ALT)
    assert flags.view(replaced).url == ALT


def test_flags_are_scoped_per_entity():
    flags = ImageFailureFlags()
    broken = artist("1", "A", image_url=PRIMARY)
    other = artist("2", "B", image_url=PRIMARY)

    flags.mark_failed(broken)

    assert flags.has_failed(broken)
    assert not flags.has_failed(other)


def test_retain_forgets_rows_no_longer_rendered():
    flags = ImageFailureFlags()
    entity = artist("1", "A", image_url=PRIMARY)
    flags.mark_failed(entity)

    flags.retain([artist("2", "B")])

    assert not flags.has_failed(entity)
