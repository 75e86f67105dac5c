"""Shared pytest fixtures for controller and resolver tests."""

from __future__ import annotations

import pytest

from artist_explorer.config import SessionSettings
from artist_explorer.services.session import SearchSessionController
from fakes import FakeArtistApi


@pytest.fixture
def api() -> FakeArtistApi:
    return FakeArtistApi()


@pytest.fixture
def controller(api) -> SearchSessionController:
    return SearchSessionController(api, SessionSettings(debounce_seconds=0.01))
