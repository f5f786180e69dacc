# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Shared fixtures: every test starts from a known current location."""

from collections.abc import Iterator

import pytest

from genro_url.config import set_settings
from genro_url.location import set_location_provider

LOCATION = "https://example.com/bookmarks/list"


@pytest.fixture(autouse=True)
def current_location() -> Iterator[str]:
    """Install a static current location, reset providers and settings after."""
    set_location_provider(LOCATION)
    yield LOCATION
    set_location_provider(None)
    set_settings(None)
