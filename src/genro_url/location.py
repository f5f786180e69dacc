# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Current location providers.

Relative references are resolved against the "current location": the page
address in a browser, a synthetic address anywhere else. Access to it goes
through a provider, a zero-argument callable returning the location string,
so resolution can be tested and used from CLI or server code.

Definition::

    LocationProvider = Callable[[], str]

    class StaticLocation:   # always the same href
    class CwdLocation:      # "file://" + current working directory

    def get_location_provider() -> LocationProvider
    def set_location_provider(provider: LocationProvider | str | None) -> None
    def current_location() -> str
    def use_location(provider: LocationProvider | str) -> ContextManager

The provider is called once per resolution and its result is never cached,
so navigation between two parse calls is picked up.

Example::

    from genro_url import parse_url
    from genro_url.location import use_location

    with use_location("https://example.com/bookmarks/list"):
        url = parse_url("../item?x=1")
    str(url)  # "https://example.com/item?x=1"
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from .config import ConfigError, get_settings

__all__ = [
    "CwdLocation",
    "LocationProvider",
    "StaticLocation",
    "current_location",
    "get_location_provider",
    "set_location_provider",
    "use_location",
]

logger = logging.getLogger("genro_url")

LocationProvider = Callable[[], str]


class StaticLocation:
    """Provider returning a fixed href."""

    __slots__ = ("href",)

    def __init__(self, href: str) -> None:
        self.href = href

    def __call__(self) -> str:
        return self.href

    def __repr__(self) -> str:
        return f"StaticLocation({self.href!r})"


class CwdLocation:
    """Provider synthesizing a ``file://`` location from the working directory."""

    __slots__ = ()

    def __call__(self) -> str:
        return Path.cwd().as_uri()

    def __repr__(self) -> str:
        return "CwdLocation()"


_provider: LocationProvider | None = None


def _as_provider(provider: LocationProvider | str) -> LocationProvider:
    if isinstance(provider, str):
        return StaticLocation(provider)
    return provider


def _default_provider() -> LocationProvider:
    try:
        location = get_settings().location
    except ConfigError as e:
        logger.warning("Ignoring genro-url configuration: %s", e)
        return CwdLocation()
    if location:
        return StaticLocation(location)
    return CwdLocation()


def get_location_provider() -> LocationProvider:
    """Return the installed provider, building the configured default if none."""
    global _provider
    if _provider is None:
        _provider = _default_provider()
        logger.debug("Using default location provider %r", _provider)
    return _provider


def set_location_provider(provider: LocationProvider | str | None) -> None:
    """
    Install a location provider.

    Args:
        provider: A callable, a fixed href, or None to go back to the
                  configured default.
    """
    global _provider
    _provider = None if provider is None else _as_provider(provider)


def current_location() -> str:
    """Read the current location from the installed provider."""
    return get_location_provider()()


@contextmanager
def use_location(provider: LocationProvider | str) -> Iterator[LocationProvider]:
    """Install ``provider`` for the duration of a ``with`` block."""
    global _provider
    previous = _provider
    _provider = _as_provider(provider)
    try:
        yield _provider
    finally:
        _provider = previous
