"""Shared fixtures: sample schemas and a clean settings cache per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from bcchecker.core.settings import load_settings

VALID_SDL = """
schema {
  query: RootQuery
}

type RootQuery {
  test: Test
}

type Test {
  id: String
}
"""

# Adds a field and a type only (backward compatible)
COMPATIBLE_SDL = """
schema {
  query: RootQuery
}

type RootQuery {
  test2: Test2
  test: Test
}

type Test {
  id: String
}

type Test2 {
  id: String
}
"""

# RootQuery.test is gone
BREAKING_SDL = """
schema {
  query: RootQuery
}

type RootQuery {
  thisFieldIsDifferent: Test
}

type Test {
  id: String
}
"""


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Rebuild settings from a clean environment around every test."""
    for name in ("BC_SNAPSHOT_LOCATION", "BC_ALLOW_BREAKING_CHANGES", "BC_SCHEMA", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture  # type: ignore[misc]
def valid_sdl() -> str:
    return VALID_SDL


@pytest.fixture  # type: ignore[misc]
def compatible_sdl() -> str:
    return COMPATIBLE_SDL


@pytest.fixture  # type: ignore[misc]
def breaking_sdl() -> str:
    return BREAKING_SDL
