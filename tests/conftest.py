"""Shared fixtures for versekit tests."""

from __future__ import annotations

import pytest

from versekit.canon.books import DEFAULT_REGISTRY
from versekit.canon.translations import Translation, TranslationCatalog
from versekit.config import Settings
from versekit.engine import ScriptureEngine
from versekit.fetch.provider import StaticProvider

ROMANS = DEFAULT_REGISTRY.index_of("Romans")
PSALMS = DEFAULT_REGISTRY.index_of("Psalms")
JOHN = DEFAULT_REGISTRY.index_of("John")


@pytest.fixture
def catalog():
    """Small catalog with two translations."""
    return TranslationCatalog(
        [
            Translation("NASB", "New American Standard Bible (1995)"),
            Translation("KJV", "King James Version"),
        ]
    )


@pytest.fixture
def provider():
    """Static provider holding Romans 8:1-4, Psalm 23:1-6 and John 3:16."""
    static = StaticProvider()
    for verse in range(1, 5):
        static.add("NASB", ROMANS, 8, verse, f"Romans 8:{verse} NASB")
        static.add("KJV", ROMANS, 8, verse, f"Romans 8:{verse} KJV")
    for verse in range(1, 7):
        static.add("NASB", PSALMS, 23, verse, f"Psalm 23:{verse} NASB")
    static.add("NASB", JOHN, 3, 16, "For God so loved the world")
    return static


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def engine(settings, provider, catalog):
    return ScriptureEngine(settings, provider, catalog=catalog)
