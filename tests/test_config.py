"""Tests for settings and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from versekit.config import DEFAULT_PROVIDER_URL, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.provider_url == DEFAULT_PROVIDER_URL
        assert settings.default_translation == "NASB"
        assert settings.default_chapter == 1
        assert settings.whole_chapter_max_verse == 200

    def test_rejects_zero_max_verse(self):
        with pytest.raises(ValueError, match="whole_chapter_max_verse"):
            Settings(whole_chapter_max_verse=0)

    def test_rejects_zero_default_chapter(self):
        with pytest.raises(ValueError, match="default_chapter"):
            Settings(default_chapter=0)

    def test_catalog_path_coerced(self):
        assert Settings(catalog_path="cat.yaml").catalog_path == Path("cat.yaml")


class TestFromEnv:
    def test_empty_environment(self):
        assert Settings.from_env({}) == Settings()

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "VERSEKIT_PROVIDER_URL": "http://localhost:9000/get-verses/",
                "VERSEKIT_PROVIDER_TIMEOUT": "2.5",
                "VERSEKIT_DEFAULT_TRANSLATION": "KJV",
                "VERSEKIT_WHOLE_CHAPTER_MAX_VERSE": "176",
                "VERSEKIT_LOG_LEVEL": "debug",
                "VERSEKIT_PORT": "8080",
            }
        )
        assert settings.provider_url == "http://localhost:9000/get-verses/"
        assert settings.provider_timeout == 2.5
        assert settings.default_translation == "KJV"
        assert settings.whole_chapter_max_verse == 176
        assert settings.log_level == "DEBUG"
        assert settings.port == 8080

    def test_unrelated_variables_ignored(self):
        assert Settings.from_env({"PROVIDER_URL": "x"}).provider_url == DEFAULT_PROVIDER_URL

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            Settings.from_env({"VERSEKIT_DEFAULT_CHAPTER": "0"})
