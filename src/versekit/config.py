"""Configuration settings for versekit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Environment variable prefix for overrides
ENV_PREFIX = "VERSEKIT_"

DEFAULT_PROVIDER_URL = "https://bolls.life/get-verses/"

# Stand-in for a chapter-length table: whole-chapter lookups request
# verses 1..N and the provider simply omits verses that do not exist.
DEFAULT_WHOLE_CHAPTER_MAX_VERSE = 200


@dataclass
class Settings:
    """Engine settings."""

    # Provider
    provider_url: str = DEFAULT_PROVIDER_URL
    provider_timeout: float = 10.0

    # Translations
    default_translation: str = "NASB"
    catalog_path: Path | None = None

    # Parsing
    default_chapter: int = 1
    whole_chapter_max_verse: int = DEFAULT_WHOLE_CHAPTER_MAX_VERSE

    # Logging
    log_level: str = "WARNING"

    # API server
    host: str = "127.0.0.1"
    port: int = 47300

    extra_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.whole_chapter_max_verse < 1:
            raise ValueError(
                f"whole_chapter_max_verse must be >= 1, got {self.whole_chapter_max_verse}"
            )
        if self.default_chapter < 1:
            raise ValueError(f"default_chapter must be >= 1, got {self.default_chapter}")
        if self.catalog_path is not None:
            self.catalog_path = Path(self.catalog_path)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from VERSEKIT_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if url := env.get(f"{ENV_PREFIX}PROVIDER_URL"):
            kwargs["provider_url"] = url
        if timeout := env.get(f"{ENV_PREFIX}PROVIDER_TIMEOUT"):
            kwargs["provider_timeout"] = float(timeout)
        if translation := env.get(f"{ENV_PREFIX}DEFAULT_TRANSLATION"):
            kwargs["default_translation"] = translation
        if catalog := env.get(f"{ENV_PREFIX}CATALOG_PATH"):
            kwargs["catalog_path"] = Path(catalog)
        if chapter := env.get(f"{ENV_PREFIX}DEFAULT_CHAPTER"):
            kwargs["default_chapter"] = int(chapter)
        if max_verse := env.get(f"{ENV_PREFIX}WHOLE_CHAPTER_MAX_VERSE"):
            kwargs["whole_chapter_max_verse"] = int(max_verse)
        if level := env.get(f"{ENV_PREFIX}LOG_LEVEL"):
            kwargs["log_level"] = level.upper()
        if host := env.get(f"{ENV_PREFIX}HOST"):
            kwargs["host"] = host
        if port := env.get(f"{ENV_PREFIX}PORT"):
            kwargs["port"] = int(port)

        return cls(**kwargs)
