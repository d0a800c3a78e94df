"""Translation catalog loading and lookup.

The catalog is static configuration data: a YAML list of
{short_name, full_name} entries. The bundled catalog lives at
data/translations.yaml; Settings.catalog_path (VERSEKIT_CATALOG_PATH)
replaces it wholesale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from versekit.errors import CatalogError, TranslationNotFoundError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "translations.yaml"


@dataclass(frozen=True)
class Translation:
    """A Bible version known to the provider."""

    short_name: str
    full_name: str

    def __str__(self) -> str:
        return self.short_name


class TranslationCatalog:
    """Immutable lookup of translations keyed by provider code."""

    def __init__(self, translations: Iterable[Translation]):
        self._translations: tuple[Translation, ...] = tuple(translations)
        self._by_code: dict[str, Translation] = {}
        for translation in self._translations:
            if translation.short_name in self._by_code:
                raise CatalogError("Duplicate translation code", translation.short_name)
            self._by_code[translation.short_name] = translation

    def __len__(self) -> int:
        return len(self._translations)

    def __iter__(self) -> Iterator[Translation]:
        return iter(self._translations)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code in self._by_code

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(t.short_name for t in self._translations)

    def get(self, code: str) -> Translation | None:
        return self._by_code.get(code)

    def require(self, code: str) -> Translation:
        """Return the translation for a code or raise TranslationNotFoundError."""
        translation = self._by_code.get(code)
        if translation is None:
            raise TranslationNotFoundError(code)
        return translation

    def search(self, text: str) -> list[Translation]:
        """Case-insensitive substring search over code and full name."""
        needle = text.lower()
        return [
            t
            for t in self._translations
            if needle in t.short_name.lower() or needle in t.full_name.lower()
        ]

    @classmethod
    def from_dict(cls, data: dict) -> "TranslationCatalog":
        """Build a catalog from parsed YAML data."""
        if not isinstance(data, dict) or "translations" not in data:
            raise CatalogError("Catalog must contain a 'translations' list")

        entries = data["translations"]
        if not isinstance(entries, list):
            raise CatalogError("'translations' must be a list")

        translations = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise CatalogError("Entry must be a mapping", f"#{i}")
            short_name = entry.get("short_name")
            full_name = entry.get("full_name")
            if not short_name:
                raise CatalogError("Missing required field: short_name", f"#{i}")
            if not full_name:
                raise CatalogError("Missing required field: full_name", str(short_name))
            translations.append(Translation(str(short_name), str(full_name)))

        return cls(translations)

    @classmethod
    def load(cls, path: Path | None = None) -> "TranslationCatalog":
        """Load a catalog from YAML (bundled catalog when path is None)."""
        path = Path(path) if path is not None else BUNDLED_CATALOG_PATH
        if not path.exists():
            raise CatalogError(f"Translation catalog not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in {path}: {e}") from e

        catalog = cls.from_dict(raw_data or {})
        logger.debug(f"Loaded {len(catalog)} translations from {path}")
        return catalog


_default_catalog: TranslationCatalog | None = None


def get_default_catalog() -> TranslationCatalog:
    """Return the bundled catalog, loading it on first use."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = TranslationCatalog.load()
    return _default_catalog
