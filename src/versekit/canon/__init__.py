"""Static canonical data: the 66-book registry and the translation catalog."""

from versekit.canon.books import (
    BIBLE_BOOKS,
    DEFAULT_REGISTRY,
    BibleBook,
    BookRegistry,
    Testament,
)
from versekit.canon.translations import (
    Translation,
    TranslationCatalog,
    get_default_catalog,
)

__all__ = [
    "BIBLE_BOOKS",
    "DEFAULT_REGISTRY",
    "BibleBook",
    "BookRegistry",
    "Testament",
    "Translation",
    "TranslationCatalog",
    "get_default_catalog",
]
