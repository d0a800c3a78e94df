"""Engine facade wiring the registry, catalog, parser and fetcher together.

Everything static (book list, aliases, translation catalog) is injected at
construction; ScriptureEngine.from_settings() builds the default wiring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from versekit.canon.books import DEFAULT_REGISTRY, BookRegistry
from versekit.canon.translations import TranslationCatalog
from versekit.config import Settings
from versekit.errors import BookNotFoundError, InvalidRangeError, ReferenceFormatError
from versekit.fetch.batcher import VerseBatchFetcher, build_requests
from versekit.fetch.provider import BollsProvider, VerseProvider
from versekit.models import ParsedReference, VerseText
from versekit.reference.continuity import is_continuous
from versekit.reference.formatter import format_parsed
from versekit.reference.normalizer import BOOK_ALIASES, BookNormalizer
from versekit.reference.parser import ReferenceParser

logger = logging.getLogger(__name__)


@dataclass
class PassageGroup:
    """Verses fetched for one parsed reference, labeled for display."""

    reference: ParsedReference
    label: str
    verses: list[VerseText]


class ScriptureEngine:
    """Parse, validate and fetch scripture references."""

    def __init__(
        self,
        settings: Settings,
        provider: VerseProvider,
        registry: BookRegistry = DEFAULT_REGISTRY,
        catalog: TranslationCatalog | None = None,
        normalizer: BookNormalizer | None = None,
    ):
        self.settings = settings
        self.registry = registry
        if catalog is None:
            catalog = TranslationCatalog.load(settings.catalog_path)
        self.catalog = catalog
        self.normalizer = normalizer or BookNormalizer(registry, BOOK_ALIASES)
        self.parser = ReferenceParser.from_settings(settings, self.normalizer)
        self.fetcher = VerseBatchFetcher(
            provider,
            registry=registry,
            catalog=self.catalog,
            whole_chapter_max_verse=settings.whole_chapter_max_verse,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, provider: VerseProvider | None = None
    ) -> "ScriptureEngine":
        settings = settings or Settings.from_env()
        provider = provider or BollsProvider.from_settings(settings)
        return cls(settings, provider)

    def parse(self, text: str) -> ParsedReference | None:
        return self.parser.parse(text)

    def parse_strict(self, text: str) -> ParsedReference | None:
        return self.parser.parse_strict(text)

    def is_continuous(self, verses: list[str]) -> bool:
        return is_continuous(verses)

    async def fetch_passage(
        self, text: str, translation: str | None = None
    ) -> list[PassageGroup]:
        """Parse ';'/',' separated references and fetch them in one batch.

        Segments with impossible ranges or unknown books are skipped with a
        warning as long as another segment survives. Otherwise the first
        such error is raised.

        Raises:
            TranslationNotFoundError: Unknown translation code
            InvalidRangeError: Every parsed segment had an impossible range
            ReferenceFormatError: No segment looked like a reference
            BookNotFoundError: No reference resolved to a known book
            ProviderError: Provider call failed
        """
        translation = translation or self.settings.default_translation
        self.catalog.require(translation)

        range_errors: list[InvalidRangeError] = []
        parsed = self.parser.parse_many(text, errors=range_errors)
        if not parsed:
            if range_errors:
                raise range_errors[0]
            raise ReferenceFormatError(f"Cannot parse reference: '{text.strip()}'")

        known = [ref for ref in parsed if ref.book in self.registry]
        for ref in parsed:
            if ref.book not in self.registry:
                logger.warning(f"Skipping reference with unknown book: '{ref.original}'")
        if not known:
            raise BookNotFoundError(parsed[0].book)

        requests = build_requests(
            known,
            translation,
            registry=self.registry,
            whole_chapter_max_verse=self.settings.whole_chapter_max_verse,
        )
        fetched = await self.fetcher.fetch(requests)

        max_verse = self.settings.whole_chapter_max_verse
        groups = []
        for ref in known:
            wanted = {(ref.book, ref.chapter, v) for v in ref.verse_numbers(max_verse)}
            verses = [v for v in fetched if (v.book, v.chapter, v.verse) in wanted]
            if verses:
                groups.append(PassageGroup(ref, format_parsed(ref), verses))
        return groups
