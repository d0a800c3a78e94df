"""Batched verse retrieval.

VerseBatchFetcher turns a list of request groups into ordered VerseText
values with exactly one provider call:

1. Validate translations, books, chapters and verses before any I/O
2. Merge groups that share (translation, book, chapter) so no verse is
   requested twice; the merge map lives only for the duration of the call
3. Call the provider once with the merged batch
4. Flatten, map book indices back to canonical names, drop verses with no
   text, sort by (book, chapter, verse, translation)

A provider failure fails the whole batch with ProviderError. Missing verses
inside a successful response are not errors. There is no retry: callers
re-issue the same request if they want one.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from versekit.canon.books import DEFAULT_REGISTRY, BookRegistry
from versekit.canon.translations import TranslationCatalog, get_default_catalog
from versekit.config import DEFAULT_WHOLE_CHAPTER_MAX_VERSE
from versekit.errors import BookNotFoundError, InvalidRangeError, ProviderError
from versekit.fetch.provider import VerseProvider
from versekit.models import FetchRequest, ParsedReference, VerseReference, VerseText

logger = logging.getLogger(__name__)


def build_requests(
    references: Iterable[VerseReference | ParsedReference],
    translation: str,
    registry: BookRegistry = DEFAULT_REGISTRY,
    whole_chapter_max_verse: int = DEFAULT_WHOLE_CHAPTER_MAX_VERSE,
) -> list[FetchRequest]:
    """Group references into one request per (book, chapter).

    Groups keep first-seen order; verses inside a group are sorted and
    unique.

    Raises:
        BookNotFoundError: If a reference names a non-canonical book
    """
    groups: dict[tuple[int, int], set[int]] = {}

    for ref in references:
        book_index = registry.index_of(ref.book)
        if book_index == -1:
            raise BookNotFoundError(ref.book)

        if isinstance(ref, ParsedReference):
            verses = ref.verse_numbers(whole_chapter_max_verse)
        else:
            verses = [ref.verse]

        groups.setdefault((book_index, ref.chapter), set()).update(verses)

    return [
        FetchRequest(translation, book, chapter, tuple(sorted(verses)))
        for (book, chapter), verses in groups.items()
    ]


def merge_requests(requests: Iterable[FetchRequest]) -> list[FetchRequest]:
    """Merge request groups sharing (translation, book, chapter)."""
    merged: dict[str, set[int]] = {}
    first_seen: dict[str, FetchRequest] = {}

    for request in requests:
        key = request.cache_key
        if key not in merged:
            merged[key] = set()
            first_seen[key] = request
        merged[key].update(request.verses)

    return [
        FetchRequest(first.translation, first.book, first.chapter, tuple(sorted(merged[key])))
        for key, first in first_seen.items()
    ]


class VerseBatchFetcher:
    """Fetch verse text for many request groups with a single provider call."""

    def __init__(
        self,
        provider: VerseProvider,
        registry: BookRegistry = DEFAULT_REGISTRY,
        catalog: TranslationCatalog | None = None,
        whole_chapter_max_verse: int = DEFAULT_WHOLE_CHAPTER_MAX_VERSE,
    ):
        self.provider = provider
        self.registry = registry
        self.catalog = catalog if catalog is not None else get_default_catalog()
        self.whole_chapter_max_verse = whole_chapter_max_verse

    def validate(self, requests: Sequence[FetchRequest]) -> None:
        """Reject requests that would waste a provider round-trip.

        Raises:
            TranslationNotFoundError: Unknown translation code
            InvalidRangeError: Book index, chapter or verse out of range
        """
        for request in requests:
            self.catalog.require(request.translation)
            if self.registry.name_at(request.book) is None:
                raise InvalidRangeError(
                    f"Invalid book index: {request.book}. Expected 1-{len(self.registry)}."
                )
            if request.chapter < 1:
                raise InvalidRangeError(
                    f"Invalid chapter number: {request.chapter}. Chapters start at 1."
                )
            bad = [v for v in request.verses if v < 1]
            if bad:
                raise InvalidRangeError(f"Invalid verse numbers: {bad}. Verses start at 1.")

    async def fetch(self, requests: Sequence[FetchRequest]) -> list[VerseText]:
        """Fetch and reassemble verses for a batch of request groups.

        Raises:
            TranslationNotFoundError: Before any provider call
            InvalidRangeError: Before any provider call
            ProviderError: If the provider call fails
        """
        self.validate(requests)

        batch = [request for request in merge_requests(requests) if request.verses]
        if not batch:
            return []
        if len(batch) < len(requests):
            logger.debug(f"Merged {len(requests)} request groups into {len(batch)}")

        logger.info(
            f"Fetching {sum(len(r.verses) for r in batch)} verses "
            f"in {len(batch)} groups from provider"
        )
        try:
            groups = await self.provider.get_verses(batch)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Provider call failed: {e!r}")
            raise ProviderError(f"Failed to load verses: {e}", e) from e

        if len(groups) != len(batch):
            raise ProviderError(
                f"Provider returned {len(groups)} groups for {len(batch)} requests"
            )

        results: list[VerseText] = []
        dropped = 0
        for request, group in zip(batch, groups):
            for item in group:
                book = self.registry.name_at(item.book)
                if book is None or not item.text:
                    dropped += 1
                    continue
                results.append(
                    VerseText(
                        book=book,
                        chapter=item.chapter,
                        verse=item.verse,
                        translation=request.translation,
                        text=item.text,
                    )
                )

        if dropped:
            logger.debug(f"Dropped {dropped} provider entries without text or book")

        results.sort(key=lambda v: v.reference.sort_key(self.registry) + (v.translation,))
        return results

    async def fetch_references(
        self,
        references: Iterable[VerseReference | ParsedReference],
        translation: str,
    ) -> list[VerseText]:
        """Build request groups for references in one translation and fetch them."""
        requests = build_requests(
            references,
            translation,
            registry=self.registry,
            whole_chapter_max_verse=self.whole_chapter_max_verse,
        )
        return await self.fetch(requests)

    async def fetch_translations(
        self,
        references: Iterable[VerseReference | ParsedReference],
        translations: Iterable[str],
    ) -> list[VerseText]:
        """Fetch the same references in several translations with one call."""
        references = list(references)
        requests: list[FetchRequest] = []
        for translation in translations:
            requests.extend(
                build_requests(
                    references,
                    translation,
                    registry=self.registry,
                    whole_chapter_max_verse=self.whole_chapter_max_verse,
                )
            )
        return await self.fetch(requests)
