"""Value types shared by the parser, analyzer, formatter and fetcher.

Two verse-list flavors are kept apart on purpose: ParsedReference is a
chapter-scoped range as typed by a user, VerseReference is one fully
qualified verse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from versekit.canon.books import DEFAULT_REGISTRY, BookRegistry
from versekit.errors import InvalidRangeError


def _book_order(book: str, registry: BookRegistry) -> int:
    index = registry.index_of(book)
    # Unknown books sort after the canon
    return index if index > 0 else len(registry) + 1


@dataclass(frozen=True)
class VerseReference:
    """A single verse: canonical book, chapter and verse."""

    book: str
    chapter: int
    verse: int

    def __post_init__(self) -> None:
        if self.chapter < 1:
            raise InvalidRangeError(f"Invalid chapter number: {self.chapter}. Chapters start at 1.")
        if self.verse < 1:
            raise InvalidRangeError(f"Invalid verse number: {self.verse}. Verses start at 1.")

    def __str__(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    def sort_key(self, registry: BookRegistry = DEFAULT_REGISTRY) -> tuple[int, str, int, int]:
        return (_book_order(self.book, registry), self.book, self.chapter, self.verse)


@dataclass(frozen=True)
class ParsedReference:
    """A chapter-scoped reference parsed from user text.

    start_verse None means the whole chapter. end_verse defaults to
    start_verse.
    """

    book: str
    chapter: int
    start_verse: int | None = None
    end_verse: int | None = None
    original: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.chapter < 1:
            raise InvalidRangeError(f"Invalid chapter number: {self.chapter}. Chapters start at 1.")

        if self.start_verse is None:
            if self.end_verse is not None:
                raise InvalidRangeError("End verse given without a start verse.")
            return

        if self.end_verse is None:
            object.__setattr__(self, "end_verse", self.start_verse)

        if self.start_verse < 1:
            raise InvalidRangeError(f"Invalid verse number: {self.start_verse}. Verses start at 1.")
        if self.end_verse < self.start_verse:
            raise InvalidRangeError(
                f"Invalid verse range: {self.start_verse}-{self.end_verse}. "
                f"Start verse ({self.start_verse}) cannot be greater than end verse ({self.end_verse})."
            )

    @property
    def is_whole_chapter(self) -> bool:
        return self.start_verse is None

    @property
    def is_range(self) -> bool:
        return self.start_verse is not None and self.end_verse != self.start_verse

    def verse_numbers(self, max_verse: int) -> list[int]:
        """Expand to concrete verse numbers.

        A whole-chapter reference expands to 1..max_verse since no
        chapter-length table is kept.
        """
        if self.start_verse is None:
            return list(range(1, max_verse + 1))
        return list(range(self.start_verse, self.end_verse + 1))

    def verse_references(self, max_verse: int) -> Iterator[VerseReference]:
        for verse in self.verse_numbers(max_verse):
            yield VerseReference(self.book, self.chapter, verse)

    def __str__(self) -> str:
        if self.start_verse is None:
            return f"{self.book} {self.chapter}"
        if self.end_verse != self.start_verse:
            return f"{self.book} {self.chapter}:{self.start_verse}-{self.end_verse}"
        return f"{self.book} {self.chapter}:{self.start_verse}"


@dataclass(frozen=True)
class VerseText:
    """Verse text returned by the provider for one translation.

    text is opaque markup; sanitizing it is the renderer's job.
    """

    book: str
    chapter: int
    verse: int
    translation: str
    text: str

    @property
    def reference(self) -> VerseReference:
        return VerseReference(self.book, self.chapter, self.verse)

    def __str__(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse} ({self.translation})"


@dataclass(frozen=True)
class FetchRequest:
    """One provider request group: a translation, book index, chapter and verses."""

    translation: str
    book: int
    chapter: int
    verses: tuple[int, ...]

    def __post_init__(self) -> None:
        # Accept any iterable of verses from callers
        object.__setattr__(self, "verses", tuple(self.verses))

    @property
    def cache_key(self) -> str:
        return f"{self.translation}|{self.book}|{self.chapter}"

    def to_payload(self) -> dict:
        """Provider wire form."""
        return {
            "translation": self.translation,
            "book": self.book,
            "chapter": self.chapter,
            "verses": list(self.verses),
        }
