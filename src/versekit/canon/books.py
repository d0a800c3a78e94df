"""Canonical Bible book registry (Protestant canon, 66 books).

The registry is the ground truth for validation, provider book indices and
ordering. It is immutable once built; components take a registry at
construction and fall back to DEFAULT_REGISTRY.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence


class Testament(str, Enum):
    """Testament a book belongs to."""

    OT = "OT"
    NT = "NT"


OT_BOOK_COUNT = 39

BIBLE_BOOKS: tuple[str, ...] = (
    # Old Testament
    "Genesis",
    "Exodus",
    "Leviticus",
    "Numbers",
    "Deuteronomy",
    "Joshua",
    "Judges",
    "Ruth",
    "1 Samuel",
    "2 Samuel",
    "1 Kings",
    "2 Kings",
    "1 Chronicles",
    "2 Chronicles",
    "Ezra",
    "Nehemiah",
    "Esther",
    "Job",
    "Psalms",
    "Proverbs",
    "Ecclesiastes",
    "Song of Solomon",
    "Isaiah",
    "Jeremiah",
    "Lamentations",
    "Ezekiel",
    "Daniel",
    "Hosea",
    "Joel",
    "Amos",
    "Obadiah",
    "Jonah",
    "Micah",
    "Nahum",
    "Habakkuk",
    "Zephaniah",
    "Haggai",
    "Zechariah",
    "Malachi",
    # New Testament
    "Matthew",
    "Mark",
    "Luke",
    "John",
    "Acts",
    "Romans",
    "1 Corinthians",
    "2 Corinthians",
    "Galatians",
    "Ephesians",
    "Philippians",
    "Colossians",
    "1 Thessalonians",
    "2 Thessalonians",
    "1 Timothy",
    "2 Timothy",
    "Titus",
    "Philemon",
    "Hebrews",
    "James",
    "1 Peter",
    "2 Peter",
    "1 John",
    "2 John",
    "3 John",
    "Jude",
    "Revelation",
)


@dataclass(frozen=True)
class BibleBook:
    """A canonical book with its 1-based position in the canon."""

    name: str
    testament: Testament
    index: int

    def __str__(self) -> str:
        return self.name


class BookRegistry:
    """Read-only ordered list of canonical books.

    Lookups never raise: unknown names give -1 and out-of-range indices give
    None.
    """

    def __init__(self, names: Sequence[str] = BIBLE_BOOKS, ot_count: int = OT_BOOK_COUNT):
        if len(set(names)) != len(names):
            raise ValueError("Book names must be unique")
        if not 0 <= ot_count <= len(names):
            raise ValueError(f"ot_count out of range: {ot_count}")

        self._books: tuple[BibleBook, ...] = tuple(
            BibleBook(
                name=name,
                testament=Testament.OT if i < ot_count else Testament.NT,
                index=i + 1,
            )
            for i, name in enumerate(names)
        )
        self._by_name = {book.name: book for book in self._books}
        self._by_lower = {book.name.lower(): book for book in self._books}

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[BibleBook]:
        return iter(self._books)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(book.name for book in self._books)

    def get(self, name: str, case_insensitive: bool = False) -> BibleBook | None:
        """Return the book for a canonical name, or None."""
        if case_insensitive:
            return self._by_lower.get(name.lower())
        return self._by_name.get(name)

    def index_of(self, name: str, case_insensitive: bool = False) -> int:
        """Return the 1-based canonical index of a book, or -1."""
        book = self.get(name, case_insensitive=case_insensitive)
        return book.index if book else -1

    def name_at(self, index: int) -> str | None:
        """Return the canonical name at a 1-based index, or None."""
        if not isinstance(index, int) or not 1 <= index <= len(self._books):
            return None
        return self._books[index - 1].name

    def slice(self, testament: Testament | str) -> tuple[BibleBook, ...]:
        """Return the books of one testament in canonical order."""
        testament = Testament(testament)
        return tuple(book for book in self._books if book.testament is testament)


DEFAULT_REGISTRY = BookRegistry()
