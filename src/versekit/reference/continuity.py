"""Continuous passage detection.

A verse selection is continuous when, once sorted, it forms one unbroken
run inside a single book: each verse follows the previous one in the same
chapter, or starts the next chapter at verse 1. The analyzer has no
chapter-length table, so it cannot tell whether the previous verse really
was the last of its chapter.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from versekit.errors import ReferenceFormatError
from versekit.models import VerseReference


class VerseKey(NamedTuple):
    """A (book, chapter, verse) triple split from "Book C:V"."""

    book: str
    chapter: int
    verse: int


def split_verse_reference(reference: str) -> VerseKey:
    """Split a fully-qualified "Book Chapter:Verse" string.

    The last space separates the book from "chapter:verse", so multi-word
    books ("1 Corinthians 1:1", "Song of Solomon 2:1") split correctly.
    The book is not normalized.

    Raises:
        ReferenceFormatError: If the string is not "Book C:V"
    """
    trimmed = reference.strip()
    book, sep, chapter_verse = trimmed.rpartition(" ")
    if not sep or not book.strip():
        raise ReferenceFormatError(
            f"Invalid verse reference: '{reference}'. Expected 'Book Chapter:Verse'."
        )

    chapter_str, colon, verse_str = chapter_verse.partition(":")
    if not colon or not chapter_str.isdigit() or not verse_str.isdigit():
        raise ReferenceFormatError(
            f"Invalid verse reference: '{reference}'. Expected 'Book Chapter:Verse'."
        )

    return VerseKey(book.strip(), int(chapter_str), int(verse_str))


def _keys_continuous(keys: list[VerseKey]) -> bool:
    if not keys:
        return False

    ordered = sorted(keys)
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.book != prev.book:
            return False
        if curr.chapter == prev.chapter:
            if curr.verse != prev.verse + 1:
                return False
        elif curr.chapter != prev.chapter + 1 or curr.verse != 1:
            return False
    return True


def is_continuous(references: Iterable[str]) -> bool:
    """Check whether "Book C:V" strings form one unbroken passage.

    Empty input is not continuous; a single verse is.

    Raises:
        ReferenceFormatError: If an entry is not "Book C:V"
    """
    return _keys_continuous([split_verse_reference(ref) for ref in references])


def is_continuous_verses(verses: Iterable[VerseReference]) -> bool:
    """Same check as is_continuous() for VerseReference values."""
    return _keys_continuous([VerseKey(v.book, v.chapter, v.verse) for v in verses])
