"""Scripture reference parsing.

Supported forms:
- Single verse: "John 3:16", "Jn 3:16"
- Verse range: "Romans 8:1-4" (hyphen, en-dash or em-dash)
- Whole chapter: "Psalm 23"
- Book only: "Genesis" (chapter defaults to 1)
- Multi-word books: "1 Kings 3:5", "Song of Solomon 2:1"

A string that does not look like a reference at all parses to None. A string
that looks like one but names an impossible range raises InvalidRangeError.
Book resolution goes through BookNormalizer; parse() keeps an unresolved
token as-is so the caller can report it, parse_strict() raises
BookNotFoundError with the token as typed.

expand_verse_list() handles the longer free-form lists found in song and
journey metadata ("John 3:16-18, 20; 4:1; Psalm 23:1").
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

from versekit.config import DEFAULT_WHOLE_CHAPTER_MAX_VERSE, Settings
from versekit.errors import BookNotFoundError, InvalidRangeError
from versekit.models import ParsedReference, VerseReference
from versekit.reference.normalizer import DEFAULT_NORMALIZER, BookNormalizer

logger = logging.getLogger(__name__)

# book-token, chapter?, (":" start ("-" end)?)?
REFERENCE_PATTERN = re.compile(
    r"^(\d?\s*[A-Za-z]+(?:\s+of\s+[A-Za-z]+)?)\s*(\d+)?(?::(\d+)(?:-(\d+))?)?$",
    re.IGNORECASE,
)

# Separators between independent references in one string
MULTI_REFERENCE_SPLIT = re.compile(r"[;,]")

# Verse-list grammar pieces
FULL_SEGMENT = re.compile(r"^(.+?)\s+(\d+):(.+)$")
CHAPTER_VERSE_SEGMENT = re.compile(r"^(\d+):(.+)$")
VERSES_ONLY_SEGMENT = re.compile(r"^(\d+(?:\s*[-,]\s*\d+)*)$")
BOOK_CHAPTER_SEGMENT = re.compile(r"^(.+?)\s+(\d+)$")
VERSE_RANGE = re.compile(r"^(\d+)\s*-\s*(\d+)$")
SINGLE_VERSE = re.compile(r"^(\d+)$")


def normalize_dashes(text: str) -> str:
    return text.replace("–", "-").replace("—", "-")


class ReferenceParser:
    """Parse reference strings into ParsedReference values."""

    def __init__(
        self,
        normalizer: BookNormalizer = DEFAULT_NORMALIZER,
        default_chapter: int = 1,
        whole_chapter_max_verse: int = DEFAULT_WHOLE_CHAPTER_MAX_VERSE,
    ):
        self.normalizer = normalizer
        self.registry = normalizer.registry
        self.default_chapter = default_chapter
        self.whole_chapter_max_verse = whole_chapter_max_verse

    @classmethod
    def from_settings(
        cls, settings: Settings, normalizer: BookNormalizer = DEFAULT_NORMALIZER
    ) -> "ReferenceParser":
        return cls(
            normalizer=normalizer,
            default_chapter=settings.default_chapter,
            whole_chapter_max_verse=settings.whole_chapter_max_verse,
        )

    def parse(self, text: str, require_chapter: bool = True) -> ParsedReference | None:
        """Parse one reference.

        Args:
            text: Reference like "Romans 8:1-4" or "Psalm 23"
            require_chapter: When True a missing chapter becomes
                default_chapter. When False a book-only reference returns
                None, since whole-book lookups are not supported.

        Returns:
            ParsedReference, or None when the text is not a reference

        Raises:
            InvalidRangeError: end verse before start verse, chapter 0, ...
        """
        if not text or not text.strip():
            return None

        trimmed = text.strip()
        match = REFERENCE_PATTERN.match(normalize_dashes(trimmed))
        if not match:
            logger.debug(f"Not a reference: '{trimmed}'")
            return None

        book_raw, chapter_str, start_str, end_str = match.groups()

        if chapter_str is None:
            if start_str is not None or not require_chapter:
                return None
            chapter = self.default_chapter
        else:
            chapter = int(chapter_str)

        return ParsedReference(
            book=self.normalizer.normalize(book_raw),
            chapter=chapter,
            start_verse=int(start_str) if start_str else None,
            end_verse=int(end_str) if end_str else None,
            original=trimmed,
        )

    def book_token(self, text: str) -> str | None:
        """Return the book token as typed, or None when text is not a reference."""
        match = REFERENCE_PATTERN.match(normalize_dashes((text or "").strip()))
        return match.group(1).strip() if match else None

    def parse_strict(self, text: str, require_chapter: bool = True) -> ParsedReference | None:
        """Like parse(), but raise BookNotFoundError for unknown books."""
        parsed = self.parse(text, require_chapter=require_chapter)
        if parsed is not None and parsed.book not in self.registry:
            token = self.book_token(parsed.original)
            raise BookNotFoundError(token, self.normalizer.suggest(token))
        return parsed

    def parse_many(
        self, text: str, errors: list[InvalidRangeError] | None = None
    ) -> list[ParsedReference]:
        """Parse ';' or ',' separated references, skipping unparseable parts.

        Args:
            text: References like "John 3:16; Romans 8:1-4"
            errors: If given, collects the InvalidRangeError of every
                skipped segment, in input order
        """
        parsed = []
        for part in MULTI_REFERENCE_SPLIT.split(text or ""):
            part = part.strip()
            if not part:
                continue
            try:
                result = self.parse(part)
            except InvalidRangeError as e:
                logger.warning(f"Skipping invalid reference '{part}': {e}")
                if errors is not None:
                    errors.append(e)
                continue
            if result is not None:
                parsed.append(result)
        return parsed

    def expand(self, reference: ParsedReference) -> list[VerseReference]:
        """Expand a ParsedReference to single verses.

        Whole chapters are bounded by whole_chapter_max_verse.
        """
        return list(reference.verse_references(self.whole_chapter_max_verse))

    def expand_verse_list(self, text: str) -> list[VerseReference]:
        """Expand a free-form verse list into single verses.

        Segments are separated by ';'. A segment may carry a full reference
        ("John 3:16-18, 20"), a chapter and verses reusing the last book
        ("4:1-2"), bare verses reusing the last book and chapter ("5, 7"),
        or a book and chapter that only sets context ("Psalm 23").

        Results keep input order; duplicates are dropped. Unknown books are
        skipped with a warning.

        Raises:
            InvalidRangeError: For a range like "5-3"
        """
        verses: list[VerseReference] = []
        seen: set[VerseReference] = set()
        last_book = ""
        last_chapter = 0

        for segment in re.split(r"\s*;\s*", normalize_dashes(text or "")):
            segment = segment.strip()
            if not segment:
                continue

            if match := FULL_SEGMENT.match(segment):
                book_raw, chapter_str, verses_part = match.groups()
                last_book = self._resolve_list_book(book_raw)
                last_chapter = int(chapter_str)
            elif (match := CHAPTER_VERSE_SEGMENT.match(segment)) and last_book:
                chapter_str, verses_part = match.groups()
                last_chapter = int(chapter_str)
            elif (match := VERSES_ONLY_SEGMENT.match(segment)) and last_book and last_chapter:
                verses_part = match.group(1)
            elif match := BOOK_CHAPTER_SEGMENT.match(segment):
                book_raw, chapter_str = match.groups()
                last_book = self._resolve_list_book(book_raw)
                last_chapter = int(chapter_str)
                continue
            else:
                logger.debug(f"Skipping unrecognized segment '{segment}'")
                continue

            if not last_book or last_chapter < 1:
                continue

            for verse in _iter_verse_numbers(verses_part):
                ref = VerseReference(last_book, last_chapter, verse)
                if ref not in seen:
                    seen.add(ref)
                    verses.append(ref)

        return verses

    def _resolve_list_book(self, book_raw: str) -> str:
        name = self.normalizer.normalize(book_raw.strip().rstrip("."))
        if name not in self.registry:
            logger.warning(f"Unknown Bible book: \"{book_raw.strip()}\"")
            return ""
        return name


def _iter_verse_numbers(verses_part: str) -> Iterator[int]:
    for part in re.split(r"\s*,\s*", verses_part):
        part = part.strip()
        if match := VERSE_RANGE.match(part):
            start, end = int(match.group(1)), int(match.group(2))
            if start < 1 or end < start:
                raise InvalidRangeError(
                    f"Invalid verse range: '{part}'. "
                    f"Start verse ({start}) cannot be greater than end verse ({end})."
                )
            yield from range(start, end + 1)
        elif match := SINGLE_VERSE.match(part):
            verse = int(match.group(1))
            if verse >= 1:
                yield verse


DEFAULT_PARSER = ReferenceParser()


def parse_reference(text: str, require_chapter: bool = True) -> ParsedReference | None:
    """Parse one reference with the default parser."""
    return DEFAULT_PARSER.parse(text, require_chapter=require_chapter)


def parse_references(text: str) -> list[ParsedReference]:
    """Parse a ';'/',' separated list of references with the default parser."""
    return DEFAULT_PARSER.parse_many(text)


def expand_verse_list(text: str) -> list[VerseReference]:
    """Expand a free-form verse list with the default parser."""
    return DEFAULT_PARSER.expand_verse_list(text)


def expand_references(
    references: Iterable[ParsedReference],
    max_verse: int = DEFAULT_WHOLE_CHAPTER_MAX_VERSE,
) -> list[VerseReference]:
    """Flatten parsed references into single verses."""
    return [verse for ref in references for verse in ref.verse_references(max_verse)]
