"""Reference parsing, book normalization, continuity and formatting."""

from versekit.reference.continuity import (
    VerseKey,
    is_continuous,
    is_continuous_verses,
    split_verse_reference,
)
from versekit.reference.formatter import (
    format_parsed,
    format_reference,
    format_verse_list,
)
from versekit.reference.normalizer import (
    BOOK_ALIASES,
    BookMatch,
    BookNormalizer,
    MatchKind,
    match_book,
    normalize_book,
)
from versekit.reference.parser import (
    ReferenceParser,
    expand_references,
    expand_verse_list,
    parse_reference,
    parse_references,
)

__all__ = [
    "BOOK_ALIASES",
    "BookMatch",
    "BookNormalizer",
    "MatchKind",
    "ReferenceParser",
    "VerseKey",
    "expand_references",
    "expand_verse_list",
    "format_parsed",
    "format_reference",
    "format_verse_list",
    "is_continuous",
    "is_continuous_verses",
    "match_book",
    "normalize_book",
    "parse_reference",
    "parse_references",
    "split_verse_reference",
]
