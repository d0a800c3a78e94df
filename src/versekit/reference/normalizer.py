"""Book name normalization.

Resolves a free-text book token to a canonical book name. Resolution order,
first hit wins:

1. Alias table (case-insensitive, then with spaces removed)
2. Exact canonical name (case-insensitive)
3. Prefix of a canonical name, in registry order
4. Not found: the token comes back unchanged

Prefix matching is a heuristic. A token that prefixes several books
("j" -> Joshua, Judges, Job, ...) resolves to the first one in canon
order. BookMatch carries every candidate so callers can ask the user
instead of accepting the guess.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from versekit.canon.books import DEFAULT_REGISTRY, BookRegistry
from versekit.errors import BookNotFoundError

logger = logging.getLogger(__name__)


# Lowercase key -> canonical name
BOOK_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        # Law
        "gen": "Genesis",
        "gn": "Genesis",
        "ex": "Exodus",
        "exod": "Exodus",
        "exo": "Exodus",
        "lev": "Leviticus",
        "lv": "Leviticus",
        "num": "Numbers",
        "nm": "Numbers",
        "deut": "Deuteronomy",
        "dt": "Deuteronomy",
        # History
        "josh": "Joshua",
        "jos": "Joshua",
        "judg": "Judges",
        "jdg": "Judges",
        "rth": "Ruth",
        "ru": "Ruth",
        "1 samuel": "1 Samuel",
        "1 sam": "1 Samuel",
        "1sam": "1 Samuel",
        "1sa": "1 Samuel",
        "2 samuel": "2 Samuel",
        "2 sam": "2 Samuel",
        "2sam": "2 Samuel",
        "2sa": "2 Samuel",
        "1 kings": "1 Kings",
        "1 kgs": "1 Kings",
        "1kgs": "1 Kings",
        "1ki": "1 Kings",
        "2 kings": "2 Kings",
        "2 kgs": "2 Kings",
        "2kgs": "2 Kings",
        "2ki": "2 Kings",
        "1 chronicles": "1 Chronicles",
        "1 chron": "1 Chronicles",
        "1 chr": "1 Chronicles",
        "1chr": "1 Chronicles",
        "2 chronicles": "2 Chronicles",
        "2 chron": "2 Chronicles",
        "2 chr": "2 Chronicles",
        "2chr": "2 Chronicles",
        "ezr": "Ezra",
        "neh": "Nehemiah",
        "est": "Esther",
        "esth": "Esther",
        # Poetry and wisdom
        "jb": "Job",
        "ps": "Psalms",
        "psa": "Psalms",
        "psalm": "Psalms",
        "psalms": "Psalms",
        "prov": "Proverbs",
        "pr": "Proverbs",
        "eccl": "Ecclesiastes",
        "ecc": "Ecclesiastes",
        "qoh": "Ecclesiastes",
        "song of solomon": "Song of Solomon",
        "song of songs": "Song of Solomon",
        "songs": "Song of Solomon",
        "song": "Song of Solomon",
        "ss": "Song of Solomon",
        "sos": "Song of Solomon",
        # Prophets
        "isa": "Isaiah",
        "is": "Isaiah",
        "jer": "Jeremiah",
        "lam": "Lamentations",
        "ezek": "Ezekiel",
        "eze": "Ezekiel",
        "dan": "Daniel",
        "dn": "Daniel",
        "hos": "Hosea",
        "jo": "Joel",
        "am": "Amos",
        "ob": "Obadiah",
        "obad": "Obadiah",
        "jon": "Jonah",
        "mic": "Micah",
        "na": "Nahum",
        "nah": "Nahum",
        "hab": "Habakkuk",
        "zeph": "Zephaniah",
        "zep": "Zephaniah",
        "hag": "Haggai",
        "zech": "Zechariah",
        "zec": "Zechariah",
        "mal": "Malachi",
        # Gospels and Acts
        "mt": "Matthew",
        "matt": "Matthew",
        "mk": "Mark",
        "mr": "Mark",
        "lk": "Luke",
        "jn": "John",
        "jhn": "John",
        "joh": "John",
        "ac": "Acts",
        # Epistles
        "rom": "Romans",
        "ro": "Romans",
        "rm": "Romans",
        "1 corinthians": "1 Corinthians",
        "1 cor": "1 Corinthians",
        "1cor": "1 Corinthians",
        "1co": "1 Corinthians",
        "2 corinthians": "2 Corinthians",
        "2 cor": "2 Corinthians",
        "2cor": "2 Corinthians",
        "2co": "2 Corinthians",
        "gal": "Galatians",
        "eph": "Ephesians",
        "phil": "Philippians",
        "php": "Philippians",
        "col": "Colossians",
        "1 thessalonians": "1 Thessalonians",
        "1 thess": "1 Thessalonians",
        "1thess": "1 Thessalonians",
        "1th": "1 Thessalonians",
        "2 thessalonians": "2 Thessalonians",
        "2 thess": "2 Thessalonians",
        "2thess": "2 Thessalonians",
        "2th": "2 Thessalonians",
        "1 timothy": "1 Timothy",
        "1 tim": "1 Timothy",
        "1tim": "1 Timothy",
        "1ti": "1 Timothy",
        "2 timothy": "2 Timothy",
        "2 tim": "2 Timothy",
        "2tim": "2 Timothy",
        "2ti": "2 Timothy",
        "tit": "Titus",
        "phm": "Philemon",
        "phlm": "Philemon",
        "heb": "Hebrews",
        "jas": "James",
        "jam": "James",
        "1 peter": "1 Peter",
        "1 pet": "1 Peter",
        "1pet": "1 Peter",
        "1pe": "1 Peter",
        "2 peter": "2 Peter",
        "2 pet": "2 Peter",
        "2pet": "2 Peter",
        "2pe": "2 Peter",
        "1 john": "1 John",
        "1 jn": "1 John",
        "1jn": "1 John",
        "1jo": "1 John",
        "2 john": "2 John",
        "2 jn": "2 John",
        "2jn": "2 John",
        "2jo": "2 John",
        "3 john": "3 John",
        "3 jn": "3 John",
        "3jn": "3 John",
        "3jo": "3 John",
        "jud": "Jude",
        "rev": "Revelation",
        "rv": "Revelation",
        "apocalypse": "Revelation",
    }
)

# "I Kings" / "II Cor" / "III John" -> numeric prefix
ROMAN_PREFIX_PATTERN = re.compile(r"^(iii|ii|i)\s+(?=[a-z])")
ROMAN_VALUES = {"i": "1", "ii": "2", "iii": "3"}

WHITESPACE_PATTERN = re.compile(r"\s+")


class MatchKind(str, Enum):
    """How a book token was resolved."""

    EXACT = "exact"
    ALIAS = "alias"
    PREFIX = "prefix"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class BookMatch:
    """Result of resolving a book token.

    name is the canonical name, or the original token for NOT_FOUND.
    candidates lists every canonical name the token prefixes (PREFIX only).
    """

    kind: MatchKind
    name: str
    token: str
    candidates: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.kind is not MatchKind.NOT_FOUND

    @property
    def is_ambiguous(self) -> bool:
        return self.kind is MatchKind.PREFIX and len(self.candidates) > 1


def clean_token(token: str) -> str:
    """Lowercase, drop periods, collapse whitespace, map roman numeral prefixes."""
    cleaned = WHITESPACE_PATTERN.sub(" ", token.strip().replace(".", " ")).strip().lower()
    return ROMAN_PREFIX_PATTERN.sub(lambda m: ROMAN_VALUES[m.group(1)] + " ", cleaned)


class BookNormalizer:
    """Resolve book tokens against a registry and an alias table."""

    def __init__(
        self,
        registry: BookRegistry = DEFAULT_REGISTRY,
        aliases: Mapping[str, str] = BOOK_ALIASES,
    ):
        unknown = sorted({name for name in aliases.values() if name not in registry})
        if unknown:
            raise ValueError(f"Alias table targets non-canonical books: {unknown}")
        self.registry = registry
        self.aliases = MappingProxyType({k.lower(): v for k, v in aliases.items()})
        # "1samuel" finds "1 samuel"
        self._compact_aliases = {k.replace(" ", ""): v for k, v in self.aliases.items()}

    def match(self, token: str) -> BookMatch:
        """Resolve a token and report how it matched."""
        original = token.strip()
        key = clean_token(original)
        if not key:
            return BookMatch(MatchKind.NOT_FOUND, original, original)

        alias = self.aliases.get(key) or self._compact_aliases.get(key.replace(" ", ""))
        if alias:
            return BookMatch(MatchKind.ALIAS, alias, original)

        book = self.registry.get(key, case_insensitive=True)
        if book:
            return BookMatch(MatchKind.EXACT, book.name, original)

        candidates = tuple(
            name for name in self.registry.names if name.lower().startswith(key)
        )
        if candidates:
            if len(candidates) > 1:
                logger.debug(
                    f"Ambiguous book token '{original}': {list(candidates)}, "
                    f"using '{candidates[0]}'"
                )
            return BookMatch(MatchKind.PREFIX, candidates[0], original, candidates)

        return BookMatch(MatchKind.NOT_FOUND, original, original)

    def normalize(self, token: str) -> str:
        """Return the canonical name, or the trimmed token unchanged if unknown."""
        return self.match(token).name

    def resolve(self, token: str) -> str:
        """Return the canonical name or raise BookNotFoundError."""
        result = self.match(token)
        if not result.found:
            raise BookNotFoundError(token.strip(), self.suggest(token))
        return result.name

    def suggest(self, token: str, limit: int = 3) -> list[str]:
        """Canonical names sharing the token's first three letters."""
        stem = clean_token(token)[:3]
        if not stem:
            return []
        return [n for n in self.registry.names if n.lower().startswith(stem)][:limit]


DEFAULT_NORMALIZER = BookNormalizer()


def normalize_book(token: str) -> str:
    """Normalize a book token with the default registry and aliases."""
    return DEFAULT_NORMALIZER.normalize(token)


def match_book(token: str) -> BookMatch:
    """Match a book token with the default registry and aliases."""
    return DEFAULT_NORMALIZER.match(token)
