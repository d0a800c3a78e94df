"""Tests for book name normalization."""

from __future__ import annotations

import pytest

from versekit.canon.books import DEFAULT_REGISTRY, BookRegistry
from versekit.errors import BookNotFoundError
from versekit.reference.normalizer import (
    BookNormalizer,
    MatchKind,
    clean_token,
    match_book,
    normalize_book,
)


class TestAliases:
    """Alias table lookups come first."""

    def test_psalm_singular(self):
        assert normalize_book("psalm") == "Psalms"
        assert normalize_book("Psalm") == "Psalms"
        assert normalize_book("PSALMS") == "Psalms"

    def test_song_of_songs(self):
        assert normalize_book("Song of Songs") == "Song of Solomon"
        assert normalize_book("song of solomon") == "Song of Solomon"
        assert normalize_book("Songs") == "Song of Solomon"

    def test_numbered_books(self):
        assert normalize_book("1 samuel") == "1 Samuel"
        assert normalize_book("2 KINGS") == "2 Kings"
        assert normalize_book("3 john") == "3 John"

    def test_numbered_books_without_space(self):
        assert normalize_book("1cor") == "1 Corinthians"
        assert normalize_book("2Tim") == "2 Timothy"
        assert normalize_book("1Samuel") == "1 Samuel"

    def test_abbreviations(self):
        assert normalize_book("Gen") == "Genesis"
        assert normalize_book("rom") == "Romans"
        assert normalize_book("Rev") == "Revelation"
        assert normalize_book("jn") == "John"

    def test_trailing_period(self):
        assert normalize_book("Gen.") == "Genesis"
        assert normalize_book("1 Cor.") == "1 Corinthians"

    def test_roman_numerals(self):
        assert normalize_book("I Samuel") == "1 Samuel"
        assert normalize_book("II Cor") == "2 Corinthians"
        assert normalize_book("iii john") == "3 John"

    def test_alias_match_kind(self):
        assert match_book("psalm").kind is MatchKind.ALIAS


class TestExactMatch:
    def test_canonical_names_pass_through(self):
        """Every canonical name normalizes to itself."""
        for name in DEFAULT_REGISTRY.names:
            assert normalize_book(name) == name

    def test_case_insensitive(self):
        assert normalize_book("genesis") == "Genesis"
        assert normalize_book("REVELATION") == "Revelation"

    def test_whitespace_trimmed(self):
        assert normalize_book("  Romans  ") == "Romans"

    def test_exact_match_kind(self):
        assert match_book("Genesis").kind is MatchKind.EXACT


class TestPrefixMatch:
    def test_unique_prefix(self):
        result = match_book("Phile")
        assert result.kind is MatchKind.PREFIX
        assert result.name == "Philemon"
        assert not result.is_ambiguous

    def test_ambiguous_prefix_uses_registry_order(self):
        """'Ju' prefixes Judges and Jude; Judges comes first in the canon."""
        result = match_book("Ju")
        assert result.kind is MatchKind.PREFIX
        assert result.name == "Judges"
        assert result.candidates == ("Judges", "Jude")
        assert result.is_ambiguous

    def test_prefix_normalize(self):
        assert normalize_book("Deuter") == "Deuteronomy"
        assert normalize_book("Lament") == "Lamentations"


class TestNotFound:
    def test_unknown_returns_token_unchanged(self):
        assert normalize_book("Hezekiah") == "Hezekiah"
        assert normalize_book(" Hezekiah ") == "Hezekiah"

    def test_unknown_match_kind(self):
        result = match_book("Hezekiah")
        assert result.kind is MatchKind.NOT_FOUND
        assert not result.found

    def test_empty_token(self):
        assert match_book("   ").kind is MatchKind.NOT_FOUND

    def test_resolve_raises_with_original_token(self):
        normalizer = BookNormalizer()
        with pytest.raises(BookNotFoundError) as exc_info:
            normalizer.resolve("Hezekiah")
        assert exc_info.value.token == "Hezekiah"
        assert '"Hezekiah"' in str(exc_info.value)

    def test_resolve_suggestions(self):
        normalizer = BookNormalizer()
        with pytest.raises(BookNotFoundError) as exc_info:
            normalizer.resolve("Romanz")
        assert exc_info.value.suggestions == ["Romans"]


class TestInjectedData:
    def test_custom_aliases(self):
        normalizer = BookNormalizer(aliases={"apoc": "Revelation"})
        assert normalizer.normalize("apoc") == "Revelation"
        assert normalizer.normalize("psalm") == "Psalms"  # prefix of Psalms

    def test_alias_to_unknown_book_rejected(self):
        with pytest.raises(ValueError):
            BookNormalizer(aliases={"x": "Not A Book"})

    def test_custom_registry(self):
        registry = BookRegistry(["Alpha", "Beta"], ot_count=1)
        normalizer = BookNormalizer(registry, aliases={})
        assert normalizer.normalize("al") == "Alpha"
        assert normalizer.normalize("Genesis") == "Genesis"
        assert not normalizer.match("Genesis").found


class TestCleanToken:
    def test_collapses_whitespace(self):
        assert clean_token("Song   of\tSongs") == "song of songs"

    def test_roman_prefix(self):
        assert clean_token("II Kings") == "2 kings"
        assert clean_token("Isaiah") == "isaiah"
