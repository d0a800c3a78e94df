"""versekit: scripture reference parsing and batched verse retrieval."""

__version__ = "0.1.0"
