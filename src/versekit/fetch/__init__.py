"""Batched verse retrieval from an external provider."""

from versekit.fetch.batcher import VerseBatchFetcher, build_requests, merge_requests
from versekit.fetch.provider import (
    BollsProvider,
    ProviderVerse,
    StaticProvider,
    VerseProvider,
    parse_provider_response,
)

__all__ = [
    "BollsProvider",
    "ProviderVerse",
    "StaticProvider",
    "VerseBatchFetcher",
    "VerseProvider",
    "build_requests",
    "merge_requests",
    "parse_provider_response",
]
