"""Verse text providers.

A provider takes a batch of request groups and returns one list of verses per
group, in request order. The engine issues one provider call per fetch.

BollsProvider talks to the bolls.life get-verses endpoint, which accepts
exactly that batch shape as JSON. StaticProvider answers from memory and is
used for tests and offline runs.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from versekit.config import DEFAULT_PROVIDER_URL, Settings
from versekit.errors import ProviderError
from versekit.models import FetchRequest

logger = logging.getLogger(__name__)


class ProviderVerse(BaseModel):
    """One verse as returned by the provider."""

    model_config = ConfigDict(extra="ignore")

    book: int = Field(..., description="1-based canonical book index")
    chapter: int
    verse: int
    text: str | None = Field(None, description="Verse markup, may be empty")


ProviderResponse = list[list[ProviderVerse]]

_response_adapter = TypeAdapter(ProviderResponse)


def parse_provider_response(data: Any, expected_groups: int) -> ProviderResponse:
    """Validate raw provider JSON.

    Raises:
        ProviderError: If the payload is not a list of verse lists, or the
            group count does not match the request
    """
    try:
        groups = _response_adapter.validate_python(data)
    except ValidationError as e:
        raise ProviderError(f"Malformed provider response: {e.error_count()} errors", e) from e

    if len(groups) != expected_groups:
        raise ProviderError(
            f"Provider returned {len(groups)} groups for {expected_groups} requests"
        )
    return groups


@runtime_checkable
class VerseProvider(Protocol):
    """Protocol for batched verse text sources."""

    async def get_verses(self, requests: Sequence[FetchRequest]) -> ProviderResponse:
        """Fetch verses for each request group.

        Args:
            requests: Request groups

        Returns:
            One list per request, in request order
        """
        ...


class BollsProvider:
    """Provider backed by the bolls.life get-verses API."""

    def __init__(
        self,
        url: str = DEFAULT_PROVIDER_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        headers: Mapping[str, str] | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> "BollsProvider":
        return cls(
            url=settings.provider_url,
            timeout=settings.provider_timeout,
            client=client,
            headers=settings.extra_headers,
        )

    async def get_verses(self, requests: Sequence[FetchRequest]) -> ProviderResponse:
        payload = [request.to_payload() for request in requests]

        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Provider returned {e.response.status_code} for {len(payload)} groups")
            raise ProviderError(
                f"Verse provider returned HTTP {e.response.status_code}", e
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Provider request failed: {e!r}")
            raise ProviderError(f"Verse provider unreachable: {e}", e) from e
        except ValueError as e:
            raise ProviderError("Verse provider returned invalid JSON", e) from e

        return parse_provider_response(data, len(requests))

    async def _post(self, client: httpx.AsyncClient, payload: list[dict]) -> httpx.Response:
        return await client.post(
            self.url, json=payload, headers=self.headers, timeout=self.timeout
        )


class StaticProvider:
    """In-memory provider keyed by (translation, book, chapter, verse).

    Unknown verses are simply absent from the response, like a real
    provider asked for verse 150 of a 31-verse chapter.
    """

    def __init__(self, verses: Mapping[tuple[str, int, int, int], str] | None = None):
        self.verses = dict(verses or {})
        self.calls: list[list[FetchRequest]] = []

    def add(self, translation: str, book: int, chapter: int, verse: int, text: str) -> None:
        self.verses[(translation, book, chapter, verse)] = text

    async def get_verses(self, requests: Sequence[FetchRequest]) -> ProviderResponse:
        self.calls.append(list(requests))
        response: ProviderResponse = []
        for request in requests:
            group = []
            for verse in request.verses:
                key = (request.translation, request.book, request.chapter, verse)
                if key in self.verses:
                    group.append(
                        ProviderVerse(
                            book=request.book,
                            chapter=request.chapter,
                            verse=verse,
                            text=self.verses[key],
                        )
                    )
            response.append(group)
        return response
