"""Pydantic models for the HTTP API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class FetchRequestModel(BaseModel):
    """One provider request group, in provider wire form."""

    translation: str = Field(..., description="Translation code, e.g. NASB")
    book: int = Field(..., description="1-based canonical book index")
    chapter: int = Field(..., description="Chapter number")
    verses: List[int] = Field(..., description="Verse numbers to fetch")


class ProviderVerseModel(BaseModel):
    """A verse in provider wire form."""

    book: int
    chapter: int
    verse: int
    text: str


class VerseTextModel(BaseModel):
    """A fetched verse with its canonical book name."""

    book: str
    chapter: int
    verse: int
    translation: str
    text: str = Field(..., description="Unsanitized verse markup")


class ParsedReferenceModel(BaseModel):
    """Parsed scripture reference."""

    book: str
    chapter: int
    start_verse: Optional[int] = None
    end_verse: Optional[int] = None
    whole_chapter: bool
    label: str = Field(..., description="Display label")
    book_index: int = Field(..., description="1-based canonical book index")
    match_kind: str = Field(..., description="How the book token matched")
    candidates: List[str] = Field(
        default_factory=list, description="Other books the token prefixes"
    )


class PassageRequest(BaseModel):
    """Reference text plus translation for a combined parse and fetch."""

    reference: str = Field(..., description="One or more references, ';' separated")
    translation: Optional[str] = Field(None, description="Defaults to server default")


class PassageGroupModel(BaseModel):
    """Verses fetched for one parsed reference."""

    reference: str
    label: str
    verses: List[VerseTextModel]


class PassageResponse(BaseModel):
    translation: str
    groups: List[PassageGroupModel]


class ContinuityRequest(BaseModel):
    verses: List[str] = Field(..., description='Entries like "Romans 8:1"')


class ContinuityResponse(BaseModel):
    continuous: bool
    count: int


class BookModel(BaseModel):
    name: str
    testament: str
    index: int


class TranslationModel(BaseModel):
    short_name: str
    full_name: str


class HealthModel(BaseModel):
    status: str
    version: str
    provider_url: str
    translations: int
