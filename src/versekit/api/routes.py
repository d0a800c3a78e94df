"""API route definitions."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from versekit import __version__
from versekit.api.models import (
    BookModel,
    ContinuityRequest,
    ContinuityResponse,
    FetchRequestModel,
    HealthModel,
    ParsedReferenceModel,
    PassageGroupModel,
    PassageRequest,
    PassageResponse,
    ProviderVerseModel,
    TranslationModel,
    VerseTextModel,
)
from versekit.canon.books import Testament
from versekit.engine import ScriptureEngine
from versekit.errors import (
    BookNotFoundError,
    InvalidRangeError,
    ProviderError,
    ReferenceFormatError,
    TranslationNotFoundError,
)
from versekit.models import FetchRequest, VerseText

router = APIRouter()


def get_engine(request: Request) -> ScriptureEngine:
    return request.app.state.engine


def _verse_model(verse: VerseText) -> VerseTextModel:
    return VerseTextModel(
        book=verse.book,
        chapter=verse.chapter,
        verse=verse.verse,
        translation=verse.translation,
        text=verse.text,
    )


@router.get("/health", response_model=HealthModel)
async def health_check(engine: ScriptureEngine = Depends(get_engine)):
    """Health check endpoint."""
    return HealthModel(
        status="ok",
        version=__version__,
        provider_url=engine.settings.provider_url,
        translations=len(engine.catalog),
    )


@router.get("/books", response_model=List[BookModel])
async def list_books(
    testament: Optional[Testament] = Query(None, description="OT or NT"),
    engine: ScriptureEngine = Depends(get_engine),
):
    """List canonical books in canon order."""
    books = engine.registry.slice(testament) if testament else list(engine.registry)
    return [BookModel(name=b.name, testament=b.testament.value, index=b.index) for b in books]


@router.get("/translations", response_model=List[TranslationModel])
async def list_translations(
    q: Optional[str] = Query(None, description="Filter by code or name"),
    engine: ScriptureEngine = Depends(get_engine),
):
    """List translations known to the provider."""
    translations = engine.catalog.search(q) if q else list(engine.catalog)
    return [TranslationModel(short_name=t.short_name, full_name=t.full_name) for t in translations]


@router.get("/references/parse", response_model=ParsedReferenceModel)
async def parse_reference(
    q: str = Query(..., description="Reference like 'Romans 8:1-4'"),
    engine: ScriptureEngine = Depends(get_engine),
):
    """Parse a single reference and resolve its book."""
    try:
        parsed = engine.parse(q)
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Cannot parse reference: '{q}'")

    token = engine.parser.book_token(q)
    match = engine.normalizer.match(token)
    if not match.found:
        error = BookNotFoundError(token, engine.normalizer.suggest(token))
        raise HTTPException(status_code=404, detail=str(error))

    return ParsedReferenceModel(
        book=parsed.book,
        chapter=parsed.chapter,
        start_verse=parsed.start_verse,
        end_verse=parsed.end_verse,
        whole_chapter=parsed.is_whole_chapter,
        label=str(parsed),
        book_index=engine.registry.index_of(parsed.book),
        match_kind=match.kind.value,
        candidates=list(match.candidates),
    )


@router.post("/references/continuity", response_model=ContinuityResponse)
async def check_continuity(
    body: ContinuityRequest, engine: ScriptureEngine = Depends(get_engine)
):
    """Check whether "Book C:V" entries form one continuous passage."""
    try:
        continuous = engine.is_continuous(body.verses)
    except ReferenceFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ContinuityResponse(continuous=continuous, count=len(body.verses))


@router.post("/fetch-verses", response_model=List[List[ProviderVerseModel]])
async def fetch_verses(
    body: List[FetchRequestModel], engine: ScriptureEngine = Depends(get_engine)
):
    """Fetch verses in provider wire form: one list per request group."""
    requests = [FetchRequest(r.translation, r.book, r.chapter, tuple(r.verses)) for r in body]

    try:
        verses = await engine.fetcher.fetch(requests)
    except TranslationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=f"Error fetching verses: {e}")

    response: list[list[ProviderVerseModel]] = []
    for request in requests:
        wanted = set(request.verses)
        response.append(
            [
                ProviderVerseModel(
                    book=engine.registry.index_of(v.book),
                    chapter=v.chapter,
                    verse=v.verse,
                    text=v.text,
                )
                for v in verses
                if v.translation == request.translation
                and engine.registry.index_of(v.book) == request.book
                and v.chapter == request.chapter
                and v.verse in wanted
            ]
        )
    return response


@router.post("/passages", response_model=PassageResponse)
async def fetch_passage(body: PassageRequest, engine: ScriptureEngine = Depends(get_engine)):
    """Parse references and fetch their text, grouped per reference."""
    translation = body.translation or engine.settings.default_translation
    try:
        groups = await engine.fetch_passage(body.reference, translation)
    except TranslationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (InvalidRangeError, ReferenceFormatError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProviderError as e:
        raise HTTPException(status_code=502, detail="Failed to load verses. Please try again.") from e

    return PassageResponse(
        translation=translation,
        groups=[
            PassageGroupModel(
                reference=group.reference.original,
                label=group.label,
                verses=[_verse_model(v) for v in group.verses],
            )
            for group in groups
        ],
    )
