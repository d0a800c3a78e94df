"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from versekit.api.main import create_app
from versekit.config import Settings


class FailingProvider:
    async def get_verses(self, requests):
        raise TimeoutError("read timed out")


@pytest.fixture
def client(provider):
    """Client backed by the static provider and the bundled catalog."""
    app = create_app(Settings(), provider=provider)
    return TestClient(app)


class TestMeta:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "versekit"

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert data["translations"] > 0

    def test_books(self, client):
        books = client.get("/api/books").json()
        assert len(books) == 66
        assert books[0] == {"name": "Genesis", "testament": "OT", "index": 1}

    def test_books_by_testament(self, client):
        books = client.get("/api/books", params={"testament": "NT"}).json()
        assert len(books) == 27
        assert books[0]["name"] == "Matthew"

    def test_translations_search(self, client):
        found = client.get("/api/translations", params={"q": "king james"}).json()
        assert [t["short_name"] for t in found] == ["KJV", "NKJV"]


class TestParseEndpoint:
    def test_parse(self, client):
        data = client.get("/api/references/parse", params={"q": "rom 8:1-4"}).json()
        assert data["book"] == "Romans"
        assert data["book_index"] == 45
        assert data["start_verse"] == 1
        assert data["end_verse"] == 4
        assert data["whole_chapter"] is False
        assert data["label"] == "Romans 8:1-4"
        assert data["match_kind"] == "alias"

    def test_whole_chapter(self, client):
        data = client.get("/api/references/parse", params={"q": "Psalm 23"}).json()
        assert data["whole_chapter"] is True
        assert data["start_verse"] is None

    def test_ambiguous_prefix_reports_candidates(self, client):
        data = client.get("/api/references/parse", params={"q": "Jo 1"}).json()
        assert data["match_kind"] == "alias"

        data = client.get("/api/references/parse", params={"q": "Ju 1"}).json()
        assert data["match_kind"] == "prefix"
        assert data["book"] == "Judges"
        assert data["candidates"] == ["Judges", "Jude"]

    def test_unknown_book(self, client):
        response = client.get("/api/references/parse", params={"q": "Hezekiah 1:1"})
        assert response.status_code == 404
        assert "Hezekiah" in response.json()["detail"]

    def test_reversed_range(self, client):
        response = client.get("/api/references/parse", params={"q": "John 3:18-16"})
        assert response.status_code == 422

    def test_not_a_reference(self, client):
        response = client.get("/api/references/parse", params={"q": "3:16"})
        assert response.status_code == 422


class TestContinuityEndpoint:
    def test_continuous(self, client):
        response = client.post(
            "/api/references/continuity",
            json={"verses": ["Psalms 23:1", "Psalms 22:31"]},
        )
        assert response.json() == {"continuous": True, "count": 2}

    def test_gap(self, client):
        response = client.post(
            "/api/references/continuity",
            json={"verses": ["John 3:16", "John 3:18"]},
        )
        assert response.json()["continuous"] is False

    def test_malformed(self, client):
        response = client.post("/api/references/continuity", json={"verses": ["John 3"]})
        assert response.status_code == 422


class TestFetchVersesEndpoint:
    def test_provider_shape(self, client):
        response = client.post(
            "/api/fetch-verses",
            json=[
                {"translation": "NASB", "book": 45, "chapter": 8, "verses": [1, 2, 3, 4]},
                {"translation": "NASB", "book": 43, "chapter": 3, "verses": [16]},
            ],
        )

        assert response.status_code == 200
        groups = response.json()
        assert len(groups) == 2
        assert [v["verse"] for v in groups[0]] == [1, 2, 3, 4]
        assert groups[1] == [
            {"book": 43, "chapter": 3, "verse": 16, "text": "For God so loved the world"}
        ]

    def test_unknown_translation(self, client):
        response = client.post(
            "/api/fetch-verses",
            json=[{"translation": "XYZ", "book": 45, "chapter": 8, "verses": [1]}],
        )
        assert response.status_code == 404

    def test_invalid_book(self, client):
        response = client.post(
            "/api/fetch-verses",
            json=[{"translation": "NASB", "book": 70, "chapter": 1, "verses": [1]}],
        )
        assert response.status_code == 422

    def test_provider_failure(self):
        client = TestClient(create_app(Settings(), provider=FailingProvider()))
        response = client.post(
            "/api/fetch-verses",
            json=[{"translation": "NASB", "book": 45, "chapter": 8, "verses": [1]}],
        )
        assert response.status_code == 502
        assert response.json()["detail"].startswith("Error fetching verses")


class TestPassagesEndpoint:
    def test_passage(self, client):
        response = client.post(
            "/api/passages", json={"reference": "Romans 8:1-4", "translation": "KJV"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["translation"] == "KJV"
        assert data["groups"][0]["label"] == "Romans 8:1-4"
        assert data["groups"][0]["verses"][0]["text"] == "Romans 8:1 KJV"

    def test_default_translation(self, client):
        data = client.post("/api/passages", json={"reference": "John 3:16"}).json()
        assert data["translation"] == "NASB"

    def test_unknown_book(self, client):
        response = client.post("/api/passages", json={"reference": "Hezekiah 1:1"})
        assert response.status_code == 404

    def test_reversed_range(self, client, provider):
        response = client.post(
            "/api/passages", json={"reference": "Romans 8:4-1", "translation": "NASB"}
        )
        assert response.status_code == 422
        assert provider.calls == []

    def test_not_a_reference(self, client):
        response = client.post("/api/passages", json={"reference": "hello world!"})
        assert response.status_code == 422
        assert "Cannot parse reference" in response.json()["detail"]

    def test_provider_failure(self):
        client = TestClient(create_app(Settings(), provider=FailingProvider()))
        response = client.post("/api/passages", json={"reference": "John 3:16"})
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to load verses. Please try again."
