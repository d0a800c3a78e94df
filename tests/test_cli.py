"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from versekit.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def static_provider(monkeypatch, provider):
    """Route the CLI's provider construction to the static provider."""
    monkeypatch.setattr(
        "versekit.engine.BollsProvider.from_settings", lambda settings: provider
    )
    return provider


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "scripture reference" in result.output

    def test_books(self, runner):
        result = runner.invoke(cli, ["books", "-t", "NT"])
        assert result.exit_code == 0
        assert "Matthew" in result.output
        assert "Genesis" not in result.output

    def test_translations(self, runner):
        result = runner.invoke(cli, ["translations", "NASB"])
        assert result.exit_code == 0
        assert "NASB" in result.output

    def test_translations_no_match(self, runner):
        result = runner.invoke(cli, ["translations", "zzzz"])
        assert result.exit_code == 1
        assert "No translations match" in result.output


class TestParseCommand:
    def test_json(self, runner):
        result = runner.invoke(cli, ["parse", "Rom 8:1-4", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["book"] == "Romans"
        assert data["book_index"] == 45
        assert data["start_verse"] == 1
        assert data["end_verse"] == 4
        assert data["match"] == "alias"

    def test_whole_chapter_note(self, runner):
        result = runner.invoke(cli, ["parse", "Psalm 23"])
        assert result.exit_code == 0
        assert "Psalms 23" in result.output
        assert "Whole chapter" in result.output

    def test_unknown_book(self, runner):
        result = runner.invoke(cli, ["parse", "Hezekiah 1:1"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_not_a_reference(self, runner):
        result = runner.invoke(cli, ["parse", "3:16"])
        assert result.exit_code == 1
        assert "Cannot parse" in result.output


class TestContinuityCommand:
    def test_continuous(self, runner):
        result = runner.invoke(cli, ["continuity", "Psalms 23:1", "Psalms 22:31"])
        assert result.exit_code == 0
        assert "Continuous passage" in result.output

    def test_gap(self, runner):
        result = runner.invoke(cli, ["continuity", "John 3:16", "John 3:18"])
        assert result.exit_code == 1
        assert "Not a continuous passage" in result.output

    def test_malformed(self, runner):
        result = runner.invoke(cli, ["continuity", "John"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestFetchCommand:
    def test_fetch_json(self, runner, static_provider):
        result = runner.invoke(cli, ["fetch", "Romans 8:1-2", "-t", "KJV", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["label"] == "Romans 8:1-2"
        assert [v["text"] for v in data[0]["verses"]] == ["Romans 8:1 KJV", "Romans 8:2 KJV"]
        assert len(static_provider.calls) == 1

    def test_fetch_panel(self, runner, static_provider):
        result = runner.invoke(cli, ["fetch", "John 3:16"])
        assert result.exit_code == 0
        assert "For God so loved the world" in result.output

    def test_unknown_translation(self, runner, static_provider):
        result = runner.invoke(cli, ["fetch", "John 3:16", "-t", "XYZ"])
        assert result.exit_code == 1
        assert "Unknown translation" in result.output
        assert static_provider.calls == []

    def test_no_verses(self, runner, static_provider):
        result = runner.invoke(cli, ["fetch", "Genesis 1:1"])
        assert result.exit_code == 1
        assert "No verses found" in result.output

    def test_reversed_range(self, runner, static_provider):
        result = runner.invoke(cli, ["fetch", "Romans 8:4-1"])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "No verses found" not in result.output
        assert static_provider.calls == []
