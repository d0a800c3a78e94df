"""Display labels for verse selections.

The formatter trusts its input: a list of verses is assumed to be one
contiguous run inside a single chapter and is labeled by its lowest and
highest verse. Use the continuity analyzer first when that is not known.
"""

from __future__ import annotations

from typing import Sequence

from versekit.models import ParsedReference, VerseReference


def format_reference(verses: Sequence[VerseReference]) -> str:
    """Format verses as "Book C:V" or "Book C:First-Last".

    Raises:
        ValueError: If verses is empty
    """
    if not verses:
        raise ValueError("Cannot format an empty verse list")

    first = verses[0]
    if len(verses) == 1:
        return f"{first.book} {first.chapter}:{first.verse}"

    numbers = [v.verse for v in verses]
    low, high = min(numbers), max(numbers)
    if low == high:
        return f"{first.book} {first.chapter}:{low}"
    return f"{first.book} {first.chapter}:{low}-{high}"


def format_parsed(reference: ParsedReference) -> str:
    """Label for a parsed reference; whole chapters render as "Book C"."""
    return str(reference)


def format_verse_list(verses: Sequence[VerseReference]) -> str:
    """Label an arbitrary selection as "; "-joined runs.

    Verses are grouped into contiguous runs per book and chapter, in the
    order given, and each run is labeled with format_reference().
    """
    runs: list[list[VerseReference]] = []
    for verse in verses:
        if runs:
            last = runs[-1][-1]
            if (
                last.book == verse.book
                and last.chapter == verse.chapter
                and verse.verse == last.verse + 1
            ):
                runs[-1].append(verse)
                continue
        runs.append([verse])
    return "; ".join(format_reference(run) for run in runs)
