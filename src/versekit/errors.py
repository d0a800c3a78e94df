"""Error taxonomy for the scripture reference engine.

Parse failures are not exceptions: parsers return None for input that does
not look like a reference at all. Everything below is raised for input that
looks like a reference but cannot be honored.
"""

from __future__ import annotations


class ScriptureError(Exception):
    """Base class for all engine errors."""

    pass


class BookNotFoundError(ScriptureError, LookupError):
    """Raised when a book token does not resolve to a canonical book.

    The message always carries the token as the user typed it, not the
    normalized form.
    """

    def __init__(self, token: str, suggestions: list[str] | None = None):
        self.token = token
        self.suggestions = suggestions or []
        message = f'Book "{token}" not found.'
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)


class TranslationNotFoundError(ScriptureError, LookupError):
    """Raised when a translation code is absent from the catalog."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(
            f"Unknown translation: '{code}'. "
            "Run 'versekit translations' to list supported codes."
        )


class InvalidRangeError(ScriptureError, ValueError):
    """Raised for ranges that cannot exist (end before start, verse 0, ...)."""

    pass


class ReferenceFormatError(ScriptureError, ValueError):
    """Raised when a "Book C:V" entry is malformed or no reference can be parsed."""

    pass


class ProviderError(ScriptureError):
    """Raised when the external verse provider fails for a whole batch."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class CatalogError(ScriptureError):
    """Raised when static configuration data (translation catalog) is invalid."""

    def __init__(self, message: str, entry: str | None = None):
        self.entry = entry
        full_message = f"[{entry}] {message}" if entry else message
        super().__init__(full_message)
