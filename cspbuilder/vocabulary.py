"""CSP directive and keyword-source vocabulary.

Each member's value is the exact wire token written into the header, so the
keyword sources already carry their single quotes.
"""

from __future__ import annotations

import enum


class UnknownVocabularyError(ValueError):
    """Raised when a value is not a recognised directive or source."""


class Directive(str, enum.Enum):
    default = "default-src"
    image = "img-src"
    font = "font-src"
    script = "script-src"
    style = "style-src"

    @property
    def token(self) -> str:
        return self.value


class Source(str, enum.Enum):
    self = "'self'"
    unsafe_inline = "'unsafe-inline'"
    unsafe_eval = "'unsafe-eval'"
    data = "data:"
    blob = "blob:"
    media = "media:"
    frame = "frame:"

    @property
    def token(self) -> str:
        return self.value


def as_directive(value: Directive | str) -> Directive:
    """Return the Directive for a member or its wire token (e.g. ``script-src``)."""
    if isinstance(value, Directive):
        return value
    try:
        return Directive(value)
    except ValueError:
        raise UnknownVocabularyError(f"Unknown CSP directive: {value!r}") from None


def as_source(value: Source | str) -> Source:
    """Return the Source for a member or its wire token (e.g. ``'self'``)."""
    if isinstance(value, Source):
        return value
    try:
        return Source(value)
    except ValueError:
        raise UnknownVocabularyError(f"Unknown CSP source: {value!r}") from None
