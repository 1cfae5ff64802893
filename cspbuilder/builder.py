"""Content-Security-Policy builder."""

from __future__ import annotations

from typing import Any, Iterable

from cspbuilder.nonce import RandomSource, generate_nonce, nonce_token, system_random_bytes
from cspbuilder.vocabulary import Directive, Source, as_directive, as_source

HEADER_NAME = "Content-Security-Policy"


class CspBuilder:
    """Accumulate directive sources and render a CSP header value.

    Each instance draws its own nonce at construction. Mutators return the
    builder so calls can be chained::

        csp = CspBuilder().set_sources(Directive.default, [Source.self])
        csp.add_source(Directive.script, Source.self).add_nonce(Directive.script)
        header = csp.serialize()

    Instances are meant to live for a single request and are not thread-safe.
    """

    def __init__(
        self,
        seed_default_self: bool = False,
        *,
        random_source: RandomSource = system_random_bytes,
        strict_nonce: bool = False,
    ) -> None:
        self._nonce = generate_nonce(random_source, strict=strict_nonce)
        self._policy: dict[str, list[str]] = {}
        if seed_default_self:
            for directive in Directive:
                self._policy[directive.token] = [Source.self.token]

    @property
    def nonce(self) -> str:
        """Base64 nonce for ``nonce="..."`` attributes on inline tags."""
        return self._nonce

    @property
    def directives(self) -> dict[str, list[str]]:
        """Copy of the current {directive: [sources]} mapping."""
        return {directive: list(values) for directive, values in self._policy.items()}

    def set_sources(self, directive: Directive | str, sources: Iterable[Source | str]) -> CspBuilder:
        """Replace the source list of ``directive``."""
        key = as_directive(directive).token
        self._policy[key] = [as_source(source).token for source in sources]
        return self

    def add_source(self, directive: Directive | str, source: Source | str) -> CspBuilder:
        """Append a keyword source to ``directive``."""
        self._append(directive, as_source(source).token)
        return self

    def add_url(self, directive: Directive | str, url: str) -> CspBuilder:
        """Append a host, scheme or wildcard expression verbatim."""
        if not isinstance(url, str):
            raise TypeError(f"CSP source expression must be a str, got {type(url).__name__}")
        self._append(directive, url)
        return self

    def add_nonce(self, directive: Directive | str) -> CspBuilder:
        """Append this instance's ``'nonce-...'`` source to ``directive``."""
        self._append(directive, nonce_token(self._nonce))
        return self

    def serialize(self) -> str:
        """Render the header value.

        Every clause ends in ``"; "``, including the last one.
        """
        return "".join(
            f"{directive} {' '.join(values)}; " for directive, values in self._policy.items()
        )

    def apply(self, response: Any, header_name: str = HEADER_NAME) -> Any:
        """Set the serialized policy on ``response.headers`` and return the response."""
        response.headers[header_name] = self.serialize()
        return response

    def _append(self, directive: Directive | str, token: str) -> None:
        self._policy.setdefault(as_directive(directive).token, []).append(token)

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"CspBuilder({self._policy!r})"
