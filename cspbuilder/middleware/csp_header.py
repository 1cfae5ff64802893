"""Per-request CSP header middleware for Starlette apps."""

from __future__ import annotations

import structlog
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cspbuilder.builder import CspBuilder
from cspbuilder.config.loader import get_settings
from cspbuilder.logging_config import setup_logging
from cspbuilder.nonce import RandomSource, system_random_bytes
from cspbuilder.presets import apply_preset

logger = structlog.get_logger()


class CspMiddleware(BaseHTTPMiddleware):
    """Attach a fresh CSP, with its own nonce, to every response.

    - The builder is exposed as ``request.state.csp`` so handlers can add
      sources and read ``nonce`` for inline ``<script>``/``<style>`` tags
    - Seeding, preset and strict-nonce default to settings
    - A header already set by the handler is left alone
    """

    def __init__(
        self,
        app: ASGIApp,
        seed_default_self: bool | None = None,
        preset: str | None = None,
        strict_nonce: bool | None = None,
        random_source: RandomSource = system_random_bytes,
    ) -> None:
        super().__init__(app)
        self._seed_default_self = seed_default_self
        self._preset = preset
        self._strict_nonce = strict_nonce
        self._random_source = random_source

    def build(self) -> CspBuilder:
        """Create the builder for one request."""
        settings = get_settings()
        seed = settings.seed_default_self if self._seed_default_self is None else self._seed_default_self
        strict = settings.strict_nonce if self._strict_nonce is None else self._strict_nonce
        preset = settings.preset if self._preset is None else self._preset

        builder = CspBuilder(seed, random_source=self._random_source, strict_nonce=strict)
        if not preset:
            return builder
        try:
            return apply_preset(builder, preset)
        except (KeyError, ValueError) as exc:
            # A half-applied preset must not leak into the response
            logger.error("csp_preset_error", preset=preset, error=str(exc))
            return CspBuilder(seed, random_source=self._random_source, strict_nonce=strict)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.csp = self.build()
        response = await call_next(request)

        try:
            return self._apply_header(response, request.state.csp)
        except Exception as exc:
            logger.error("csp_header_error", error=str(exc), path=request.url.path)
            return response

    def _apply_header(self, response: Response, builder: CspBuilder) -> Response:
        header_name = get_settings().header_name
        if header_name in response.headers:
            logger.debug("csp_header_preserved", header=header_name)
            return response
        return builder.apply(response, header_name)


def get_csp(request: Request) -> CspBuilder | None:
    """Return the CSP builder for the current request, if the middleware ran."""
    return getattr(request.state, "csp", None)


def install_csp(app: Starlette, configure_logging: bool = True, **options) -> Starlette:
    """Add CspMiddleware to ``app`` and, by default, set up ``cspbuilder`` logging.

    ``options`` are passed to CspMiddleware (seed_default_self, preset,
    strict_nonce, random_source).
    """
    if configure_logging:
        setup_logging()
    app.add_middleware(CspMiddleware, **options)
    logger.info("csp_middleware_installed", options=sorted(options))
    return app
