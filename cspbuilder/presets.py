"""Named starting policies loaded from presets.yaml."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from cspbuilder.builder import CspBuilder
from cspbuilder.vocabulary import Source, as_directive

logger = structlog.get_logger()

_PRESETS_PATH = Path(__file__).parent / "presets.yaml"

NONCE_ITEM = "nonce"

_SOURCE_TOKENS = {source.token: source for source in Source}

# Cache loaded presets
_presets: dict | None = None


def load_presets() -> dict:
    """Load presets from YAML, caching after first load."""
    global _presets
    if _presets is not None:
        return _presets
    if not _PRESETS_PATH.exists():
        logger.error("csp_presets_not_found", path=str(_PRESETS_PATH))
        _presets = {}
        return _presets
    with open(_PRESETS_PATH) as f:
        _presets = yaml.safe_load(f) or {}
    return _presets


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    global _presets
    _presets = None


def apply_preset(builder: CspBuilder, name: str) -> CspBuilder:
    """Append every item of preset ``name`` to ``builder``.

    Keyword tokens become sources, ``nonce`` becomes the builder's nonce
    source, anything else is added as a literal source expression.
    """
    presets = load_presets()
    if name not in presets:
        raise KeyError(f"Unknown CSP preset: {name!r}")
    for token, items in (presets[name] or {}).items():
        directive = as_directive(token)
        if items is None:
            continue
        if not isinstance(items, list):
            raise ValueError(f"Preset {name!r} entry {token!r} must be a list, got {type(items).__name__}")
        for item in items:
            if item == NONCE_ITEM:
                builder.add_nonce(directive)
            elif item in _SOURCE_TOKENS:
                builder.add_source(directive, _SOURCE_TOKENS[item])
            else:
                builder.add_url(directive, str(item))
    return builder
