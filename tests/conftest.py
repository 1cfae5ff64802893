"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings for all tests."""
    for key in list(os.environ):
        if key.startswith("CSP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CSP_LOG_JSON", "false")
    monkeypatch.setenv("CSP_LOG_LEVEL", "debug")

    # Reset cached settings and presets
    import cspbuilder.config.loader as loader
    from cspbuilder.logging_config import reset_logging
    from cspbuilder.presets import reset_presets_cache

    loader._settings = None
    reset_presets_cache()
    yield
    loader._settings = None
    reset_presets_cache()
    reset_logging()


@pytest.fixture
def weak_random():
    """Random source that returns fixed bytes and reports them as weak."""
    def _source(n: int) -> tuple[bytes, bool]:
        return b"\x01" * n, False
    return _source
