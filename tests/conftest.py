"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest
import structlog

from bech32codec.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Run every test against default settings, whatever the environment says."""
    for key in list(os.environ):
        if key.upper().startswith("BECH32_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
