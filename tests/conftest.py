"""Shared pytest fixtures for shield_policy tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from shield_policy.config.settings import get_settings
from shield_policy.core.identity import Identity


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep SHIELD_* env vars and the settings cache out of every test."""
    for name in ("SHIELD_PROGRAM_ID", "SHIELD_POLICY_VERSION", "SHIELD_VERBOSE", "SHIELD_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mint() -> Identity:
    """Mint made of 0x09 bytes (base58 cGfHiC6Kgg3FpFZvgwGcswsCRtp4aBP2fzuXRQPizuN)."""
    return Identity(bytes([9]) * 32)


@pytest.fixture
def owner() -> Identity:
    """Owner made of 0x07 bytes (base58 US517G5965aydkZ46HS38QLi7UQiSojurfbQfKCELFx)."""
    return Identity(bytes([7]) * 32)


@pytest.fixture
def member() -> Identity:
    return Identity(bytes(range(32)))
