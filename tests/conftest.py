"""Shared fixtures for the scrypt test-suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def small_params() -> dict[str, int]:
    """Cheap cost parameters for behavioural tests."""
    return {"n": 16, "r": 1, "p": 1, "dklen": 32}
