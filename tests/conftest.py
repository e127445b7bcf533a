"""Shared fixtures: isolate tests from the developer's environment."""

import os

import pytest

from app.config import get_settings
from app.models.schemas import RecipeRequest


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop AI/credential env vars and the cached Settings around every test."""
    for key in list(os.environ):
        if key.upper().startswith("AI__") or key.upper() in ("GOOGLE_APPLICATION_CREDENTIALS", "SENTRY_DSN"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def egg_rice_request() -> RecipeRequest:
    return RecipeRequest(ingredients=["egg", "rice"])
