"""Common test fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_build_env(monkeypatch):
    """Keep DOCTREE_* variables from the developer's shell out of BuildConfig."""
    for key in list(os.environ):
        if key.startswith("DOCTREE_") and key not in ("DOCTREE_LOGGING_CONFIG", "DOCTREE_LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
    yield
