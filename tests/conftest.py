"""
tests/conftest.py -- Shared fixtures for the compact-jwt test suite.

This module provides:
  - key: the HMAC key of the well-known example token (b"secret")
  - reference_token / reference_claims: the well-known HS256 example token
  - cli_env: a configured SECRET_KEY with the settings cache cleared around
    the test, for tests that go through main.py

The DEBUG env var must be set before any core.config use so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator

# Set DEBUG before any core import so get_settings() can auto-generate
# SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest

from core.config import get_settings

REFERENCE_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiYWRtaW4iOnRydWV9"
    ".TJVA95OrM7E2cBab30RMHrHDcEfxjoYZgeFONFh7HgQ"
)

CLI_SECRET = "cli-test-secret-key-0123456789abcdef"


@pytest.fixture
def key() -> bytes:
    return b"secret"


@pytest.fixture
def reference_claims() -> dict:
    # Insertion order matters: it is the serialization order.
    return {"sub": "1234567890", "name": "John Doe", "admin": True}


@pytest.fixture
def reference_token() -> str:
    return REFERENCE_TOKEN


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch) -> Generator[str, None, None]:
    """Configure a fixed SECRET_KEY for main.py and reset the settings singleton."""
    monkeypatch.setenv("SECRET_KEY", CLI_SECRET)
    monkeypatch.setenv("TOKEN_EXPIRE_SECONDS", "3600")
    monkeypatch.delenv("DEFAULT_ALGORITHM", raising=False)
    get_settings.cache_clear()
    yield CLI_SECRET
    get_settings.cache_clear()
