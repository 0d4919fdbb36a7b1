# tests/conftest.py
from __future__ import annotations

import os
from typing import Iterator

import httpx
import pytest

# --- Env ÎNAINTE de importul aplicației (engine-ul se creează la import) ------
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SQLALCHEMY_CREATE_ALL"] = "1"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402


# --- Fixură client ------------------------------------------------------------
@pytest.fixture(scope="session")
def client() -> Iterator[httpx.Client]:
    """Client in-process (TestClient e un httpx.Client); rulează și lifespan-ul."""
    with TestClient(app) as c:
        yield c
