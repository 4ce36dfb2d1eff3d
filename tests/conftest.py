"""Shared pytest fixtures for devtoolbox tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from devtoolbox.main import app


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """Return a ``TestClient`` with a fresh cookie jar for every test."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ---------------------------------------------------------------------------
# Fixed clock
# ---------------------------------------------------------------------------

@pytest.fixture()
def monday_noon() -> datetime:
    """Monday 2024-01-01 12:00:00 UTC."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def saturday_noon() -> datetime:
    """Saturday 2024-01-06 12:00:00 UTC."""
    return datetime(2024, 1, 6, 12, 0, 0, tzinfo=timezone.utc)
