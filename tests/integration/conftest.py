"""HTTP fixtures: the app with its dispatcher swapped for in-memory backends."""

from __future__ import annotations

from collections.abc import Generator

from fastapi.testclient import TestClient
import pytest

from controller.controller_dependencies import get_cdn_service
from main import app


@pytest.fixture
def client(service) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_cdn_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
