"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from gatehouse.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Test client over an app backed by a fresh mock container."""
    app = create_app(container=build_test_container(web=True))
    with TestClient(app) as test_client:
        yield test_client
