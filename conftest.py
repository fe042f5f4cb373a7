import random

import pytest
from fastapi.testclient import TestClient

from backend.app import create_app


@pytest.fixture
def rng():
    """Seeded random source so generator tests are reproducible."""
    return random.Random(1234)


@pytest.fixture
def client():
    """API client on a fresh app with the default balance config."""
    return TestClient(create_app())
