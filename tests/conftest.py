"""
Shared test fixtures - test client and settings overrides.
"""

import os
import pytest
from fastapi.testclient import TestClient

# Pin defaults before importing app modules so a local .env cannot leak in
os.environ["DEFAULT_MARKUP_PCT"] = "10"
os.environ["DEFAULT_COMPLEXITY_PCT"] = "0"
os.environ["DEFAULT_TAX_PCT"] = "0"

from quotecraft.config import Settings
from quotecraft.main import app
from quotecraft.routers.quotes import get_settings


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def custom_settings():
    """Settings with non-default quote defaults, wired into the app."""
    cfg = Settings(
        DEFAULT_COMPLEXITY_PCT=5,
        DEFAULT_MARKUP_PCT=15,
        DEFAULT_TAX_PCT=8,
        DEFAULT_TASK_PRICE=75,
        DEFAULT_MATERIAL_PRICE=12.5,
    )
    app.dependency_overrides[get_settings] = lambda: cfg
    yield cfg
    app.dependency_overrides.pop(get_settings, None)
