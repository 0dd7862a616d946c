import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def no_default_singletons(monkeypatch):
    """Start every test without a cached Nominatim client or finder panel."""
    from services import geocoding, search_orchestrator

    monkeypatch.setattr(geocoding, "_default_client", None)
    monkeypatch.setattr(search_orchestrator, "_default_panel", None)
    yield
