from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import TypeAdapter

from marketplace import app as app_module
from marketplace.data_access.cache import clear_cache
from marketplace.data_access.config import DataAccessConfig
from marketplace.directory.models import ProfessionalRecord
from marketplace.reviews.models import ReviewsPayload
from marketplace.reviews.store import clear_reviews

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch):
    """Zero latency and empty caches / review store for every test."""
    monkeypatch.setattr(app_module, "DATA_ACCESS_CONFIG", DataAccessConfig(latency_seconds=0.0))
    clear_cache()
    clear_reviews()
    yield
    clear_cache()
    clear_reviews()


@pytest.fixture
def professionals() -> list[ProfessionalRecord]:
    raw = json.loads((_DATA_DIR / "professionals.json").read_text(encoding="utf-8"))
    return TypeAdapter(list[ProfessionalRecord]).validate_python(raw)


@pytest.fixture
def reviews_payload() -> ReviewsPayload:
    raw = json.loads((_DATA_DIR / "reviews.json").read_text(encoding="utf-8"))
    return ReviewsPayload.model_validate(raw)
