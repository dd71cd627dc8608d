from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from ..directory.models import DirectoryQuery, ProfessionalRecord
from ..directory.query import query_professionals
from ..reviews.models import ReviewsPayload
from .cache import lookup, store
from .config import DEFAULT_DATA_ACCESS_CONFIG, DataAccessConfig

logger = logging.getLogger(__name__)

_PROFESSIONALS = TypeAdapter(list[ProfessionalRecord])


async def _simulate_latency(config: DataAccessConfig) -> None:
    if config.latency_seconds > 0:
        await asyncio.sleep(config.latency_seconds)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def _load_professionals(config: DataAccessConfig) -> list[ProfessionalRecord]:
    return _PROFESSIONALS.validate_python(_read_json(config.professionals_path))


def _load_reviews(config: DataAccessConfig) -> ReviewsPayload:
    return ReviewsPayload.model_validate(_read_json(config.reviews_path))


async def fetch_professionals(
    filters: DirectoryQuery | None = None,
    config: DataAccessConfig = DEFAULT_DATA_ACCESS_CONFIG,
) -> list[ProfessionalRecord]:
    """
    Fetch the directory, optionally narrowed by ``filters``.

    Returns an empty list on any failure (missing fixture, invalid data).
    """
    if not config.enabled:
        return []

    arguments = {
        "source": str(config.professionals_path),
        "filters": filters.model_dump(mode="json") if filters else None,
    }
    found, cached = lookup("professionals", arguments, config.cache_ttl_seconds)
    if found:
        return list(cached)

    try:
        await _simulate_latency(config)
        professionals = _load_professionals(config)
    except Exception:
        logger.warning("Fetching professionals failed, returning an empty directory", exc_info=True)
        return []

    if filters is not None:
        professionals = query_professionals(professionals, filters)

    store("professionals", arguments, professionals, config.cache_ttl_seconds)
    return list(professionals)


async def fetch_professional_by_id(
    professional_id: str,
    config: DataAccessConfig = DEFAULT_DATA_ACCESS_CONFIG,
) -> ProfessionalRecord | None:
    """Return the matching professional, or ``None`` when missing or on failure."""
    if not config.enabled:
        return None

    arguments = {"source": str(config.professionals_path), "id": professional_id}
    found, cached = lookup("professional", arguments, config.cache_ttl_seconds)
    if found:
        return cached

    try:
        await _simulate_latency(config)
        professionals = _load_professionals(config)
    except Exception:
        logger.warning("Fetching professional %s failed", professional_id, exc_info=True)
        return None

    match = next((p for p in professionals if p.id == professional_id), None)
    if match is not None:
        store("professional", arguments, match, config.cache_ttl_seconds)
    return match


async def fetch_reviews_for_professional(
    professional_id: str,
    config: DataAccessConfig = DEFAULT_DATA_ACCESS_CONFIG,
) -> ReviewsPayload:
    """
    Return the summary and reviews for one professional.

    Unknown professionals, failures and a disabled data source all yield the empty payload
    (rating 0, no reviews, all-zero breakdown).
    """
    if not config.enabled:
        return ReviewsPayload()

    arguments = {"source": str(config.reviews_path), "id": professional_id}
    found, cached = lookup("reviews", arguments, config.cache_ttl_seconds)
    if found:
        return cached.model_copy(deep=True)

    try:
        await _simulate_latency(config)
        known_ids = {p.id for p in _load_professionals(config)}
        if professional_id not in known_ids:
            return ReviewsPayload()
        payload = _load_reviews(config)
    except Exception:
        logger.warning(
            "Fetching reviews for %s failed, returning no reviews", professional_id, exc_info=True
        )
        return ReviewsPayload()

    store("reviews", arguments, payload, config.cache_ttl_seconds)
    return payload.model_copy(deep=True)
