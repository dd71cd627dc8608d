from __future__ import annotations

import logging

from .models import ReviewRecord

logger = logging.getLogger(__name__)

_reviews: dict[str, list[ReviewRecord]] = {}


def has_reviews(professional_id: str) -> bool:
    return professional_id in _reviews


def seed_reviews(professional_id: str, reviews: list[ReviewRecord]) -> None:
    """Store the fetched collection unless one is already held for this professional."""
    if professional_id not in _reviews:
        logger.info("Seeding %d reviews for %s", len(reviews), professional_id)
        _reviews[professional_id] = list(reviews)


def get_reviews(professional_id: str) -> list[ReviewRecord]:
    return _reviews.get(professional_id, [])


def set_reviews(professional_id: str, reviews: list[ReviewRecord]) -> None:
    _reviews[professional_id] = reviews


def clear_reviews() -> None:
    _reviews.clear()
