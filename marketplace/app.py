from __future__ import annotations

import logging
import sys
import time
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query

from .data_access.cache import get_cache_stats
from .data_access.config import DEFAULT_DATA_ACCESS_CONFIG
from .data_access.service import (
    fetch_professional_by_id,
    fetch_professionals,
    fetch_reviews_for_professional,
)
from .directory.models import (
    DirectoryQuery,
    DirectoryResponse,
    FacetOptions,
    ProfessionalRecord,
    SortKey,
)
from .directory.query import CATEGORIES, category_section, facet_options, query_professionals
from .reviews.aggregation import mark_helpful, query_reviews, submit_review, summarize
from .reviews.models import (
    ReviewListResponse,
    ReviewRecord,
    ReviewSortKey,
    ReviewSubmission,
)
from .reviews.store import get_reviews, has_reviews, seed_reviews, set_reviews

logger = logging.getLogger(__name__)

app = FastAPI(title="Professional Directory API", version="1.0.0")

DATA_ACCESS_CONFIG = DEFAULT_DATA_ACCESS_CONFIG


async def _require_professional(professional_id: str) -> ProfessionalRecord:
    professional = await fetch_professional_by_id(professional_id, config=DATA_ACCESS_CONFIG)
    if professional is None:
        raise HTTPException(status_code=404, detail="Professional not found")
    return professional


async def _load_reviews(professional_id: str) -> list[ReviewRecord]:
    await _require_professional(professional_id)
    if not has_reviews(professional_id):
        payload = await fetch_reviews_for_professional(professional_id, config=DATA_ACCESS_CONFIG)
        seed_reviews(professional_id, payload.reviews)
    return get_reviews(professional_id)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata", response_model=FacetOptions)
async def metadata() -> FacetOptions:
    professionals = await fetch_professionals(config=DATA_ACCESS_CONFIG)
    return facet_options(professionals)


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


# ── Directory endpoints ──────────────────────────────────────────────────


@app.get("/professionals", response_model=DirectoryResponse)
async def list_professionals(
    search: str = "",
    types: list[str] = Query(default=[], alias="type"),
    specialty: list[str] = Query(default=[]),
    language: list[str] = Query(default=[]),
    availability: list[str] = Query(default=[]),
    min_price: int | None = Query(default=None, ge=0),
    max_price: int | None = Query(default=None, ge=0),
    sort: SortKey = SortKey.recommended,
) -> DirectoryResponse:
    price_range = None
    if min_price is not None or max_price is not None:
        price_range = (
            min_price if min_price is not None else 0,
            max_price if max_price is not None else sys.maxsize,
        )

    query = DirectoryQuery(
        search_term=search,
        type_filter=types,
        specialty_filter=specialty,
        language_filter=language,
        availability_filter=availability,
        price_range=price_range,
        sort_key=sort,
    )
    professionals = await fetch_professionals(config=DATA_ACCESS_CONFIG)
    result = query_professionals(professionals, query)
    return DirectoryResponse(professionals=result, total=len(result))


@app.get("/professionals/categories/{category}", response_model=DirectoryResponse)
async def professionals_by_category(
    category: str,
    limit: int | None = Query(default=None, ge=1, le=50),
) -> DirectoryResponse:
    if category not in CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    professionals = await fetch_professionals(config=DATA_ACCESS_CONFIG)
    section = category_section(professionals, category, limit=limit)
    return DirectoryResponse(professionals=section, total=len(section))


@app.get("/professionals/{professional_id}", response_model=ProfessionalRecord)
async def get_professional(professional_id: str) -> ProfessionalRecord:
    return await _require_professional(professional_id)


# ── Review endpoints ─────────────────────────────────────────────────────


@app.get("/professionals/{professional_id}/reviews", response_model=ReviewListResponse)
async def list_reviews(
    professional_id: str,
    search: str = "",
    rating: int | None = Query(default=None, ge=1, le=5),
    sort: ReviewSortKey = ReviewSortKey.recent,
) -> ReviewListResponse:
    reviews = await _load_reviews(professional_id)
    # Summary always covers the full collection, never the filtered view.
    shown = query_reviews(reviews, search_term=search, rating_filter=rating, sort_key=sort)
    return ReviewListResponse(
        summary=summarize(reviews),
        reviews=shown,
        total_matching=len(shown),
    )


@app.post(
    "/professionals/{professional_id}/reviews",
    response_model=ReviewRecord,
    status_code=201,
)
async def create_review(professional_id: str, body: ReviewSubmission) -> ReviewRecord:
    reviews = await _load_reviews(professional_id)
    new_review = ReviewRecord(
        id=f"review-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}",
        author_name=body.author_name,
        rating=body.rating,
        date=datetime.now(timezone.utc),
        content=body.content,
        helpful_count=0,
        verified=True,
    )
    set_reviews(professional_id, submit_review(reviews, new_review))
    logger.info("Review %s added for %s", new_review.id, professional_id)
    return new_review


@app.post(
    "/professionals/{professional_id}/reviews/{review_id}/helpful",
    response_model=ReviewRecord,
)
async def mark_review_helpful(professional_id: str, review_id: str) -> ReviewRecord:
    reviews = await _load_reviews(professional_id)
    updated = mark_helpful(reviews, review_id)
    match = next((r for r in updated if r.id == review_id), None)
    if match is None:
        raise HTTPException(status_code=404, detail="Review not found")
    set_reviews(professional_id, updated)
    return match
