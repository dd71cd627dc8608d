from __future__ import annotations

from collections import Counter
from typing import Sequence

from .models import STAR_VALUES, ReviewRecord, ReviewSortKey, ReviewSummary

# sort key -> (record -> sort value, reverse)
_SORTS = {
    ReviewSortKey.recent: (lambda r: r.date, True),
    ReviewSortKey.oldest: (lambda r: r.date, False),
    ReviewSortKey.highest: (lambda r: r.rating, True),
    ReviewSortKey.lowest: (lambda r: r.rating, False),
    ReviewSortKey.helpful: (lambda r: r.helpful_count, True),
}


def summarize(reviews: Sequence[ReviewRecord]) -> ReviewSummary:
    """Summary statistics over the full, unfiltered review collection."""
    total = len(reviews)

    star_counter: Counter[int] = Counter(r.rating for r in reviews)
    breakdown = {star: star_counter.get(star, 0) for star in STAR_VALUES}

    overall = sum(r.rating for r in reviews) / total if total else 0.0

    return ReviewSummary(
        overall_rating=overall,
        total_reviews=total,
        rating_breakdown=breakdown,
    )


def query_reviews(
    reviews: Sequence[ReviewRecord],
    search_term: str = "",
    rating_filter: int | None = None,
    sort_key: ReviewSortKey = ReviewSortKey.recent,
) -> list[ReviewRecord]:
    """
    Return the reviews to display for one search / rating / sort state.

    Search matches review content or author name. Sorting is stable, so
    equal keys keep their collection order.
    """
    result = list(reviews)

    term = search_term.strip().lower()
    if term:
        result = [
            r for r in result
            if term in r.content.lower() or term in r.author_name.lower()
        ]

    if rating_filter is not None:
        result = [r for r in result if r.rating == rating_filter]

    key, reverse = _SORTS[ReviewSortKey(sort_key)]
    # sorted() keeps ties in order even with reverse=True
    return sorted(result, key=key, reverse=reverse)


def mark_helpful(reviews: Sequence[ReviewRecord], review_id: str) -> list[ReviewRecord]:
    return [
        r.model_copy(update={"helpful_count": r.helpful_count + 1})
        if r.id == review_id
        else r
        for r in reviews
    ]


def submit_review(
    reviews: Sequence[ReviewRecord],
    new_review: ReviewRecord,
) -> list[ReviewRecord]:
    """Prepend ``new_review``; the caller assigns its id and timestamp."""
    return [new_review, *reviews]
