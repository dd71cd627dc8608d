from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from marketplace.reviews.aggregation import (
    mark_helpful,
    query_reviews,
    submit_review,
    summarize,
)
from marketplace.reviews.models import (
    ReviewRecord,
    ReviewSortKey,
    ReviewSummary,
    breakdown_percentages,
)


@pytest.fixture
def reviews(reviews_payload):
    return reviews_payload.reviews


def _review(review_id: str, rating: int, days_ago: int = 0, helpful: int = 0) -> ReviewRecord:
    return ReviewRecord(
        id=review_id,
        author_name="Tester",
        rating=rating,
        date=datetime(2025, 4, 1, tzinfo=timezone.utc) - timedelta(days=days_ago),
        content=f"Review {review_id}",
        helpful_count=helpful,
        verified=False,
    )


def _ids(records):
    return [r.id for r in records]


# ── Summary ──────────────────────────────────────────────────────────────


def test_summarize_counts_and_average(reviews):
    summary = summarize(reviews)
    assert summary.total_reviews == 3
    assert summary.overall_rating == pytest.approx(14 / 3)
    assert summary.display_rating == "4.7"
    assert summary.rating_breakdown == {5: 2, 4: 1, 3: 0, 2: 0, 1: 0}
    assert summary.rating_percentages == {5: 67, 4: 33, 3: 0, 2: 0, 1: 0}


def test_summarize_empty_collection():
    summary = summarize([])
    assert summary.overall_rating == 0
    assert summary.total_reviews == 0
    assert summary.rating_breakdown == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}
    assert summary.rating_percentages == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}


def test_breakdown_percentages_from_counts():
    breakdown = {5: 98, 4: 20, 3: 4, 2: 1, 1: 1}
    assert breakdown_percentages(breakdown, 124) == {5: 79, 4: 16, 3: 3, 2: 1, 1: 1}


def test_fixture_summary_percentages(reviews_payload):
    summary = reviews_payload.summary
    assert summary.total_reviews == 124
    assert summary.rating_percentages == {5: 79, 4: 16, 3: 3, 2: 1, 1: 1}
    assert summary.display_rating == "4.8"


def test_percentages_round_half_up():
    assert breakdown_percentages({5: 1, 4: 7}, 8) == {5: 13, 4: 88, 3: 0, 2: 0, 1: 0}


def test_percentages_zero_total():
    summary = ReviewSummary()
    assert summary.rating_percentages == {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}


@pytest.mark.parametrize(
    "ratings",
    [[5], [1, 2, 3], [5, 5, 4, 3, 1, 1, 2], [4] * 7 + [2] * 5 + [1] * 3],
)
def test_percentages_sum_close_to_hundred(ratings):
    collection = [_review(f"r{i}", rating) for i, rating in enumerate(ratings)]
    percentages = summarize(collection).rating_percentages
    assert abs(sum(percentages.values()) - 100) <= 2


# ── Query ────────────────────────────────────────────────────────────────


def test_default_sort_is_most_recent_first(reviews):
    assert _ids(query_reviews(list(reversed(reviews)))) == ["review-1", "review-2", "review-3"]


def test_sort_oldest(reviews):
    result = query_reviews(reviews, sort_key=ReviewSortKey.oldest)
    assert _ids(result) == ["review-3", "review-2", "review-1"]


def test_sort_highest_keeps_ties_in_order(reviews):
    result = query_reviews(list(reversed(reviews)), sort_key=ReviewSortKey.highest)
    assert _ids(result) == ["review-2", "review-1", "review-3"]


def test_sort_lowest(reviews):
    result = query_reviews(reviews, sort_key="lowest")
    assert _ids(result) == ["review-3", "review-1", "review-2"]


def test_sort_helpful(reviews):
    result = query_reviews(list(reversed(reviews)), sort_key=ReviewSortKey.helpful)
    assert [r.helpful_count for r in result] == [12, 8, 5]


def test_search_content_and_author(reviews):
    assert _ids(query_reviews(reviews, search_term="RAHUL")) == ["review-2"]
    assert _ids(query_reviews(reviews, search_term="rushed")) == ["review-3"]
    assert len(query_reviews(reviews, search_term="very")) == 3


def test_rating_filter_is_exact(reviews):
    assert _ids(query_reviews(reviews, rating_filter=5)) == ["review-1", "review-2"]
    assert query_reviews(reviews, rating_filter=3) == []


def test_search_and_rating_filter_combine(reviews):
    result = query_reviews(reviews, search_term="very", rating_filter=4)
    assert _ids(result) == ["review-3"]


def test_summary_unchanged_by_display_filtering(reviews):
    before = summarize(reviews)
    query_reviews(reviews, search_term="rahul", rating_filter=5, sort_key=ReviewSortKey.lowest)
    assert summarize(reviews) == before


# ── Mutations ────────────────────────────────────────────────────────────


def test_mark_helpful_returns_new_collection(reviews):
    updated = mark_helpful(reviews, "review-2")
    assert updated is not reviews
    assert updated[1].helpful_count == 9
    assert reviews[1].helpful_count == 8
    assert updated[0] is reviews[0]


def test_mark_helpful_unknown_id_is_noop(reviews):
    updated = mark_helpful(reviews, "review-404")
    assert updated == reviews


def test_submit_review_prepends(reviews):
    new_review = ReviewRecord(
        id="review-new",
        author_name="You",
        rating=3,
        date=datetime(2025, 4, 2, tzinfo=timezone.utc),
        content="Helpful first session.",
        verified=True,
    )
    updated = submit_review(reviews, new_review)
    assert _ids(updated) == ["review-new", "review-1", "review-2", "review-3"]
    assert len(reviews) == 3

    summary = summarize(updated)
    assert summary.total_reviews == 4
    assert summary.rating_breakdown[3] == 1
    assert _ids(query_reviews(updated, sort_key=ReviewSortKey.oldest))[-1] == "review-new"


def test_review_rating_must_be_one_to_five():
    with pytest.raises(ValueError):
        _review("bad", 6)


def test_naive_date_is_read_as_utc():
    review = ReviewRecord(
        id="naive",
        author_name="Tester",
        rating=4,
        date=datetime(2025, 4, 2, 8, 0),
        content="No timezone on this one.",
    )
    assert review.date == datetime(2025, 4, 2, 8, 0, tzinfo=timezone.utc)


def test_sorting_mixes_naive_and_aware_dates(reviews):
    naive = ReviewRecord(
        id="review-naive",
        author_name="You",
        rating=3,
        date=datetime(2025, 4, 2),
        content="Submitted without a timezone.",
    )
    updated = submit_review(reviews, naive)

    assert _ids(query_reviews(updated))[0] == "review-naive"
    assert _ids(query_reviews(updated, sort_key=ReviewSortKey.oldest)) == [
        "review-3",
        "review-2",
        "review-1",
        "review-naive",
    ]
