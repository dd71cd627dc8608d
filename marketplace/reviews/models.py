from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

STAR_VALUES = (5, 4, 3, 2, 1)


class ReviewSortKey(str, Enum):
    recent = "recent"
    oldest = "oldest"
    highest = "highest"
    lowest = "lowest"
    helpful = "helpful"


def breakdown_percentages(breakdown: dict[int, int], total: int) -> dict[int, int]:
    """Per-star share of ``total``, rounded half up; all zeros when ``total`` is 0."""
    if total <= 0:
        return {star: 0 for star in STAR_VALUES}
    return {
        star: math.floor(breakdown.get(star, 0) / total * 100 + 0.5)
        for star in STAR_VALUES
    }


class ReviewRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    author_name: str
    author_avatar: str | None = None
    rating: int = Field(..., ge=1, le=5)
    date: datetime
    content: str
    helpful_count: int = Field(default=0, ge=0)
    verified: bool = False

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are read as UTC so all review dates stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReviewSummary(BaseModel):
    overall_rating: float = 0.0
    total_reviews: int = Field(default=0, ge=0)
    rating_breakdown: dict[int, int] = Field(
        default_factory=lambda: {star: 0 for star in STAR_VALUES}
    )

    @computed_field
    @property
    def rating_percentages(self) -> dict[int, int]:
        return breakdown_percentages(self.rating_breakdown, self.total_reviews)

    @computed_field
    @property
    def display_rating(self) -> str:
        return f"{self.overall_rating:.1f}"


class ReviewsPayload(BaseModel):
    summary: ReviewSummary = Field(default_factory=ReviewSummary)
    reviews: list[ReviewRecord] = Field(default_factory=list)


class ReviewSubmission(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    rating: int = Field(..., ge=1, le=5)
    content: str = Field(..., min_length=1, max_length=5000)
    author_name: str = Field(default="You", min_length=1)


class ReviewListResponse(BaseModel):
    summary: ReviewSummary
    reviews: list[ReviewRecord]
    total_matching: int
