from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortKey(str, Enum):
    recommended = "recommended"
    price_asc = "price-asc"
    price_desc = "price-desc"
    rating_desc = "rating-desc"
    reviews_desc = "reviews-desc"


class ProfessionalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    title: str = Field(..., description='Professional type, e.g. "Psychiatrist"')
    specialty: str = Field(..., description="Headline specialty shown on the card")
    specialties: list[str] = Field(default_factory=list)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    price: int = Field(..., gt=0)
    languages: list[str] = Field(default_factory=list)
    session_types: list[str] = Field(default_factory=list)
    availability: list[str] = Field(default_factory=list)
    location: str | None = None
    image_src: str | None = None
    bio: str | None = None
    education: list[str] = Field(default_factory=list)


class DirectoryQuery(BaseModel):
    search_term: str = ""
    type_filter: list[str] = Field(default_factory=list)
    specialty_filter: list[str] = Field(default_factory=list)
    language_filter: list[str] = Field(default_factory=list)
    availability_filter: list[str] = Field(default_factory=list)
    price_range: tuple[int, int] | None = Field(
        default=None,
        description="Inclusive (min, max) price bounds; None leaves price unbounded",
    )
    sort_key: SortKey = SortKey.recommended


class DirectoryResponse(BaseModel):
    professionals: list[ProfessionalRecord]
    total: int


class FacetOptions(BaseModel):
    types: list[str]
    specialties: list[str]
    languages: list[str]
    availability: list[str]
    session_types: list[str]
    min_price: int | None = None
    max_price: int | None = None
    default_price_range: tuple[int, int]
