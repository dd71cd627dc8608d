from __future__ import annotations

from typing import Sequence

import pandas as pd

from .config import DEFAULT_DIRECTORY_CONFIG, DirectoryConfig
from .models import DirectoryQuery, FacetOptions, ProfessionalRecord, SortKey

# sort key -> (column, ascending)
SORT_COLUMNS: dict[SortKey, tuple[str, bool]] = {
    SortKey.price_asc: ("price", True),
    SortKey.price_desc: ("price", False),
    SortKey.rating_desc: ("rating", False),
    SortKey.reviews_desc: ("review_count", False),
}

CATEGORIES = ("featured", "relationship", "listeners")


def _lower_tags(tags: Sequence[str]) -> set[str]:
    return {t.strip().lower() for t in tags if t.strip()}


def _to_frame(professionals: Sequence[ProfessionalRecord]) -> pd.DataFrame:
    """Build a lookup frame indexed by input position, with lowercased match columns."""
    df = pd.DataFrame(
        {
            "name_lower": [p.name.lower() for p in professionals],
            "title_lower": [p.title.lower() for p in professionals],
            "specialty_lower": [p.specialty.lower() for p in professionals],
            "specialties_lower": [[s.lower() for s in p.specialties] for p in professionals],
            "languages_lower": [_lower_tags(p.languages) for p in professionals],
            "availability_lower": [_lower_tags(p.availability) for p in professionals],
            "price": [p.price for p in professionals],
            "rating": [p.rating for p in professionals],
            "review_count": [p.review_count for p in professionals],
        }
    )
    df["position"] = df.index
    return df


def _tag_mask(column: pd.Series, wanted_lower: set[str]) -> pd.Series:
    return column.apply(lambda tags: bool(wanted_lower & set(tags)))


def query_professionals(
    professionals: Sequence[ProfessionalRecord],
    query: DirectoryQuery,
) -> list[ProfessionalRecord]:
    """
    Filter and order the directory for one query state.

    Steps run in a fixed order: search, type, specialty, language,
    availability, price, then a stable sort. The input sequence is never
    modified and an empty list is a valid result.
    """
    if not professionals:
        return []

    df = _to_frame(professionals)
    mask = pd.Series(True, index=df.index)

    # --- Search ---
    term = query.search_term.strip().lower()
    if term:
        mask = mask & (
            df["name_lower"].str.contains(term, regex=False)
            | df["title_lower"].str.contains(term, regex=False)
            | df["specialty_lower"].str.contains(term, regex=False)
            | df["specialties_lower"].apply(lambda tags: any(term in t for t in tags))
        )

    # --- Facets ---
    # Blank tags are dropped; a facet left with no tags is inactive.
    types_lower = _lower_tags(query.type_filter)
    specialties_wanted = _lower_tags(query.specialty_filter)
    languages_wanted = _lower_tags(query.language_filter)
    availability_wanted = _lower_tags(query.availability_filter)

    if types_lower:
        mask = mask & df["title_lower"].apply(
            lambda title: any(t in title for t in types_lower)
        )

    if specialties_wanted:
        mask = mask & _tag_mask(df["specialties_lower"], specialties_wanted)

    if languages_wanted:
        mask = mask & _tag_mask(df["languages_lower"], languages_wanted)

    if availability_wanted:
        mask = mask & _tag_mask(df["availability_lower"], availability_wanted)

    # --- Price ---
    # between() is empty when low > high, which is the intended result.
    if query.price_range is not None:
        low, high = query.price_range
        mask = mask & df["price"].between(low, high, inclusive="both")

    candidates = df.loc[mask]

    # --- Sort ---
    if query.sort_key in SORT_COLUMNS and not candidates.empty:
        column, ascending = SORT_COLUMNS[query.sort_key]
        candidates = candidates.sort_values(
            [column, "position"], ascending=[ascending, True]
        )

    return [professionals[pos] for pos in candidates["position"].tolist()]


def category_section(
    professionals: Sequence[ProfessionalRecord],
    category: str,
    limit: int | None = None,
) -> list[ProfessionalRecord]:
    """Return the professionals shown in one homepage section, in input order."""
    if category == "featured":
        section = list(professionals[: limit or DEFAULT_DIRECTORY_CONFIG.featured_limit])
    elif category == "relationship":
        section = [
            p for p in professionals
            if "Relationship" in p.title or "Relationships" in p.specialties
        ]
    elif category == "listeners":
        section = [p for p in professionals if "Listener" in p.title]
    else:
        raise ValueError(f"Unknown category: {category}")

    return section[:limit] if limit else section


def facet_options(
    professionals: Sequence[ProfessionalRecord],
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> FacetOptions:
    """Collect the distinct filter values available in the directory."""
    types: set[str] = set()
    specialties: set[str] = set()
    languages: set[str] = set()
    availability: set[str] = set()
    session_types: set[str] = set()
    for p in professionals:
        types.add(p.title)
        specialties.update(p.specialties)
        languages.update(p.languages)
        availability.update(p.availability)
        session_types.update(p.session_types)

    prices = [p.price for p in professionals]
    return FacetOptions(
        types=sorted(types),
        specialties=sorted(specialties),
        languages=sorted(languages),
        availability=sorted(availability),
        session_types=sorted(session_types),
        min_price=min(prices) if prices else None,
        max_price=max(prices) if prices else None,
        default_price_range=config.default_price_range,
    )
