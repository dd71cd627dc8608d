"""
Review aggregation.

Responsibilities:
- Summarise a professional's full review collection (average, per-star breakdown).
- Search, rating-filter and sort the displayed reviews without touching the summary.
- Apply "mark helpful" and "submit review" as copy-on-write updates.
"""
