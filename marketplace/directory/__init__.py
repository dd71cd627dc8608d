"""
Professional directory.

Responsibilities:
- Describe professional records and directory query state.
- Search, facet-filter, price-bound and sort the directory in one pure pass.
- Pick the professionals shown in the homepage sections.
- Collect the facet values offered by the filter panel.
"""
