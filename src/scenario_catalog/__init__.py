# SPDX-License-Identifier: MIT
# src/scenario_catalog/__init__.py
"""
Metadata search and aggregation over a catalog of categories and scenarios.

Build a CatalogSnapshot from raw records (or let CatalogService load a file),
then query it: search, search_categories, get_popular_tags, compute_stats.
"""

from .errors import CatalogError, CatalogLoadError, InvalidFilterError, ValidationError
from .search.engine import SearchFilters
from .snapshot import CatalogSnapshot
from .service import CatalogService

__all__ = [
    "CatalogSnapshot",
    "CatalogService",
    "SearchFilters",
    "CatalogError",
    "CatalogLoadError",
    "InvalidFilterError",
    "ValidationError",
]
