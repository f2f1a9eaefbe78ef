# SPDX-License-Identifier: MIT
# src/scenario_catalog/search/engine.py
"""
Query engine: free-text match plus facet filtering over a CatalogSnapshot.

Matching is a case-insensitive substring test (no scoring). Facet filters are
resolved through the snapshot's inverted indices and intersected; every
specified criterion is ANDed, including multiple tags. Results always come
back in catalog order.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, FrozenSet, List, Mapping, Optional, Sequence, Type, Union

from scenario_catalog.catalog.normalizer import as_id, normalize_tags
from scenario_catalog.catalog.schema import (
    Complexity, Difficulty, EnhancedCategory, EnhancedScenario, Philosophy,
)
from scenario_catalog.errors import InvalidFilterError
from scenario_catalog.utils.text import norm

if TYPE_CHECKING:
    from scenario_catalog.snapshot import CatalogSnapshot

_FILTER_KEYS = ("difficulty", "philosophy", "tags", "category", "complexity", "time_commitment")
_TAG_COLLECTIONS = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class SearchFilters:
    difficulty: Optional[str] = None
    philosophy: Optional[str] = None
    tags: FrozenSet[str] = frozenset()
    category: Optional[str] = None        # category id
    complexity: Optional[str] = None
    time_commitment: Optional[str] = None  # categories only

    def __post_init__(self):
        # enum facets are checked against their enums at query time
        tags = self.tags
        if tags is not None and not isinstance(tags, (str,) + _TAG_COLLECTIONS):
            raise InvalidFilterError("tags", tags)
        object.__setattr__(self, "tags", normalize_tags(tags))

        category = self.category
        if category is not None and category != "":
            category = as_id(category)
            if category is None:
                raise InvalidFilterError("category", self.category)
        object.__setattr__(self, "category", category or None)

        tc = self.time_commitment
        if tc is not None and not isinstance(tc, str):
            raise InvalidFilterError("time_commitment", tc)
        object.__setattr__(self, "time_commitment", (tc or "").strip().lower() or None)

    @classmethod
    def coerce(cls, filters: Union["SearchFilters", Mapping[str, Any], None]) -> "SearchFilters":
        """Accept None, a SearchFilters, or a plain mapping using the field names."""
        if filters is None:
            return cls()
        if isinstance(filters, SearchFilters):
            return filters
        if not isinstance(filters, Mapping):
            raise InvalidFilterError("filters", filters)
        unknown = [k for k in filters if k not in _FILTER_KEYS]
        if unknown:
            raise InvalidFilterError("filter key", unknown[0], _FILTER_KEYS)
        return cls(**{k: filters.get(k) for k in _FILTER_KEYS})

    @property
    def is_empty(self) -> bool:
        return not (
            self.difficulty or self.philosophy or self.tags
            or self.category or self.complexity or self.time_commitment
        )


def facet_value(facet: str, value: Any, enum_cls: Type[Enum]) -> Optional[str]:
    """Validated enum value, or None when the filter is unset."""
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value.value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower()).value
        except ValueError:
            pass
    raise InvalidFilterError(facet, value, enum_cls.values())


def search(
    snapshot: "CatalogSnapshot",
    query_text: str = "",
    filters: Union[SearchFilters, Mapping[str, Any], None] = None,
) -> List[EnhancedScenario]:
    f = SearchFilters.coerce(filters)
    idx = snapshot.index

    # Validate everything before touching any index.
    difficulty = facet_value("difficulty", f.difficulty, Difficulty)
    philosophy = facet_value("philosophy", f.philosophy, Philosophy)
    complexity = facet_value("complexity", f.complexity, Complexity)
    category = f.category
    if category is not None and snapshot.get_category(category) is None:
        raise InvalidFilterError("category", category, [c.id for c in snapshot.categories])
    if f.time_commitment:
        raise InvalidFilterError("time_commitment", f.time_commitment)

    postings: List[Sequence[str]] = []
    if difficulty:
        postings.append(idx.difficulty.get(difficulty, ()))
    if philosophy:
        postings.append(idx.philosophy.get(philosophy, ()))
    if complexity:
        postings.append(idx.complexity.get(complexity, ()))
    if category:
        postings.append(idx.category.get(category, ()))
    for tag in f.tags:
        postings.append(idx.tags.get(tag, ()))

    if postings:
        postings.sort(key=len)
        ids = set(postings[0])
        for p in postings[1:]:
            if not ids:
                break
            ids.intersection_update(p)
        candidates = [snapshot.get_scenario(sid) for sid in sorted(ids, key=idx.position.__getitem__)]
    else:
        candidates = list(snapshot.scenarios)

    q = norm(query_text)
    if not q:
        return candidates

    cat_titles = {c.id: norm(c.title) for c in snapshot.categories}
    return [
        s for s in candidates
        if q in norm(s.title) or q in cat_titles.get(s.category_id, "")
    ]


def search_categories(
    snapshot: "CatalogSnapshot",
    query_text: str = "",
    filters: Union[SearchFilters, Mapping[str, Any], None] = None,
) -> List[EnhancedCategory]:
    """
    Match categories on title, tags and philosophical approach names.
    Supports the difficulty, philosophy, tags and time_commitment filters.
    Time commitment is an open vocabulary, so an unknown value matches nothing.
    """
    f = SearchFilters.coerce(filters)
    if f.category:
        raise InvalidFilterError("category", f.category)
    if f.complexity:
        raise InvalidFilterError("complexity", f.complexity)
    difficulty = facet_value("difficulty", f.difficulty, Difficulty)
    philosophy = facet_value("philosophy", f.philosophy, Philosophy)

    q = norm(query_text)
    out: List[EnhancedCategory] = []
    for cat in snapshot.categories:
        if difficulty and cat.difficulty.value != difficulty:
            continue
        approaches = [p.value for p in cat.all_approaches]
        if philosophy and philosophy not in approaches:
            continue
        if f.tags and not f.tags <= cat.tags:
            continue
        if f.time_commitment and cat.time_commitment != f.time_commitment:
            continue
        if q:
            fields = [norm(cat.title), *cat.tags, *approaches]
            if not any(q in x for x in fields):
                continue
        out.append(cat)
    return out
