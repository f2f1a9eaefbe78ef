# SPDX-License-Identifier: MIT
# src/scenario_catalog/snapshot.py
"""
CatalogSnapshot: an immutable, fully indexed view of one catalog load.

Building a snapshot runs the normalizer, builds every index and computes the
stats once. After that every method is a pure read, so one snapshot can be
shared by any number of readers. A new catalog means a new snapshot.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from scenario_catalog.catalog.normalizer import NormalizerDefaults, normalize_catalog
from scenario_catalog.catalog.schema import Difficulty, EnhancedCategory, EnhancedScenario
from scenario_catalog.config import Settings
from scenario_catalog.errors import InvalidFilterError, ValidationError
from scenario_catalog.index.facets import FacetIndex, build_facet_index
from scenario_catalog.search.engine import SearchFilters, search, search_categories, facet_value
from scenario_catalog.stats.aggregator import CatalogStats, TagCount, compute_stats, popular_tags


@dataclass(frozen=True)
class CategoryProgress:
    completed: int
    total: int
    percentage: int


@dataclass(frozen=True)
class CatalogSnapshot:
    categories: Tuple[EnhancedCategory, ...]
    scenarios: Tuple[EnhancedScenario, ...]
    index: FacetIndex
    stats: CatalogStats
    warnings: Tuple[ValidationError, ...] = ()
    _categories_by_id: Mapping[str, EnhancedCategory] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False)
    _scenarios_by_id: Mapping[str, EnhancedScenario] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False)

    @classmethod
    def build(
        cls,
        raw_categories: Iterable[Any],
        raw_scenarios: Iterable[Any],
        settings: Optional[Settings] = None,
    ) -> "CatalogSnapshot":
        settings = settings or Settings()
        normalized = normalize_catalog(
            raw_categories,
            raw_scenarios,
            defaults=NormalizerDefaults(estimated_time=settings.default_estimated_time),
        )
        index = build_facet_index(normalized.categories, normalized.scenarios)
        stats = compute_stats(
            normalized.categories,
            normalized.scenarios,
            tag_counts=index.tag_counts,
            precision=settings.stats_precision,
            top_n=settings.top_tags_limit,
        )
        return cls(
            categories=normalized.categories,
            scenarios=normalized.scenarios,
            index=index,
            stats=stats,
            warnings=normalized.warnings,
            _categories_by_id=MappingProxyType({c.id: c for c in normalized.categories}),
            _scenarios_by_id=MappingProxyType({s.id: s for s in normalized.scenarios}),
        )

    @classmethod
    def empty(cls) -> "CatalogSnapshot":
        return cls.build((), ())

    # ---------- queries ----------

    def search(
        self,
        query_text: str = "",
        filters: Union[SearchFilters, Mapping[str, Any], None] = None,
    ) -> List[EnhancedScenario]:
        return search(self, query_text, filters)

    def search_categories(
        self,
        query_text: str = "",
        filters: Union[SearchFilters, Mapping[str, Any], None] = None,
    ) -> List[EnhancedCategory]:
        return search_categories(self, query_text, filters)

    def get_popular_tags(self, limit: Optional[int] = None) -> List[TagCount]:
        return popular_tags(self.index.tag_counts, limit)

    def compute_stats(self) -> CatalogStats:
        """Stats were computed at build time; this just hands back the cached value."""
        return self.stats

    # ---------- lookups ----------

    def get_category(self, category_id: str) -> Optional[EnhancedCategory]:
        return self._categories_by_id.get(category_id)

    def get_scenario(self, scenario_id: str) -> Optional[EnhancedScenario]:
        return self._scenarios_by_id.get(scenario_id)

    def category_of(self, scenario: EnhancedScenario) -> Optional[EnhancedCategory]:
        return self.get_category(scenario.category_id)

    def category_scenarios(self, category_id: str) -> List[EnhancedScenario]:
        cat = self.get_category(category_id)
        if cat is None:
            return []
        return [self._scenarios_by_id[sid] for sid in cat.scenario_ids]

    def categories_by_difficulty(self, difficulty: Union[str, Difficulty]) -> List[EnhancedCategory]:
        value = facet_value("difficulty", difficulty, Difficulty)
        if value is None:
            raise InvalidFilterError("difficulty", difficulty, Difficulty.values())
        return [c for c in self.categories if c.difficulty.value == value]

    def categories_by_tag(self, tag: str) -> List[EnhancedCategory]:
        t = (tag or "").strip().lower()
        return [c for c in self.categories if t in c.tags]

    def category_progress(
        self,
        category_id: str,
        user_progress: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> CategoryProgress:
        """
        Completion for one category given ``{category_id: {scenario_id: done}}``.
        Only truthy entries for scenarios that are actually indexed count.
        """
        cat = self.get_category(category_id)
        if cat is None:
            return CategoryProgress(completed=0, total=0, percentage=0)
        done = (user_progress or {}).get(category_id) or {}
        completed = sum(1 for sid in cat.scenario_ids if done.get(sid))
        total = len(cat.scenario_ids)
        pct = int(completed * 100 / total + 0.5) if total else 0
        return CategoryProgress(completed=completed, total=total, percentage=pct)
