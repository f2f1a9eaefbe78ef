# SPDX-License-Identifier: MIT
# src/scenario_catalog/stats/aggregator.py
"""
Corpus-wide statistics over a normalized catalog.

Computed once per snapshot build and cached on the snapshot; nothing here
holds state between calls.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from scenario_catalog.catalog.schema import Complexity, Difficulty, EnhancedCategory, EnhancedScenario
from scenario_catalog.index.facets import build_tag_counts


@dataclass(frozen=True)
class TagCount:
    tag: str
    count: int


@dataclass(frozen=True)
class CatalogStats:
    total_categories: int
    total_scenarios: int
    average_estimated_time: float          # 0.0 for an empty catalog
    # read-only views; the cached stats are shared by every reader of a snapshot
    difficulty_breakdown: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    philosophy_breakdown: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    complexity_breakdown: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    top_tags: Tuple[TagCount, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-ready copy."""
        return {
            "total_categories": self.total_categories,
            "total_scenarios": self.total_scenarios,
            "average_estimated_time": self.average_estimated_time,
            "difficulty_breakdown": dict(self.difficulty_breakdown),
            "philosophy_breakdown": dict(self.philosophy_breakdown),
            "complexity_breakdown": dict(self.complexity_breakdown),
            "top_tags": [asdict(t) for t in self.top_tags],
        }


def popular_tags(tag_counts: Mapping[str, int], limit: Optional[int] = None) -> List[TagCount]:
    """Tags by usage, count descending then tag ascending. ``limit=None`` keeps all."""
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    ranked = sorted(tag_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    if limit is not None:
        ranked = ranked[:limit]
    return [TagCount(tag=t, count=int(c)) for t, c in ranked]


def _ordered_counts(s: pd.Series, order: Sequence[str]) -> Dict[str, int]:
    vc = s.value_counts()
    return {k: int(vc[k]) for k in order if int(vc.get(k, 0)) > 0}


def compute_stats(
    categories: Sequence[EnhancedCategory],
    scenarios: Sequence[EnhancedScenario],
    *,
    tag_counts: Optional[Mapping[str, int]] = None,
    precision: int = 1,
    top_n: int = 10,
) -> CatalogStats:
    df = pd.DataFrame({
        "difficulty": [s.difficulty.value for s in scenarios],
        "philosophy": [s.philosophical_leaning.value for s in scenarios],
        "complexity": [s.complexity.value for s in scenarios],
        "estimated_time": pd.Series([s.estimated_time for s in scenarios], dtype="int64"),
    })

    avg = 0.0 if df.empty else round(float(df["estimated_time"].mean()), precision)

    phil = df["philosophy"].value_counts()
    phil_breakdown = {
        k: int(v) for k, v in sorted(phil.items(), key=lambda kv: (-int(kv[1]), kv[0])) if int(v) > 0
    }

    if tag_counts is None:
        tag_counts = build_tag_counts(scenarios)

    return CatalogStats(
        total_categories=len(categories),
        total_scenarios=len(scenarios),
        average_estimated_time=avg,
        difficulty_breakdown=MappingProxyType(_ordered_counts(df["difficulty"], Difficulty.values())),
        philosophy_breakdown=MappingProxyType(phil_breakdown),
        complexity_breakdown=MappingProxyType(_ordered_counts(df["complexity"], Complexity.values())),
        top_tags=tuple(popular_tags(tag_counts, top_n)),
    )
