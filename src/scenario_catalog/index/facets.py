# SPDX-License-Identifier: MIT
# src/scenario_catalog/index/facets.py
"""
Inverted indices over the normalized scenario list.

Every index maps a facet value to a tuple of scenario ids in catalog order, so
anything read back out of an index is already deterministically ordered.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from scenario_catalog.catalog.schema import EnhancedCategory, EnhancedScenario

Index = Dict[str, Tuple[str, ...]]


def _build(scenarios: Iterable[EnhancedScenario], keys_of: Callable[[EnhancedScenario], Iterable[str]]) -> Index:
    bucket: Dict[str, List[str]] = {}
    for sc in scenarios:
        for key in keys_of(sc):
            ids = bucket.setdefault(key, [])
            # keys_of may yield the same key twice for one scenario
            if not ids or ids[-1] != sc.id:
                ids.append(sc.id)
    return {k: tuple(v) for k, v in bucket.items()}


def build_tag_index(scenarios: Sequence[EnhancedScenario]) -> Index:
    return _build(scenarios, lambda s: s.tags)


def build_tag_counts(scenarios: Sequence[EnhancedScenario]) -> Dict[str, int]:
    """Number of scenarios carrying each tag."""
    counts: Dict[str, int] = {}
    for sc in scenarios:
        for tag in sc.tags:
            counts[tag] = counts.get(tag, 0) + 1
    return counts


def build_difficulty_index(scenarios: Sequence[EnhancedScenario]) -> Index:
    return _build(scenarios, lambda s: (s.difficulty.value,))


def build_complexity_index(scenarios: Sequence[EnhancedScenario]) -> Index:
    return _build(scenarios, lambda s: (s.complexity.value,))


def build_category_index(scenarios: Sequence[EnhancedScenario]) -> Index:
    return _build(scenarios, lambda s: (s.category_id,))


def build_philosophy_index(
    scenarios: Sequence[EnhancedScenario],
    categories: Optional[Mapping[str, EnhancedCategory]] = None,
) -> Index:
    """
    A scenario is listed under its own leaning and, when its category is known,
    under the category's primary philosophy and each listed approach.
    """
    categories = categories or {}

    def keys(sc: EnhancedScenario) -> List[str]:
        out = [sc.philosophical_leaning.value]
        cat = categories.get(sc.category_id)
        if cat is not None:
            out.extend(p.value for p in cat.all_approaches if p.value not in out)
        return out

    return _build(scenarios, keys)


@dataclass(frozen=True)
class FacetIndex:
    """Read-only maps; a snapshot shares one FacetIndex between all readers."""
    tags: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    tag_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    difficulty: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    philosophy: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    complexity: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    category: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    # scenario id -> catalog position
    position: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))


def build_facet_index(
    categories: Sequence[EnhancedCategory],
    scenarios: Sequence[EnhancedScenario],
) -> FacetIndex:
    cid2cat = {c.id: c for c in categories}
    return FacetIndex(
        tags=MappingProxyType(build_tag_index(scenarios)),
        tag_counts=MappingProxyType(build_tag_counts(scenarios)),
        difficulty=MappingProxyType(build_difficulty_index(scenarios)),
        philosophy=MappingProxyType(build_philosophy_index(scenarios, cid2cat)),
        complexity=MappingProxyType(build_complexity_index(scenarios)),
        category=MappingProxyType(build_category_index(scenarios)),
        position=MappingProxyType({s.id: i for i, s in enumerate(scenarios)}),
    )
