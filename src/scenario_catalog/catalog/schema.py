# SPDX-License-Identifier: MIT
# src/scenario_catalog/catalog/schema.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Tuple

# Raw records stay open-ended until the normalizer has seen them.
RawRecord = Mapping[str, Any]


class _OrderedEnum(str, Enum):
    """String enum; ``values()`` lists member values in declaration order."""

    @classmethod
    def values(cls) -> Tuple[str, ...]:
        return tuple(m.value for m in cls)


class Difficulty(_OrderedEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Complexity(_OrderedEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Philosophy(_OrderedEnum):
    UTILITARIAN = "utilitarian"
    DEONTOLOGICAL = "deontological"
    VIRTUE_ETHICS = "virtue-ethics"
    CARE_ETHICS = "care-ethics"
    EXISTENTIALIST = "existentialist"
    PRAGMATIST = "pragmatist"
    RELATIVIST = "relativist"
    RIGHTS_BASED = "rights-based"


# ---- canonical data shapes ----
@dataclass(frozen=True)
class EnhancedCategory:
    id: str
    title: str
    difficulty: Difficulty
    primary_philosophy: Philosophy
    philosophical_approaches: Tuple[Philosophy, ...]
    tags: FrozenSet[str] = frozenset()
    icon: str = ""
    description: str = ""
    search_keywords: Tuple[str, ...] = ()
    ethical_frameworks: Tuple[str, ...] = ()
    target_audience: Tuple[str, ...] = ("students",)
    prerequisites: Tuple[str, ...] = ()
    time_commitment: str = "medium"
    scenario_ids: Tuple[str, ...] = ()

    @property
    def all_approaches(self) -> Tuple[Philosophy, ...]:
        """Primary philosophy first, then the listed approaches without repeats."""
        out = [self.primary_philosophy]
        out.extend(p for p in self.philosophical_approaches if p not in out)
        return tuple(out)

    def to_raw(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "icon": self.icon,
            "description": self.description,
            "difficulty": self.difficulty.value,
            "scenarios": list(self.scenario_ids),
            "metadata": {
                "primaryPhilosophy": self.primary_philosophy.value,
                "philosophicalApproaches": [p.value for p in self.philosophical_approaches],
                "tags": sorted(self.tags),
                "searchKeywords": list(self.search_keywords),
                "ethicalFrameworks": list(self.ethical_frameworks),
                "targetAudience": list(self.target_audience),
                "prerequisites": list(self.prerequisites),
                "timeCommitment": self.time_commitment,
            },
        }


@dataclass(frozen=True)
class EnhancedScenario:
    id: str
    title: str
    category_id: str
    difficulty: Difficulty
    philosophical_leaning: Philosophy
    estimated_time: int
    complexity: Complexity
    tags: FrozenSet[str] = frozenset()
    description: str = ""
    search_keywords: Tuple[str, ...] = ()
    ethical_dimensions: Tuple[str, ...] = ("autonomy", "beneficence")
    learning_outcomes: Tuple[str, ...] = ()

    def to_raw(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "categoryId": self.category_id,
            "difficulty": self.difficulty.value,
            "metadata": {
                "philosophicalLeaning": self.philosophical_leaning.value,
                "estimatedTime": self.estimated_time,
                "complexity": self.complexity.value,
                "tags": sorted(self.tags),
                "searchKeywords": list(self.search_keywords),
                "ethicalDimensions": list(self.ethical_dimensions),
                "learningOutcomes": list(self.learning_outcomes),
            },
        }


@dataclass(frozen=True)
class NormalizedCatalog:
    categories: Tuple[EnhancedCategory, ...]
    scenarios: Tuple[EnhancedScenario, ...]
    warnings: Tuple[Any, ...] = field(default_factory=tuple)  # ValidationError instances

    @property
    def cid2category(self) -> Dict[str, EnhancedCategory]:
        return {c.id: c for c in self.categories}
