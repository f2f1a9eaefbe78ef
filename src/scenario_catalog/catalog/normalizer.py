# SPDX-License-Identifier: MIT
# src/scenario_catalog/catalog/normalizer.py
"""
Raw catalog records -> EnhancedCategory / EnhancedScenario.

This is the only place that interprets raw record shapes. Metadata may sit
under a nested ``metadata`` mapping or flat on the record; nested wins.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from scenario_catalog.catalog.schema import (
    Complexity, Difficulty, EnhancedCategory, EnhancedScenario,
    NormalizedCatalog, Philosophy, RawRecord,
)
from scenario_catalog.config import DEFAULT_ESTIMATED_TIME
from scenario_catalog.errors import ValidationError
from scenario_catalog.utils.text import as_str_list

E = TypeVar("E", Difficulty, Complexity, Philosophy)


@dataclass(frozen=True)
class NormalizerDefaults:
    estimated_time: int = DEFAULT_ESTIMATED_TIME
    philosophy: Philosophy = Philosophy.UTILITARIAN
    complexity: Complexity = Complexity.MODERATE
    category_difficulty: Difficulty = Difficulty.INTERMEDIATE
    time_commitment: str = "medium"
    target_audience: Tuple[str, ...] = ("students",)
    ethical_dimensions: Tuple[str, ...] = ("autonomy", "beneficence")

    def __post_init__(self):
        if isinstance(self.estimated_time, bool) or not isinstance(self.estimated_time, int) \
                or self.estimated_time <= 0:
            raise ValueError(f"estimated_time default must be a positive int, got {self.estimated_time!r}")


_DEFAULTS = NormalizerDefaults()


# ---------- field helpers ----------

def _meta(raw: RawRecord, key: str) -> Any:
    md = raw.get("metadata")
    if isinstance(md, Mapping) and md.get(key) is not None:
        return md[key]
    return raw.get(key)


def as_id(val: Any) -> Optional[str]:
    """Ids may be written as numbers in YAML; anything scalar becomes a trimmed str."""
    if val is None or isinstance(val, (bool, Mapping, list, tuple, set, frozenset)):
        return None
    return str(val).strip() or None


def _record_id(raw: Any, kind: str) -> str:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"expected a mapping, got {type(raw).__name__}", record_kind=kind)
    rid = as_id(raw.get("id"))
    if rid is None:
        raise ValidationError("missing id", record_kind=kind, field="id")
    return rid


def _parse_enum(enum_cls: Type[E], value: Any, default: E, *, kind: str, rid: str, field: str) -> E:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError(
        f"{value!r} is not one of {', '.join(enum_cls.values())}",
        record_kind=kind, record_id=rid, field=field,
    )


def normalize_tags(val: Any) -> frozenset:
    """Trim, lowercase, dedupe. A bare string counts as a single tag."""
    return frozenset(t.strip().lower() for t in as_str_list(val) if t.strip())


def coerce_minutes(val: Any, default: int = DEFAULT_ESTIMATED_TIME) -> int:
    """Positive whole minutes; anything else falls back to ``default``."""
    if val is None or isinstance(val, bool):
        return default
    try:
        n = float(val)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(n):
        return default
    n = int(round(n))
    return n if n > 0 else default


def _str_tuple(val: Any, default: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    """Trimmed strings in input order, repeats dropped. Only a missing value takes ``default``."""
    if val is None:
        return default
    out: List[str] = []
    for s in as_str_list(val):
        s = s.strip()
        if s and s not in out:
            out.append(s)
    return tuple(out)


def _scenario_refs(val: Any) -> List[str]:
    out: List[str] = []
    for item in val if isinstance(val, (list, tuple)) else []:
        sid = as_id(item.get("id") if isinstance(item, Mapping) else item)
        if sid is not None and sid not in out:
            out.append(sid)
    return out


# ---------- record normalizers ----------

def normalize_category(
    raw: Union[RawRecord, EnhancedCategory],
    *,
    defaults: NormalizerDefaults = _DEFAULTS,
) -> EnhancedCategory:
    if isinstance(raw, EnhancedCategory):
        return raw
    rid = _record_id(raw, "category")

    def enum(cls, value, default, field):
        return _parse_enum(cls, value, default, kind="category", rid=rid, field=field)

    primary = enum(Philosophy, _meta(raw, "primaryPhilosophy"), defaults.philosophy, "primaryPhilosophy")
    approaches: List[Philosophy] = []
    for a in as_str_list(_meta(raw, "philosophicalApproaches")):
        p = enum(Philosophy, a, None, "philosophicalApproaches")
        if p is not None and p not in approaches:
            approaches.append(p)

    return EnhancedCategory(
        id=rid,
        title=str(raw.get("title") or rid),
        difficulty=enum(Difficulty, raw.get("difficulty"), defaults.category_difficulty, "difficulty"),
        primary_philosophy=primary,
        philosophical_approaches=tuple(approaches) or (primary,),
        tags=normalize_tags(_meta(raw, "tags")),
        icon=str(raw.get("icon") or ""),
        description=str(raw.get("description") or ""),
        search_keywords=_str_tuple(_meta(raw, "searchKeywords")),
        ethical_frameworks=_str_tuple(_meta(raw, "ethicalFrameworks")),
        target_audience=_str_tuple(_meta(raw, "targetAudience"), defaults.target_audience),
        prerequisites=_str_tuple(_meta(raw, "prerequisites")),
        time_commitment=(as_id(_meta(raw, "timeCommitment")) or defaults.time_commitment).lower(),
        scenario_ids=tuple(_scenario_refs(raw.get("scenarios"))),
    )


def normalize_scenario(
    raw: Union[RawRecord, EnhancedScenario],
    *,
    category: Optional[EnhancedCategory] = None,
    defaults: NormalizerDefaults = _DEFAULTS,
) -> EnhancedScenario:
    """
    Normalize one scenario. ``category`` is the owning category when known; it
    supplies ``categoryId`` and the fallback difficulty when the raw record omits them.
    """
    if isinstance(raw, EnhancedScenario):
        return raw
    rid = _record_id(raw, "scenario")

    def enum(cls, value, default, field):
        return _parse_enum(cls, value, default, kind="scenario", rid=rid, field=field)

    cid = as_id(raw.get("categoryId")) or (category.id if category is not None else None)
    if cid is None:
        raise ValidationError("missing categoryId", record_kind="scenario", record_id=rid, field="categoryId")

    fallback_difficulty = category.difficulty if category is not None else defaults.category_difficulty
    return EnhancedScenario(
        id=rid,
        title=str(raw.get("title") or rid),
        category_id=cid,
        difficulty=enum(Difficulty, raw.get("difficulty"), fallback_difficulty, "difficulty"),
        philosophical_leaning=enum(
            Philosophy, _meta(raw, "philosophicalLeaning"), defaults.philosophy, "philosophicalLeaning"
        ),
        estimated_time=coerce_minutes(_meta(raw, "estimatedTime"), defaults.estimated_time),
        complexity=enum(Complexity, _meta(raw, "complexity"), defaults.complexity, "complexity"),
        tags=normalize_tags(_meta(raw, "tags")),
        description=str(raw.get("description") or ""),
        search_keywords=_str_tuple(_meta(raw, "searchKeywords")),
        ethical_dimensions=_str_tuple(_meta(raw, "ethicalDimensions"), defaults.ethical_dimensions),
        learning_outcomes=_str_tuple(_meta(raw, "learningOutcomes")),
    )


# ---------- whole catalog ----------

def normalize_catalog(
    raw_categories: Iterable[Any],
    raw_scenarios: Iterable[Any],
    *,
    defaults: NormalizerDefaults = _DEFAULTS,
) -> NormalizedCatalog:
    """
    Normalize a full catalog. Never raises for bad records: each problem is
    collected as a ValidationError in ``warnings`` and the record is dropped.
    """
    warnings: List[ValidationError] = []

    cats: Dict[str, EnhancedCategory] = {}
    for raw in raw_categories:
        try:
            cat = normalize_category(raw, defaults=defaults)
        except ValidationError as e:
            warnings.append(e)
            continue
        if cat.id in cats:
            warnings.append(ValidationError("duplicate id", record_kind="category", record_id=cat.id, field="id"))
            continue
        cats[cat.id] = cat

    scenarios: List[EnhancedScenario] = []
    seen = set()
    for raw in raw_scenarios:
        try:
            ref = as_id(raw.get("categoryId") if isinstance(raw, Mapping) else getattr(raw, "category_id", None))
            owner = cats.get(ref) if ref is not None else None
            sc = normalize_scenario(raw, category=owner, defaults=defaults)
            if sc.category_id not in cats:
                raise ValidationError(
                    f"unknown category '{sc.category_id}'",
                    record_kind="scenario", record_id=sc.id, field="categoryId",
                )
            if sc.id in seen:
                raise ValidationError("duplicate id", record_kind="scenario", record_id=sc.id, field="id")
        except ValidationError as e:
            warnings.append(e)
            continue
        seen.add(sc.id)
        scenarios.append(sc)

    by_cat: Dict[str, List[str]] = {cid: [] for cid in cats}
    for sc in scenarios:
        by_cat[sc.category_id].append(sc.id)
    categories = tuple(replace(c, scenario_ids=tuple(by_cat[c.id])) for c in cats.values())

    return NormalizedCatalog(categories=categories, scenarios=tuple(scenarios), warnings=tuple(warnings))
