# SPDX-License-Identifier: MIT
# src/scenario_catalog/catalog/loader.py
"""
Catalog file adapter: YAML/JSON on disk -> ordered raw category/scenario records.

Only the file layout is interpreted here. Field values are left untouched for
the normalizer, which is the sole validation boundary.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml

from scenario_catalog.errors import CatalogLoadError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "catalog.yaml"


@dataclass
class RawCatalog:
    categories: List[Dict[str, Any]] = field(default_factory=list)
    scenarios: List[Dict[str, Any]] = field(default_factory=list)


def _iter_category_docs(cats: Any) -> List[Dict[str, Any]]:
    if cats is None:
        return []
    if isinstance(cats, Mapping):
        # id-keyed mapping: {"trolley-problem": {...}, ...}
        out = []
        for cid, body in cats.items():
            rec = dict(body) if isinstance(body, Mapping) else {}
            rec.setdefault("id", cid)
            out.append(rec)
        return out
    if isinstance(cats, list):
        # non-mapping entries pass through for the normalizer to reject
        return [dict(c) if isinstance(c, Mapping) else c for c in cats]
    raise CatalogLoadError(f"'categories' must be a list or mapping, got {type(cats).__name__}")


def parse_catalog_doc(doc: Any) -> RawCatalog:
    """
    Flatten a catalog document. Categories may nest their scenarios; nested
    scenarios get ``categoryId`` filled in and the category keeps only their ids.
    A top-level ``scenarios`` list is appended after the nested ones.
    """
    if doc is None:
        return RawCatalog()
    if not isinstance(doc, Mapping):
        raise CatalogLoadError(f"catalog document must be a mapping, got {type(doc).__name__}")

    out = RawCatalog()
    for cat in _iter_category_docs(doc.get("categories")):
        if isinstance(cat, dict) and isinstance(cat.get("scenarios"), list):
            refs = []
            for sc in cat["scenarios"]:
                if isinstance(sc, Mapping):
                    rec = dict(sc)
                    rec.setdefault("categoryId", cat.get("id"))
                    out.scenarios.append(rec)
                    refs.append(rec.get("id"))
                else:
                    refs.append(sc)
            cat["scenarios"] = refs
        out.categories.append(cat)

    extra = doc.get("scenarios")
    if extra is not None:
        if not isinstance(extra, list):
            raise CatalogLoadError(f"'scenarios' must be a list, got {type(extra).__name__}")
        out.scenarios.extend(dict(s) if isinstance(s, Mapping) else s for s in extra)
    return out


def load_catalog_file(path: Union[str, Path]) -> RawCatalog:
    """Read a ``.yaml``/``.yml`` or ``.json`` catalog file."""
    p = Path(path)
    suffix = p.suffix.lower()
    with open(p, "r", encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            try:
                doc = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CatalogLoadError(f"{p}: invalid YAML: {e}") from e
        elif suffix == ".json":
            try:
                doc = json.load(f)
            except json.JSONDecodeError as e:
                raise CatalogLoadError(f"{p}: invalid JSON: {e}") from e
        else:
            raise CatalogLoadError(f"{p}: unsupported catalog format '{suffix}'")

    raw = parse_catalog_doc(doc)
    logger.info("Loaded %d categories / %d scenarios from %s", len(raw.categories), len(raw.scenarios), p)
    return raw


def load_bundled_catalog() -> RawCatalog:
    """Sample catalog shipped inside the package."""
    ref = resources.files("scenario_catalog").joinpath("data").joinpath(BUNDLED_CATALOG)
    with resources.as_file(ref) as p:
        return load_catalog_file(p)
