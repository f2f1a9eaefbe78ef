# SPDX-License-Identifier: MIT
# src/scenario_catalog/service.py
"""
CatalogService: owns the current CatalogSnapshot and publishes reloads.

A reload builds the complete new snapshot first and only then swaps the
reference under the lock, so a reader holding ``service.snapshot`` always has
a fully indexed catalog, old or new.
"""
from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from scenario_catalog.catalog.loader import load_bundled_catalog, load_catalog_file
from scenario_catalog.config import Settings
from scenario_catalog.snapshot import CatalogSnapshot

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, settings: Optional[Settings] = None, snapshot: Optional[CatalogSnapshot] = None):
        self.settings = settings or Settings()
        self._lock = threading.Lock()
        self._snapshot = snapshot if snapshot is not None else CatalogSnapshot.empty()
        self._generation = 0

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        """Bumped once per published snapshot."""
        return self._generation

    def reload(self, raw_categories: Iterable[Any], raw_scenarios: Iterable[Any]) -> CatalogSnapshot:
        """
        Build a snapshot from raw records and publish it.

        Excluded records are logged as warnings. With ``strict_load`` the first
        warning is raised instead and the current snapshot stays in place.
        """
        snap = CatalogSnapshot.build(raw_categories, raw_scenarios, self.settings)

        for w in snap.warnings:
            logger.warning("Excluded from catalog: %s", w)
        if snap.warnings and self.settings.strict_load:
            raise snap.warnings[0]

        with self._lock:
            self._snapshot = snap
            self._generation += 1
            gen = self._generation

        logger.info(
            "Published catalog snapshot #%d: %d categories, %d scenarios, %d excluded",
            gen, len(snap.categories), len(snap.scenarios), len(snap.warnings),
        )
        return snap

    def reload_from_path(self, path: Union[str, Path, None] = None) -> CatalogSnapshot:
        """Reload from a catalog file; falls back to settings, then the bundled catalog."""
        path = path or self.settings.catalog_path
        raw = load_catalog_file(path) if path else load_bundled_catalog()
        return self.reload(raw.categories, raw.scenarios)
