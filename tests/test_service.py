import logging
import threading

import pytest

from scenario_catalog.config import Settings
from scenario_catalog.errors import ValidationError
from scenario_catalog.service import CatalogService


def test_service_starts_with_empty_snapshot():
    svc = CatalogService(Settings())
    assert svc.snapshot.search("", {}) == []
    assert svc.generation == 0


def test_reload_publishes_new_snapshot(raw_categories, raw_scenarios):
    svc = CatalogService(Settings())
    before = svc.snapshot
    snap = svc.reload(raw_categories, raw_scenarios)
    assert svc.snapshot is snap
    assert svc.snapshot is not before
    assert svc.generation == 1
    # the old snapshot is untouched
    assert before.search("", {}) == []


def test_reload_logs_excluded_records(raw_categories, raw_scenarios, caplog):
    raw_scenarios.append({"id": "bad", "categoryId": "ethics-1", "difficulty": "expert"})
    svc = CatalogService(Settings())
    with caplog.at_level(logging.WARNING, logger="scenario_catalog.service"):
        snap = svc.reload(raw_categories, raw_scenarios)
    assert len(snap.warnings) == 1
    assert any("bad" in r.getMessage() for r in caplog.records)


def test_strict_load_keeps_previous_snapshot(raw_categories, raw_scenarios):
    svc = CatalogService(Settings.from_overrides(strict_load=True))
    good = svc.reload(raw_categories, raw_scenarios)
    raw_scenarios.append({"id": "orphan", "categoryId": "gone"})
    with pytest.raises(ValidationError):
        svc.reload(raw_categories, raw_scenarios)
    assert svc.snapshot is good
    assert svc.generation == 1


def test_settings_drive_snapshot_build(raw_categories, raw_scenarios):
    raw_scenarios[0]["metadata"].pop("estimatedTime")
    svc = CatalogService(Settings.from_overrides(default_estimated_time=30, top_tags_limit=1))
    snap = svc.reload(raw_categories, raw_scenarios)
    assert snap.get_scenario("s1").estimated_time == 30
    assert snap.compute_stats().average_estimated_time == 25
    assert len(snap.compute_stats().top_tags) == 1


def test_reload_from_path_uses_bundled_catalog_by_default():
    svc = CatalogService(Settings.from_overrides(catalog_path=""))
    snap = svc.reload_from_path()
    assert snap.compute_stats().total_categories == 4


def test_readers_always_see_a_complete_snapshot(raw_categories, raw_scenarios):
    svc = CatalogService(Settings())
    svc.reload(raw_categories, raw_scenarios)
    seen = set()
    errors = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            snap = svc.snapshot
            n = len(snap.search("", {}))
            if n != snap.compute_stats().total_scenarios:
                errors.append(n)
            seen.add(n)

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for i in range(20):
        if i % 2:
            svc.reload(raw_categories, raw_scenarios)
        else:
            svc.reload(raw_categories, raw_scenarios[:1])
    stop.set()
    for t in threads:
        t.join()

    assert errors == []
    assert seen <= {1, 2}


@pytest.mark.parametrize("minutes", [0, -1])
def test_settings_reject_non_positive_default_time(minutes):
    with pytest.raises(ValueError):
        Settings.from_overrides(default_estimated_time=minutes)
