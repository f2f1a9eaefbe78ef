# Ensure `src/` is on sys.path so tests can import `scenario_catalog` without requiring editable install
import os
import sys

import pytest

HERE = os.path.dirname(__file__)
SRC = os.path.abspath(os.path.join(HERE, "..", "src"))
if os.path.isdir(SRC) and SRC not in sys.path:
    sys.path.insert(0, SRC)

from scenario_catalog.snapshot import CatalogSnapshot  # noqa: E402


@pytest.fixture
def raw_categories():
    return [
        {
            "id": "ethics-1",
            "title": "Everyday Ethics",
            "difficulty": "beginner",
            "metadata": {
                "primaryPhilosophy": "utilitarian",
                "philosophicalApproaches": ["utilitarian", "care-ethics"],
                "tags": ["Fairness", " everyday "],
            },
        },
        {
            "id": "machines",
            "title": "Machine Minds",
            "difficulty": "advanced",
            "primaryPhilosophy": "deontological",
            "tags": ["ai"],
        },
    ]


@pytest.fixture
def raw_scenarios():
    return [
        {
            "id": "s1",
            "title": "Hiring Filter",
            "categoryId": "ethics-1",
            "difficulty": "beginner",
            "metadata": {"tags": ["bias", "fairness"], "estimatedTime": 10, "philosophicalLeaning": "utilitarian"},
        },
        {
            "id": "s2",
            "title": "Loan Approval",
            "categoryId": "ethics-1",
            "difficulty": "advanced",
            "metadata": {"tags": ["FAIRNESS"], "estimatedTime": 20, "complexity": "high"},
        },
    ]


@pytest.fixture
def snapshot(raw_categories, raw_scenarios):
    return CatalogSnapshot.build(raw_categories, raw_scenarios)


@pytest.fixture
def catalog_factory():
    """Build a snapshot from compact (id, category, difficulty, tags) tuples."""
    def make(rows, categories=("c1", "c2")):
        cats = [{"id": c, "title": f"Category {c}"} for c in categories]
        scs = [
            {"id": sid, "title": f"Scenario {sid}", "categoryId": cid, "difficulty": diff, "tags": list(tags)}
            for sid, cid, diff, tags in rows
        ]
        return CatalogSnapshot.build(cats, scs)
    return make
