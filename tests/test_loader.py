import json

import pytest

from scenario_catalog.catalog.loader import load_bundled_catalog, load_catalog_file, parse_catalog_doc
from scenario_catalog.errors import CatalogLoadError
from scenario_catalog.snapshot import CatalogSnapshot


def test_nested_scenarios_are_flattened():
    doc = {
        "categories": [
            {"id": "c1", "title": "One", "scenarios": [{"id": "a", "title": "A"}, {"id": "b", "title": "B"}]},
        ],
        "scenarios": [{"id": "x", "title": "X", "categoryId": "c1"}],
    }
    raw = parse_catalog_doc(doc)
    assert raw.categories[0]["scenarios"] == ["a", "b"]
    assert [s["id"] for s in raw.scenarios] == ["a", "b", "x"]
    assert all(s["categoryId"] == "c1" for s in raw.scenarios)


def test_id_keyed_category_mapping():
    raw = parse_catalog_doc({"categories": {"c1": {"title": "One"}, "c2": {"title": "Two"}}})
    assert [c["id"] for c in raw.categories] == ["c1", "c2"]


def test_parse_does_not_mutate_input():
    doc = {"categories": [{"id": "c1", "scenarios": [{"id": "a"}]}]}
    parse_catalog_doc(doc)
    assert doc["categories"][0]["scenarios"] == [{"id": "a"}]


@pytest.mark.parametrize("doc", [["not", "a", "mapping"], {"categories": 3}, {"scenarios": {"a": 1}}])
def test_malformed_documents(doc):
    with pytest.raises(CatalogLoadError):
        parse_catalog_doc(doc)


def test_empty_document_is_an_empty_catalog():
    raw = parse_catalog_doc(None)
    assert raw.categories == [] and raw.scenarios == []


def test_load_json_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "categories": [{"id": "c1", "title": "One", "difficulty": "beginner",
                        "scenarios": [{"id": "a", "title": "A", "estimatedTime": 4}]}],
    }), encoding="utf-8")
    raw = load_catalog_file(path)
    snap = CatalogSnapshot.build(raw.categories, raw.scenarios)
    assert [s.id for s in snap.scenarios] == ["a"]
    assert snap.get_scenario("a").difficulty.value == "beginner"


def test_load_yaml_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "categories:\n"
        "  - id: c1\n"
        "    title: One\n"
        "    scenarios:\n"
        "      - id: a\n"
        "        title: A\n"
        "        tags: [X, y]\n",
        encoding="utf-8",
    )
    raw = load_catalog_file(path)
    assert raw.scenarios[0]["tags"] == ["X", "y"]


def test_bad_files(tmp_path):
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("categories: [unclosed", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        load_catalog_file(bad_yaml)

    other = tmp_path / "catalog.toml"
    other.write_text("", encoding="utf-8")
    with pytest.raises(CatalogLoadError):
        load_catalog_file(other)

    with pytest.raises(FileNotFoundError):
        load_catalog_file(tmp_path / "missing.yaml")


def test_bundled_catalog_builds_cleanly():
    raw = load_bundled_catalog()
    snap = CatalogSnapshot.build(raw.categories, raw.scenarios)
    assert snap.warnings == ()
    stats = snap.compute_stats()
    assert stats.total_categories == 4
    assert stats.total_scenarios == 11
    # one scenario omits estimatedTime and gets the 5 minute default
    assert snap.get_scenario("workplace-emotion-detection").estimated_time == 5
    assert stats.average_estimated_time == 6.5
    assert [s.id for s in snap.search("", {"tags": ["fairness", "bias"]})] == [
        "parole-denial-algorithm", "college-admission-mystery",
    ]


def test_nested_scenarios_under_numeric_category_id():
    raw = parse_catalog_doc({"categories": [{"id": 101, "scenarios": [{"id": "a"}, {"id": "b"}]}]})
    snap = CatalogSnapshot.build(raw.categories, raw.scenarios)
    assert snap.warnings == ()
    assert [s.id for s in snap.category_scenarios("101")] == ["a", "b"]
    assert [s.id for s in snap.search("", {"category": 101})] == ["a", "b"]


def test_bundled_catalog_carries_learning_metadata():
    raw = load_bundled_catalog()
    snap = CatalogSnapshot.build(raw.categories, raw.scenarios)
    assert snap.get_category("moral-luck").prerequisites == ("trolley-problem",)
    assert [c.id for c in snap.search_categories("", {"time_commitment": "long"})] == ["moral-luck"]
