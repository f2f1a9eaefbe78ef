import json

import pytest

from scenario_catalog import cli


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "categories": [
            {"id": "ethics-1", "title": "Everyday Ethics", "difficulty": "beginner",
             "scenarios": [
                 {"id": "s1", "title": "Hiring Filter", "difficulty": "beginner",
                  "tags": ["bias", "fairness"], "estimatedTime": 10},
                 {"id": "s2", "title": "Loan Approval", "difficulty": "advanced",
                  "tags": ["fairness"], "estimatedTime": 20},
             ]},
        ],
    }), encoding="utf-8")
    return str(path)


def run(capsys, *argv):
    code = cli.main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_search_command(capsys, catalog_file):
    code, out, _ = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR",
                       "search", "--tag", "fairness", "--difficulty", "beginner")
    assert code == 0
    assert [s["id"] for s in json.loads(out)] == ["s1"]


def test_invalid_filter_exits_2(capsys, catalog_file):
    code, out, err = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR",
                         "search", "--difficulty", "expert")
    assert code == 2
    assert out == ""
    assert "expert" in err


def test_stats_and_tags_commands(capsys, catalog_file):
    code, out, _ = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR", "stats")
    assert code == 0
    assert json.loads(out)["average_estimated_time"] == 15.0

    code, out, _ = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR", "tags", "--limit", "1")
    assert json.loads(out) == [{"tag": "fairness", "count": 2}]


def test_show_command(capsys, catalog_file):
    code, out, _ = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR", "show", "ethics-1")
    assert code == 0
    assert json.loads(out)["scenarios"] == ["s1", "s2"]

    code, _, err = run(capsys, "--catalog", catalog_file, "--log-level", "ERROR", "show", "nope")
    assert code == 1
    assert "nope" in err


def test_missing_catalog_file_fails_cleanly(capsys, tmp_path):
    code, _, _ = run(capsys, "--catalog", str(tmp_path / "missing.yaml"), "--log-level", "CRITICAL", "stats")
    assert code == 1


def test_no_command_prints_help(capsys):
    code, out, _ = run(capsys)
    assert code == 0
    assert "usage" in out.lower()


def test_categories_command_time_commitment(capsys, tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "categories:\n"
        "  - {id: quick, title: Quick, timeCommitment: short}\n"
        "  - {id: deep, title: Deep, timeCommitment: long}\n",
        encoding="utf-8",
    )
    code, out, _ = run(capsys, "--catalog", str(path), "--log-level", "ERROR",
                       "categories", "--time-commitment", "LONG")
    assert code == 0
    assert [c["id"] for c in json.loads(out)] == ["deep"]
