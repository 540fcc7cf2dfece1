import json

from click.testing import CliRunner

from svis.__main__ import cli


def _dist(tmp_path, write_bundle, simple_map):
    dist = tmp_path / "dist"
    write_bundle("app.js", "var x=1;\nfoo();", simple_map, directory=dist)
    (dist / "broken.js").write_text("console.log(1);\n", encoding="utf-8")
    return dist


def test_analyze_prints_reports_then_errors(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    result = CliRunner().invoke(cli, ["analyze", str(dist)])

    assert result.exit_code == 0
    assert "Size contribution per file" in result.output
    assert "- src/b.js, size 10 B" in result.output
    assert "Error when parsing file" in result.output
    assert result.output.index("Size contribution") < result.output.index("Error when parsing")
    assert "Files checked: 2" in result.output
    assert "Files failed: 1" in result.output


def test_analyze_json(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    result = CliRunner().invoke(cli, ["analyze", str(dist), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"] == {"files_checked": 2, "files_failed": 1, "cancelled": 0}
    assert [f["ok"] for f in payload["files"]] == [True, False]
    info = payload["files"][0]["info"]
    assert info["info_by_file"] == [{"source": "../src/a.js", "bytes": 4}, {"source": "../src/b.js", "bytes": 10}]


def test_analyze_parallel_thread_pool(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    result = CliRunner().invoke(
        cli, ["analyze", str(dist), "--parallel", "--workers", "2", "--executor", "thread", "--json"]
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"]["files_checked"] == 2
    assert sorted(f["file"].rsplit("/", 1)[-1] for f in payload["files"]) == ["app.js", "broken.js"]


def test_analyze_tree(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    result = CliRunner().invoke(cli, ["analyze", str(dist), "--tree"])

    assert result.exit_code == 0
    assert "▼ src" in result.output


def test_analyze_missing_path(tmp_path):
    result = CliRunner().invoke(cli, ["analyze", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_analyze_rejects_bad_worker_count(tmp_path):
    result = CliRunner().invoke(cli, ["analyze", str(tmp_path), "--parallel", "--workers", "0"])

    assert result.exit_code != 0


def test_discover(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    result = CliRunner().invoke(cli, ["discover", str(dist)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [str(dist / "app.js"), str(dist / "broken.js")]


def test_find(tmp_path, write_bundle, simple_map):
    dist = _dist(tmp_path, write_bundle, simple_map)

    found = CliRunner().invoke(cli, ["find", str(dist), "b.js"])
    missing = CliRunner().invoke(cli, ["find", str(dist), "react"])

    assert found.exit_code == 0
    assert found.stdout.strip() == f"{dist / 'app.js'}: ../src/b.js"
    assert missing.exit_code == 1
    assert "No generated file contains a source matching 'react'." in missing.output
