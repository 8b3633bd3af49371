"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from depadvice.cli import _FACTS_TEMPLATE, main

_DAGGER_FACTS = {
    "all_components": [
        {"dependency": {"identifier": "com.google.dagger:dagger", "version": "2.24",
                        "configuration": "implementation"}},
    ],
    "unused_components_with_transitives": [
        {"dependency": {"identifier": "com.google.dagger:dagger", "version": "2.24",
                        "configuration": "implementation"}},
    ],
    "all_declared_deps": [
        {"identifier": "com.google.dagger:dagger", "version": "2.24",
         "configuration": "implementation"},
    ],
    "unused_procs": [
        {"processor": "dagger.internal.codegen.ComponentProcessor",
         "dependency": {"identifier": "com.google.dagger:dagger-compiler", "version": "2.24",
                        "configuration": "annotationProcessor"}},
    ],
}


def _write(tmp_path: Path, name: str, data) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return str(path)


# ── create-facts ──


class TestCreateFacts:
    def test_creates_template(self, tmp_path: Path):
        runner = CliRunner()
        out_file = str(tmp_path / "facts.json")
        result = runner.invoke(main, ["create-facts", "-o", out_file])
        assert result.exit_code == 0
        data = json.loads(Path(out_file).read_text())
        assert data == _FACTS_TEMPLATE

    def test_template_computes(self, tmp_path: Path):
        runner = CliRunner()
        out_file = str(tmp_path / "facts.json")
        runner.invoke(main, ["create-facts", "-o", out_file])
        result = runner.invoke(main, ["compute", out_file])
        assert result.exit_code == 0
        assert json.loads(result.output) == []


# ── compute ──


class TestCompute:
    def test_jvm_dagger_project(self, tmp_path: Path):
        facts = _write(tmp_path, "facts.json", _DAGGER_FACTS)
        result = CliRunner().invoke(main, ["compute", facts])

        assert result.exit_code == 0
        advice = json.loads(result.output)
        assert [(a["kind"], a["identifier"], a["from_configuration"]) for a in advice] == [
            ("remove", "com.google.dagger:dagger", "implementation"),
            ("remove_processor", "com.google.dagger:dagger-compiler", "annotationProcessor"),
        ]
        assert advice[0]["version"] == "2.24"

    def test_config_ignore_list(self, tmp_path: Path):
        facts = _write(tmp_path, "facts.json", _DAGGER_FACTS)
        config = _write(tmp_path, "config.json", {"ignore": {"unused_procs": ["*"]}})
        result = CliRunner().invoke(main, ["compute", facts, "--config", config])

        assert result.exit_code == 0
        assert [a["kind"] for a in json.loads(result.output)] == ["remove"]

    def test_config_facade_groups(self, tmp_path: Path):
        facts = _write(tmp_path, "facts.json", {
            "unused_components_with_transitives": [{
                "dependency": {"identifier": "com.squareup.okio:okio",
                               "configuration": "implementation"},
                "used_transitive_dependencies": [{"identifier": "com.squareup.okio:okio-jvm"}],
            }],
        })
        config = _write(tmp_path, "config.json", {"facade_groups": ["com.squareup.okio"]})

        result = CliRunner().invoke(main, ["compute", facts, "-c", config])

        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_invalid_json(self, tmp_path: Path):
        facts = _write(tmp_path, "facts.json", "not json{{{")
        result = CliRunner().invoke(main, ["compute", facts])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_config(self, tmp_path: Path):
        facts = _write(tmp_path, "facts.json", _DAGGER_FACTS)
        config = _write(tmp_path, "config.json", {
            "logical_dependencies": [{"name": "dup"}, {"name": "dup"}],
        })
        result = CliRunner().invoke(main, ["compute", facts, "-c", config])
        assert result.exit_code == 1
        assert "either at the root or the project level" in result.output

    def test_nonexistent_file(self):
        result = CliRunner().invoke(main, ["compute", "/nonexistent/facts.json"])
        assert result.exit_code != 0
