"""Tests for package.json conventions (clismith.scaffolder.conventions)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from clismith.scaffolder.conventions import dump_manifest, fix_manifest_file, sort_manifest

pytestmark = pytest.mark.unit


class TestSortManifest:
    def test_known_keys_first_then_alphabetical(self):
        manifest = {
            "zeta": 1,
            "scripts": {},
            "alpha": 2,
            "version": "1.0.0",
            "name": "x",
        }
        assert list(sort_manifest(manifest)) == ["name", "version", "scripts", "alpha", "zeta"]

    def test_sub_sections_sorted(self):
        manifest = {
            "dependencies": {"b": "1", "a": "1"},
            "scripts": {"test": "mocha", "build": "tsc"},
            "keywords": ["oclif", "cli"],
        }
        result = sort_manifest(manifest)
        assert list(result["dependencies"]) == ["a", "b"]
        assert list(result["scripts"]) == ["build", "test"]
        assert result["keywords"] == ["cli", "oclif"]

    def test_other_nested_values_untouched(self):
        manifest = {"oclif": {"topics": {"z": {}, "a": {}}}}
        assert list(sort_manifest(manifest)["oclif"]["topics"]) == ["z", "a"]

    def test_mixed_keyword_list_left_alone(self):
        assert sort_manifest({"keywords": ["b", 1, "a"]})["keywords"] == ["b", 1, "a"]


class TestDumpManifest:
    def test_two_space_indent_and_newline(self):
        assert dump_manifest({"name": "x"}) == '{\n  "name": "x"\n}\n'

    def test_non_ascii_kept(self):
        assert "Zoë" in dump_manifest({"author": "Zoë"})


class TestFixManifestFile:
    def test_rewrites_in_house_style(self, tmp_path: Path, write_manifest):
        path = write_manifest(tmp_path, {"version": "1.0.0", "name": "x", "dependencies": {"b": "1", "a": "1"}})
        assert fix_manifest_file(path) == []
        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        data = json.loads(text)
        assert list(data) == ["name", "version", "dependencies"]
        assert list(data["dependencies"]) == ["a", "b"]

    def test_reports_missing_required_keys(self, tmp_path: Path, write_manifest):
        path = write_manifest(tmp_path, {"name": "x"})
        assert fix_manifest_file(path) == ["version"]

    def test_unparseable_file_left_alone(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{not json", encoding="utf-8")
        assert fix_manifest_file(path) == ["name", "version"]
        assert path.read_text(encoding="utf-8") == "{not json"
