"""Tests for the YAML suite parser."""

import json
import os.path

import pytest

from lifecycle_runner import DeclarationError, HookKind, Suite
from lifecycle_runner.declaration import parse_suite_data, parse_suite_file, resolve_reference


class TestParseSuiteData:
    def test_single_suite(self):
        roots = parse_suite_data({
            "suite": "User model",
            "hooks": {
                "before_each": "json:dumps",
                "after_all": ["json:loads", "os.path:exists"],
            },
            "children": [
                {"case": "serializes", "body": "json:dumps", "timeout": 100},
                {"case": "later"},
                {"suite": "nested", "children": [{"case": "deep", "body": "json:loads"}]},
            ],
        })

        assert len(roots) == 1
        suite = roots[0]
        assert suite.name == "User model"
        assert [h.kind for h in suite.hooks] == [
            HookKind.BEFORE_EACH, HookKind.AFTER_ALL, HookKind.AFTER_ALL,
        ]
        assert suite.hooks[2].fn is os.path.exists
        assert suite.hooks[0].title == "json:dumps"

        serializes, later, nested = suite.children
        assert serializes.body is json.dumps
        assert serializes.timeout_ms == 100
        assert later.is_pending
        assert isinstance(nested, Suite)
        assert nested.children[0].body is json.loads

    def test_suites_list(self):
        roots = parse_suite_data({
            "suites": [
                {"suite": "a", "children": [{"case": "x"}]},
                {"suite": "b"},
            ]
        })

        assert [s.name for s in roots] == ["a", "b"]

    @pytest.mark.parametrize("data, message", [
        ([], "must be a YAML mapping"),
        ({"children": []}, "Missing required field 'suite'"),
        ({"suites": {"suite": "a"}}, "'suites' must be a list"),
        ({"suite": "a", "children": {}}, "'children' must be a list"),
        ({"suite": "a", "children": [{"name": "x"}]}, "with 'suite' or 'case'"),
        ({"suite": "a", "hooks": {"around": "json:dumps"}}, "Invalid hook kind 'around'"),
        ({"suite": "a", "hooks": ["json:dumps"]}, "'hooks' must be a mapping"),
        ({"suite": "a", "hooks": {"before_all": 3}}, "'hooks.before_all' must be a list"),
        ({"suite": "a", "children": [{"case": "x", "timeout": "fast"}]}, "'timeout' must be an integer"),
        ({"suite": "a", "children": [{"case": "x", "timeout": True}]}, "'timeout' must be an integer"),
        ({"suite": None}, "'suite' must be a name in suite"),
        ({"suite": "a", "children": [{"case": None}]}, "'case' must be a name in suite.children\\[0\\]"),
    ])
    def test_malformed_documents(self, data, message):
        with pytest.raises(DeclarationError, match=message):
            parse_suite_data(data, source="inline.yml")


class TestResolveReference:
    def test_nested_attribute(self):
        assert resolve_reference("os:path.exists") is os.path.exists

    @pytest.mark.parametrize("reference, message", [
        ("json.dumps", "expected 'module:attribute'"),
        ("not_a_real_module_xyz:thing", "Cannot import"),
        ("json:nope", "has no attribute 'nope'"),
        ("math:pi", "is not callable"),
    ])
    def test_bad_references(self, reference, message):
        with pytest.raises(DeclarationError, match=message):
            resolve_reference(reference)

    def test_module_failing_at_import(self, tmp_path, monkeypatch):
        (tmp_path / "exploding_bodies_for_parser.py").write_text(
            "raise RuntimeError('boom')\n", encoding="utf-8"
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(DeclarationError, match="RuntimeError: boom"):
            resolve_reference("exploding_bodies_for_parser:body")


class TestParseSuiteFile:
    def test_parses_file(self, tmp_path):
        path = tmp_path / "suite.yml"
        path.write_text("suite: file suite\nchildren:\n  - case: todo\n", encoding="utf-8")

        roots = parse_suite_file(path)

        assert roots[0].name == "file suite"
        assert roots[0].children[0].is_pending

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_suite_file(tmp_path / "missing.yml")

    def test_wrong_suffix(self, tmp_path):
        path = tmp_path / "suite.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(DeclarationError, match="Expected .yaml or .yml"):
            parse_suite_file(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(DeclarationError, match="Empty suite file"):
            parse_suite_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("suite: [unclosed\n", encoding="utf-8")

        with pytest.raises(DeclarationError, match="Invalid YAML"):
            parse_suite_file(path)
