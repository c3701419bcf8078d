"""
Unit Tests — Fixer
==================
Mutation operations, ordering, dry-run and the derived summary/error views.
All failures must come back as data, never as exceptions.
"""
import copy

import pytest

from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.services.fixer import Fixer, apply_all_fixes, json_type_name


# ===================================================================
# Helpers
# ===================================================================
def _finding(*changes, rule_id="test/rule"):
    return Finding(
        rule_id=rule_id,
        severity="warning",
        category="naming",
        location="/x",
        message="m",
        fix=Fix(type="test", json_path="$", spec_changes=list(changes)),
    )


def _change(operation, path, **kwargs):
    return SpecChange(operation=operation, path=path, **kwargs)


@pytest.fixture
def spec():
    return {
        "openapi": "3.0.0",
        "paths": {
            "/a": {"get": {"parameters": [{"name": "existing"}]}},
            "/user": {"get": {}},
            "/z": {},
        },
    }


# ===================================================================
# rename-key
# ===================================================================
class TestRenameKey:

    def test_rename_then_reapply_reports_not_found(self, spec):
        finding = _finding(_change("rename-key", "$.paths", from_key="/user", to="/users"))

        first = Fixer(spec)
        assert first.apply_fix(finding).applied is True
        fixed = first.get_spec()
        assert "/users" in fixed["paths"]

        second = Fixer(fixed)
        result = second.apply_fix(finding)
        assert result.applied is False
        assert "not found" in result.changes[0].error

    def test_preserves_sibling_order(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("rename-key", "$.paths", from_key="/user", to="/users")))
        assert list(fixer.get_spec()["paths"]) == ["/a", "/users", "/z"]

    def test_target_already_exists(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("rename-key", "$.paths", from_key="/a", to="/z")))
        assert result.changes[0].error == "Key '/z' already exists at $.paths"

    def test_parent_missing(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("rename-key", "$.nope", from_key="a", to="b")))
        assert result.changes[0].error == "Cannot resolve parent at $.nope"

    def test_parent_not_object(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("rename-key", "$.openapi", from_key="a", to="b")))
        assert result.changes[0].error == "Expected object at $.openapi, got string"

    def test_requires_from_and_to(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("rename-key", "$.paths", from_key="/a")))
        assert result.changes[0].error == "rename-key requires from and to"

    def test_accepts_from_alias(self, spec):
        change = SpecChange.model_validate({"operation": "rename-key", "path": "$.paths", "from": "/a", "to": "/b"})
        assert change.from_key == "/a"
        assert Fixer(spec).apply_fix(_finding(change)).applied


# ===================================================================
# set / add / remove / merge
# ===================================================================
class TestSet:

    def test_creates_intermediates(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("set", "$.components.schemas['Error']", value={"type": "object"})))
        assert fixer.get_spec()["components"]["schemas"]["Error"] == {"type": "object"}

    def test_set_by_index(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("set", "$.paths['/a'].get.parameters[0].name", value="renamed")))
        assert fixer.get_spec()["paths"]["/a"]["get"]["parameters"][0]["name"] == "renamed"

    def test_index_out_of_range(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("set", "$.paths['/a'].get.parameters[5]", value={})))
        assert result.applied is False
        assert "out of range" in result.changes[0].error

    def test_through_scalar_fails(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("set", "$.openapi.version", value="x")))
        assert result.changes[0].error == "Cannot traverse through non-object at openapi"

    def test_root_fails(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("set", "$", value={})))
        assert result.changes[0].error == "Cannot resolve parent of root"


class TestAdd:

    def test_creates_array_when_absent(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("add", "$.paths['/user'].get.parameters", value={"name": "q"})))
        assert fixer.get_spec()["paths"]["/user"]["get"]["parameters"] == [{"name": "q"}]

    def test_appends(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("add", "$.paths['/a'].get.parameters", value={"name": "q"})))
        assert [p["name"] for p in fixer.get_spec()["paths"]["/a"]["get"]["parameters"]] == ["existing", "q"]

    def test_type_mismatch(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("add", "$.openapi", value="x")))
        assert result.changes[0].error == "Expected array at $.openapi, got string"


class TestRemove:

    def test_removes(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("remove", "$.paths['/z']")))
        assert "/z" not in fixer.get_spec()["paths"]

    def test_absent_is_idempotent(self, spec):
        fixer = Fixer(spec)
        finding = _finding(_change("remove", "$.paths['/a'].get.requestBody"))
        first = fixer.apply_fix(finding)
        second = fixer.apply_fix(finding)
        assert first.applied is True and second.applied is True
        assert first.changes[0].error is None and second.changes[0].error is None


class TestMerge:

    def test_appends_arrays_in_order(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change(
            "merge", "$.paths['/a'].get.parameters",
            value=[{"name": "page_size"}, {"name": "page_token"}],
        )))
        params = fixer.get_spec()["paths"]["/a"]["get"]["parameters"]
        assert len(params) == 3
        assert [p["name"] for p in params] == ["existing", "page_size", "page_token"]

    def test_updates_objects(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("merge", "$.paths['/a'].get", value={"summary": "S"})))
        assert fixer.get_spec()["paths"]["/a"]["get"]["summary"] == "S"
        assert "parameters" in fixer.get_spec()["paths"]["/a"]["get"]

    def test_initialises_when_absent(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("merge", "$.paths['/user'].get.parameters", value=[{"name": "a"}])))
        assert fixer.get_spec()["paths"]["/user"]["get"]["parameters"] == [{"name": "a"}]

    def test_scalar_cannot_initialise(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("merge", "$.paths['/user'].x", value=3)))
        assert result.changes[0].error == "Cannot initialize merge with number"

    def test_type_mismatch_names_both_types(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("merge", "$.paths['/a'].get.parameters", value={"a": 1})))
        assert result.changes[0].error == "Cannot merge object into array at $.paths['/a'].get.parameters"


class TestUnknownOperation:

    def test_reported_as_error(self, spec):
        result = Fixer(spec).apply_fix(_finding(_change("explode", "$.paths")))
        assert result.applied is False
        assert result.changes[0].error == "Unknown operation: explode"


# ===================================================================
# Fix-level semantics
# ===================================================================
class TestApplyFix:

    def test_does_not_mutate_input(self, spec):
        original = copy.deepcopy(spec)
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("remove", "$.paths['/z']")))
        assert spec == original
        assert fixer.get_spec() is not spec

    def test_non_transactional(self, spec):
        fixer = Fixer(spec)
        result = fixer.apply_fix(_finding(
            _change("set", "$.info.title", value="T"),
            _change("rename-key", "$.paths", from_key="/missing", to="/x"),
            _change("set", "$.info.version", value="1"),
        ))
        assert result.applied is False
        assert [c.applied for c in result.changes] == [True, False, True]
        assert fixer.get_spec()["info"] == {"title": "T", "version": "1"}

    def test_changes_run_in_order(self, spec):
        fixer = Fixer(spec)
        result = fixer.apply_fix(_finding(
            _change("rename-key", "$.paths", from_key="/user", to="/users"),
            _change("set", "$.paths['/users'].get.summary", value="List"),
        ))
        assert result.applied
        assert fixer.get_spec()["paths"]["/users"]["get"]["summary"] == "List"

    def test_empty_changes_apply_trivially(self, spec):
        result = Fixer(spec).apply_fix(_finding())
        assert result.applied is True
        assert result.changes == []

    def test_finding_without_fix(self, spec):
        fixer = Fixer(spec)
        finding = Finding(rule_id="r", severity="error", category="naming", location="/", message="m")
        result = fixer.apply_fix(finding)
        assert result.applied is False
        assert result.changes == []
        assert fixer.get_log() == []
        assert fixer.get_summary().total == 0

    def test_accepts_camel_case_dicts(self, spec):
        finding = {
            "ruleId": "r",
            "severity": "warning",
            "category": "naming",
            "location": "/user",
            "message": "m",
            "fix": {
                "type": "rename-path-segment",
                "jsonPath": "$.paths['/user']",
                "specChanges": [{"operation": "rename-key", "path": "$.paths", "from": "/user", "to": "/users"}],
            },
        }
        assert Fixer(spec).apply_fix(finding).applied


class TestDryRun:

    def test_never_mutates_and_reports_applied(self, spec):
        original = copy.deepcopy(spec)
        fixer = Fixer(spec, dry_run=True)
        result = fixer.apply_fix(_finding(
            _change("rename-key", "$.paths", from_key="/missing", to="/x"),
            _change("remove", "$.paths['/a']"),
        ))
        assert result.applied is True
        assert all(c.applied for c in result.changes)
        assert spec == original
        assert fixer.get_spec() is spec


class TestSummaryAndErrors:

    def test_summary_counts(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fixes([
            _finding(_change("remove", "$.paths['/z']"), rule_id="ok"),
            _finding(_change("rename-key", "$.paths", from_key="/nope", to="/x"), rule_id="bad"),
            Finding(rule_id="nofix", severity="error", category="naming", location="/", message="m"),
        ])
        summary = fixer.get_summary()
        assert (summary.total, summary.applied, summary.failed, summary.changes) == (2, 1, 1, 1)

    def test_summary_counts_only_applied_changes(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(
            _change("set", "$.info.title", value="T"),
            _change("rename-key", "$.paths", from_key="/missing", to="/x"),
        ))
        summary = fixer.get_summary()
        assert (summary.total, summary.applied, summary.failed, summary.changes) == (1, 0, 1, 1)

    def test_errors(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("rename-key", "$.paths", from_key="/nope", to="/x"), rule_id="bad"))
        assert fixer.has_errors()
        errors = fixer.get_errors()
        assert len(errors) == 1
        assert errors[0].rule_id == "bad"
        assert "not found" in errors[0].error

    def test_no_errors(self, spec):
        fixer = Fixer(spec)
        fixer.apply_fix(_finding(_change("remove", "$.paths['/z']")))
        assert not fixer.has_errors()
        assert fixer.get_errors() == []


class TestApplyAllFixes:

    def test_outcome(self, spec):
        outcome = apply_all_fixes(spec, [_finding(_change("remove", "$.paths['/z']"))])
        assert "/z" not in outcome.spec["paths"]
        assert "/z" in spec["paths"]
        assert outcome.summary.applied == 1
        assert len(outcome.results) == 1

    def test_dry_run_outcome_is_original(self, spec):
        outcome = apply_all_fixes(spec, [_finding(_change("remove", "$.paths['/z']"))], dry_run=True)
        assert outcome.spec is spec
        assert "/z" in spec["paths"]


class TestJsonTypeName:

    @pytest.mark.parametrize("value,name", [
        (None, "null"), (True, "boolean"), (1, "number"), (1.5, "number"),
        ("s", "string"), ([], "array"), ({}, "object"),
    ])
    def test_names(self, value, name):
        assert json_type_name(value) == name
