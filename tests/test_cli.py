"""
Unit Tests — CLI
================
main() end to end over files in a temporary directory.
"""
import json
import logging

import pytest
import yaml

import main as cli


SPEC_WITH_ONE_FIX = {
    "openapi": "3.0.0",
    "info": {"title": "Users", "version": "1.0"},
    "paths": {
        "/users/{id}": {
            "get": {
                "requestBody": {"content": {"application/json": {"schema": {"type": "object"}}}},
                "responses": {"200": {"description": "ok"}, "404": {"description": "missing"}},
            },
        },
    },
    "components": {"schemas": {"Error": {"type": "object"}}},
}


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "api.yaml"
    path.write_text(yaml.safe_dump(SPEC_WITH_ONE_FIX, sort_keys=False), encoding="utf-8")
    return path


class TestReviewCommand:

    def test_errors_exit_one(self, spec_file, capsys):
        code = cli.main([str(spec_file), "--format", "summary", "--no-color"])
        out = capsys.readouterr().out
        assert code == cli.EXIT_FINDINGS
        assert out.startswith("✗ ")

    def test_json_output(self, spec_file, capsys):
        cli.main([str(spec_file), "-f", "json", "--no-color"])
        doc = json.loads(capsys.readouterr().out)
        assert doc["specTitle"] == "Users"
        assert [f["ruleId"] for f in doc["findings"]] == ["aip131/get-no-body"]

    def test_category_filter_clean_exit(self, spec_file, capsys):
        code = cli.main([str(spec_file), "-c", "errors", "-f", "summary", "--no-color"])
        assert code == cli.EXIT_OK
        assert capsys.readouterr().out.startswith("✓ ")

    def test_skip_rule(self, spec_file, capsys):
        code = cli.main([str(spec_file), "-x", "aip131/get-no-body", "-f", "summary", "--no-color"])
        assert code == cli.EXIT_OK

    def test_yaml_integer_status_keys(self, tmp_path, capsys):
        path = tmp_path / "int-keys.yaml"
        path.write_text(
            "paths:\n  /users:\n    post:\n      responses:\n        200:\n          description: ok\n",
            encoding="utf-8",
        )
        cli.main([str(path), "-f", "json", "--no-color"])
        ids = [f["ruleId"] for f in json.loads(capsys.readouterr().out)["findings"]]
        assert "aip133/post-returns-201" in ids


class TestFixCommand:

    def test_writes_fixed_spec(self, spec_file, tmp_path, capsys):
        output = tmp_path / "out.yaml"
        code = cli.main([str(spec_file), "--fix", "-o", str(output), "--no-color"])

        assert code == cli.EXIT_OK
        assert "Applied 1/1 fixes" in capsys.readouterr().out
        fixed = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert "requestBody" not in fixed["paths"]["/users/{id}"]["get"]
        assert list(fixed["paths"]) == ["/users/{id}"]

    def test_default_output_path(self, spec_file):
        cli.main([str(spec_file), "--fix", "--no-color"])
        assert (spec_file.parent / "api.fixed.yaml").exists()

    def test_json_round_trip(self, tmp_path):
        source = tmp_path / "api.json"
        source.write_text(json.dumps(SPEC_WITH_ONE_FIX), encoding="utf-8")
        cli.main([str(source), "--fix", "--no-color"])
        fixed = json.loads((tmp_path / "api.fixed.json").read_text(encoding="utf-8"))
        assert "requestBody" not in fixed["paths"]["/users/{id}"]["get"]

    def test_dry_run_writes_nothing(self, spec_file, capsys):
        code = cli.main([str(spec_file), "--fix", "--dry-run", "--no-color"])
        assert code == cli.EXIT_OK
        assert "Would apply 1/1 fixes" in capsys.readouterr().out
        assert not (spec_file.parent / "api.fixed.yaml").exists()

    def test_only_fixable_findings_are_passed(self, spec_file, monkeypatch, capsys):
        received = []
        real_apply = cli.apply_all_fixes

        def recording_apply(spec, findings, dry_run=False):
            received.extend(findings)
            return real_apply(spec, findings, dry_run=dry_run)

        monkeypatch.setattr(cli, "apply_all_fixes", recording_apply)
        cli.main([str(spec_file), "--fix", "--dry-run", "--no-color"])
        assert received
        assert all(f.fix is not None for f in received)


class TestUsageErrors:

    def test_missing_file(self, tmp_path):
        assert cli.main([str(tmp_path / "nope.yaml"), "--no-color"]) == cli.EXIT_USAGE

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert cli.main([str(path), "--no-color"]) == cli.EXIT_USAGE

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert cli.main([str(path), "--no-color"]) == cli.EXIT_USAGE

    def test_bad_format_rejected_by_argparse(self, spec_file):
        with pytest.raises(SystemExit) as exc:
            cli.main([str(spec_file), "--format", "xml"])
        assert exc.value.code == 2


class TestHelpers:

    def test_default_output_path(self):
        assert cli.default_output_path("dir/api.yaml") == "dir/api.fixed.yaml"
        assert cli.default_output_path("api") == "api.fixed.yaml"


class TestListRules:

    def test_lists_catalog(self, capsys):
        assert cli.main(["--list-rules", "--no-color"]) == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "AIP-122 Resource Names" in out
        assert "aip193/standard-codes" in out

    def test_category_narrows_listing(self, capsys):
        cli.main(["--list-rules", "-c", "pagination", "--no-color"])
        out = capsys.readouterr().out
        assert "aip158/list-paginated" in out
        assert "aip122/plural-resources" not in out

    def test_spec_required_otherwise(self):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--no-color"])
        assert exc.value.code == 2
