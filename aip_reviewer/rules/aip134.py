"""
AIP-134 — Standard Methods: Update
@see https://google.aip.dev/134
"""
import copy

from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import PathRule, RuleContext
from aip_reviewer.utils.jsonpath import operation_to_json_path

UPDATE_MASK_PARAM = {
    "name": "update_mask",
    "in": "query",
    "required": False,
    "schema": {"type": "string"},
    "description": "Comma-separated list of fields to update",
}


class PatchOverPutRule(PathRule):
    id = "aip134/patch-over-put"
    name = "PATCH for Partial Updates"
    aip = 134
    severity = Severity.SUGGESTION
    description = "Prefer PATCH for partial updates over PUT"

    def check_path(self, path, path_item, spec, ctx: RuleContext) -> list[Finding]:
        if "{" not in path:
            return []
        put = path_item.get("put")
        if not isinstance(put, dict) or "patch" in path_item:
            return []

        patch_path = operation_to_json_path(path, "patch")
        return [ctx.create_finding(
            location=f"PUT {path}",
            message="Using PUT without PATCH. Consider adding PATCH for partial updates.",
            suggestion="Add PATCH endpoint with field mask support for partial updates",
            fix=Fix(
                type="add-operation",
                json_path=patch_path,
                spec_changes=[SpecChange(operation="set", path=patch_path, value=self._patch_operation(put))],
            ),
        )]

    @staticmethod
    def _patch_operation(put: dict) -> dict:
        operation = {
            "summary": f"Partially update {put.get('summary', 'resource')}".strip(),
            "description": "Partial update; only fields named in update_mask are changed.",
            "parameters": [
                *copy.deepcopy([p for p in put.get("parameters") or [] if isinstance(p, dict) and p.get("in") == "path"]),
                dict(UPDATE_MASK_PARAM),
            ],
        }
        if "requestBody" in put:
            operation["requestBody"] = copy.deepcopy(put["requestBody"])
        operation["responses"] = copy.deepcopy(put.get("responses") or {"200": {"description": "Updated"}})
        return operation


RULE_CLASSES = (PatchOverPutRule,)
