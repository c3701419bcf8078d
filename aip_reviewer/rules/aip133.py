"""
AIP-133 — Standard Methods: Create
@see https://google.aip.dev/133
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext
from aip_reviewer.utils.jsonpath import responses_to_json_path


class PostReturnsCreatedRule(OperationRule):
    id = "aip133/post-returns-201"
    name = "POST Returns 201 or 202"
    aip = 133
    severity = Severity.SUGGESTION
    description = "POST for resource creation should return 201 Created or 202 Accepted"
    methods = ("post",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        # Custom methods (:cancel, :batchGet) may legitimately return 200
        if ":" in path:
            return []

        responses = operation.get("responses") or {}
        if "201" in responses or "202" in responses or "200" not in responses:
            return []

        responses_path = responses_to_json_path(path, method)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="POST returns 200. Consider 201 (Created) for sync or 202 (Accepted) for async.",
            suggestion="Use 201 when resource is created immediately, 202 for async creation",
            fix=Fix(
                type="change-status-code",
                json_path=responses_path,
                spec_changes=[SpecChange(operation="rename-key", path=responses_path, from_key="200", to="201")],
            ),
        )]


RULE_CLASSES = (PostReturnsCreatedRule,)
