"""
AIP-131 — Standard Methods: Get
@see https://google.aip.dev/131
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext
from aip_reviewer.utils.jsonpath import operation_to_json_path


class GetNoBodyRule(OperationRule):
    id = "aip131/get-no-body"
    name = "GET Has No Request Body"
    aip = 131
    severity = Severity.ERROR
    description = "GET requests should not have a request body"
    methods = ("get",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if not operation.get("requestBody"):
            return []

        op_path = operation_to_json_path(path, method)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="GET requests should not have a request body",
            suggestion="Move body parameters to query parameters, or use POST for complex queries",
            fix=Fix(
                type="remove-request-body",
                json_path=op_path,
                spec_changes=[SpecChange(operation="remove", path=f"{op_path}.requestBody")],
            ),
        )]


RULE_CLASSES = (GetNoBodyRule,)
