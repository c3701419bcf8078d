"""
AIP-135 — Standard Methods: Delete
@see https://google.aip.dev/135
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext
from aip_reviewer.utils.jsonpath import operation_to_json_path

IDEMPOTENT_SUCCESS_CODES = ("200", "202", "204")


class DeleteIdempotentRule(OperationRule):
    id = "aip135/delete-idempotent"
    name = "DELETE Is Idempotent"
    aip = 135
    severity = Severity.WARNING
    description = "DELETE should be idempotent and not have a request body"
    methods = ("delete",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        findings: list[Finding] = []
        location = f"{method.upper()} {path}"

        if operation.get("requestBody"):
            op_path = operation_to_json_path(path, method)
            findings.append(ctx.create_finding(
                location=location,
                message="DELETE should not have a request body",
                suggestion="Move any required data to path or query parameters",
                fix=Fix(
                    type="remove-request-body",
                    json_path=op_path,
                    spec_changes=[SpecChange(operation="remove", path=f"{op_path}.requestBody")],
                ),
            ))

        responses = operation.get("responses") or {}
        if "201" in responses:
            findings.append(ctx.create_finding(
                location=location,
                message="DELETE returns 201 Created, which implies non-idempotent behavior",
                suggestion="Use 200 OK, 204 No Content, or 202 Accepted instead",
            ))

        success_codes = [str(c) for c in responses if str(c).startswith("2") and str(c) != "201"]
        if success_codes and not any(c in IDEMPOTENT_SUCCESS_CODES for c in success_codes):
            findings.append(ctx.create_finding(
                location=location,
                message=f"DELETE uses unusual success code(s): {', '.join(success_codes)}",
                suggestion="Use 200 OK (with body), 204 No Content, or 202 Accepted",
            ))
        return findings


RULE_CLASSES = (DeleteIdempotentRule,)
