"""
AIP-155 — Request Identification
@see https://google.aip.dev/155
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext
from aip_reviewer.utils.jsonpath import parameters_to_json_path
from aip_reviewer.utils.spec_utils import get_parameters

IDEMPOTENCY_HEADERS = ("idempotency-key", "idempotency_key", "x-idempotency-key")


class IdempotencyKeyRule(OperationRule):
    id = "aip155/idempotency-key"
    name = "POST Supports Idempotency Key"
    aip = 155
    severity = Severity.SUGGESTION
    description = "POST endpoints should accept an Idempotency-Key header for safe retries"
    methods = ("post",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if ":" in path or "search" in path:
            return []

        has_key = any(
            p.get("in") == "header" and str(p.get("name", "")).lower() in IDEMPOTENCY_HEADERS
            for p in get_parameters(operation)
        )
        if has_key:
            return []

        suggested = {
            "name": "Idempotency-Key",
            "in": "header",
            "required": False,
            "schema": {"type": "string"},
            "description": "Unique key for idempotent requests",
        }
        params_path = parameters_to_json_path(path, method)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="POST endpoint missing Idempotency-Key header",
            suggestion="Add optional Idempotency-Key header parameter for safe retries",
            context={"suggestedParam": suggested},
            fix=Fix(
                type="add-parameter",
                json_path=params_path,
                spec_changes=[SpecChange(operation="add", path=params_path, value=suggested)],
            ),
        )]


RULE_CLASSES = (IdempotencyKeyRule,)
