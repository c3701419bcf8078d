"""
AIP-193 — Errors
================
A shared error schema, documented error responses and standard status codes.

@see https://google.aip.dev/193
"""
import copy

from aip_reviewer.core.constants import STANDARD_ERROR_CODES, Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext, SpecRule
from aip_reviewer.utils.jsonpath import responses_to_json_path, schema_to_json_path

ERROR_SCHEMA_NAME = "Error"

SUGGESTED_ERROR_SCHEMA = {
    "type": "object",
    "required": ["error"],
    "properties": {
        "error": {
            "type": "object",
            "required": ["code", "message"],
            "properties": {
                "code": {"type": "string", "description": "Error code"},
                "message": {"type": "string", "description": "Human-readable error message"},
                "details": {"type": "array", "description": "Additional error details"},
                "request_id": {"type": "string", "description": "Request identifier for debugging"},
            },
        },
    },
}

DEFAULT_ERROR_RESPONSE = {
    "description": "Error response",
    "content": {
        "application/json": {
            "schema": {"$ref": f"#/components/schemas/{ERROR_SCHEMA_NAME}"},
        },
    },
}


class ErrorSchemaDefinedRule(SpecRule):
    id = "aip193/schema-defined"
    name = "Error Schema Defined"
    aip = 193
    severity = Severity.WARNING
    description = "API should define a consistent error response schema"

    def check_spec(self, spec, ctx: RuleContext) -> list[Finding]:
        schemas = (spec.get("components") or {}).get("schemas") or {}
        if any("error" in str(name).lower() for name in schemas):
            return []

        schema_path = schema_to_json_path(ERROR_SCHEMA_NAME)
        return [ctx.create_finding(
            location="components/schemas",
            message="No error schema defined",
            suggestion="Define an Error schema with code, message, and details fields",
            context={"suggestedSchema": copy.deepcopy(SUGGESTED_ERROR_SCHEMA)},
            fix=Fix(
                type="add-schema",
                json_path="$.components.schemas",
                spec_changes=[SpecChange(
                    operation="set",
                    path=schema_path,
                    value=copy.deepcopy(SUGGESTED_ERROR_SCHEMA),
                )],
            ),
        )]


class ErrorResponsesDocumentedRule(OperationRule):
    id = "aip193/responses-documented"
    name = "Error Responses Documented"
    aip = 193
    severity = Severity.SUGGESTION
    description = "Operations should document error responses"

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        responses = operation.get("responses") or {}
        has_error_codes = any(
            str(code) != "default" and str(code)[:1] in ("4", "5") for code in responses
        )
        if has_error_codes or responses.get("default"):
            return []

        responses_path = responses_to_json_path(path, method)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="No error responses documented",
            suggestion="Add 4xx/5xx responses or a default error response",
            fix=Fix(
                type="add-response",
                json_path=responses_path,
                spec_changes=[SpecChange(
                    operation="set",
                    path=f"{responses_path}['default']",
                    value=copy.deepcopy(DEFAULT_ERROR_RESPONSE),
                )],
            ),
        )]


class StandardErrorCodesRule(OperationRule):
    id = "aip193/standard-codes"
    name = "Standard Error Codes"
    aip = 193
    severity = Severity.SUGGESTION
    description = "Use standard HTTP error status codes"

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        findings: list[Finding] = []
        for code in operation.get("responses") or {}:
            code = str(code)
            if code == "default" or code[:1] in ("2", "3"):
                continue
            if code not in STANDARD_ERROR_CODES:
                findings.append(ctx.create_finding(
                    location=f"{method.upper()} {path}",
                    message=f"Non-standard error code {code}",
                    suggestion="Use standard codes: 400, 401, 403, 404, 409, 422, 429 (client) or 500, 503 (server)",
                    context={"code": code, "standardCodes": sorted(STANDARD_ERROR_CODES)},
                ))
        return findings


RULE_CLASSES = (ErrorSchemaDefinedRule, ErrorResponsesDocumentedRule, StandardErrorCodesRule)
