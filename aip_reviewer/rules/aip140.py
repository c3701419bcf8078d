"""
AIP-140 — Field Names (and AIP-123 resource type names)
=======================================================
Schema-level naming: property names in lower_snake_case, schema names in
UpperCamelCase.

@see https://google.aip.dev/140
@see https://google.aip.dev/123
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import PropertyRule, RuleContext, SchemaRule
from aip_reviewer.utils.jsonpath import schema_to_json_path
from aip_reviewer.utils.naming import (
    PASCAL_CASE,
    SNAKE_CASE,
    convert_casing,
    is_pascal_case,
    is_snake_case,
)


class FieldNamesSnakeCaseRule(PropertyRule):
    id = "aip140/field-names-snake-case"
    name = "Field Names Use snake_case"
    aip = 140
    severity = Severity.WARNING
    description = "Schema property names should be lower_snake_case"

    def check_property(self, name, prop, schema_name, spec, ctx: RuleContext) -> list[Finding]:
        # $ref, x- extensions and @type style keys are not field names
        if name.startswith(("$", "x-", "@")) or is_snake_case(name):
            return []

        suggested = convert_casing(name, SNAKE_CASE)
        if not is_snake_case(suggested):
            return []

        schema_path = schema_to_json_path(schema_name)
        changes = [SpecChange(operation="rename-key", path=f"{schema_path}.properties", from_key=name, to=suggested)]
        schema = ((spec.get("components") or {}).get("schemas") or {}).get(schema_name) or {}
        required = schema.get("required") or []
        if isinstance(required, list) and name in required:
            changes.append(SpecChange(
                operation="set",
                path=f"{schema_path}.required[{required.index(name)}]",
                value=suggested,
            ))

        return [ctx.create_finding(
            location=f"components/schemas/{schema_name}/properties/{name}",
            message=f"Field '{name}' is not lower_snake_case",
            suggestion=f"Rename to '{suggested}'",
            context={"field": name, "schema": schema_name, "suggestedFix": suggested},
            fix=Fix(type="rename-field", json_path=f"{schema_path}.properties", spec_changes=changes),
        )]


class SchemaNamesPascalCaseRule(SchemaRule):
    id = "aip140/schema-names-pascal-case"
    name = "Schema Names Use UpperCamelCase"
    aip = 123
    severity = Severity.SUGGESTION
    description = "Resource schema names should be UpperCamelCase"

    def check_schema(self, name, schema, spec, ctx: RuleContext) -> list[Finding]:
        if is_pascal_case(name):
            return []

        suggested = convert_casing(name, PASCAL_CASE)
        # No automatic fix: every $ref to the schema would need rewriting
        return [ctx.create_finding(
            location=f"components/schemas/{name}",
            message=f"Schema name '{name}' is not UpperCamelCase",
            suggestion=f"Rename to '{suggested}' and update references",
            context={"schema": name, "suggestedFix": suggested},
        )]


RULE_CLASSES = (FieldNamesSnakeCaseRule, SchemaNamesPascalCaseRule)
