"""
AIP-142 — Time and Duration
@see https://google.aip.dev/142
"""
from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import PropertyRule, RuleContext
from aip_reviewer.utils.jsonpath import quote_key, schema_to_json_path

TIMESTAMP_SUFFIXES = ("_time", "Time")


class TimeFieldFormatRule(PropertyRule):
    id = "aip142/time-field-format"
    name = "Timestamp Fields Use date-time"
    aip = 142
    severity = Severity.SUGGESTION
    description = "String fields named *_time should declare format: date-time"

    def check_property(self, name, prop, schema_name, spec, ctx: RuleContext) -> list[Finding]:
        if not name.endswith(TIMESTAMP_SUFFIXES):
            return []
        if prop.get("type") != "string" or "format" in prop:
            return []

        prop_path = f"{schema_to_json_path(schema_name)}.properties{quote_key(name)}"
        return [ctx.create_finding(
            location=f"components/schemas/{schema_name}/properties/{name}",
            message=f"Timestamp field '{name}' has no format",
            suggestion="Add format: date-time (RFC 3339)",
            context={"field": name, "schema": schema_name},
            fix=Fix(
                type="set-format",
                json_path=prop_path,
                spec_changes=[SpecChange(operation="set", path=f"{prop_path}.format", value="date-time")],
            ),
        )]


RULE_CLASSES = (TimeFieldFormatRule,)
