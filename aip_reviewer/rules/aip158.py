"""
AIP-158 — Pagination
====================
List endpoints accept page_size / page_token, bound the page size and
return next_page_token.

Fix paths address parameters by index (``parameters[2]``) since the
path syntax has no filter expressions.

@see https://google.aip.dev/158
"""
import copy

from aip_reviewer.core.constants import Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, ParameterRule, RuleContext
from aip_reviewer.utils.jsonpath import (
    parameter_to_json_path,
    parameters_to_json_path,
    quote_key,
    responses_to_json_path,
    schema_to_json_path,
)
from aip_reviewer.utils.path_utils import is_collection_endpoint
from aip_reviewer.utils.spec_utils import (
    get_response_media,
    get_response_schema,
    has_parameter,
    schema_ref_name,
)

PAGE_SIZE_NAMES = ("page_size", "pageSize", "limit")
PAGE_TOKEN_NAMES = ("page_token", "pageToken", "cursor", "offset")
NEXT_TOKEN_FIELDS = ("next_page_token", "nextPageToken", "next_cursor", "nextCursor", "cursor")
DEFAULT_MAX_PAGE_SIZE = 100

SUGGESTED_PAGE_PARAMS = [
    {
        "name": "page_size",
        "in": "query",
        "required": False,
        "schema": {"type": "integer", "minimum": 1, "maximum": DEFAULT_MAX_PAGE_SIZE},
        "description": "Maximum number of items to return per page",
    },
    {
        "name": "page_token",
        "in": "query",
        "required": False,
        "schema": {"type": "string"},
        "description": "Token for fetching the next page of results",
    },
]


class ListPaginatedRule(OperationRule):
    id = "aip158/list-paginated"
    name = "List Endpoints Have Pagination"
    aip = 158
    severity = Severity.WARNING
    description = "List endpoints should support pagination"
    methods = ("get",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if not is_collection_endpoint(path):
            return []
        if has_parameter(operation, PAGE_SIZE_NAMES) or has_parameter(operation, PAGE_TOKEN_NAMES):
            return []

        params_path = parameters_to_json_path(path, method)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="List endpoint missing pagination parameters",
            suggestion="Add page_size and page_token query parameters",
            context={"suggestedParams": ["page_size", "page_token"]},
            fix=Fix(
                type="add-parameters",
                json_path=params_path,
                spec_changes=[SpecChange(
                    operation="merge",
                    path=params_path,
                    value=copy.deepcopy(SUGGESTED_PAGE_PARAMS),
                )],
            ),
        )]


class MaxPageSizeRule(ParameterRule):
    id = "aip158/max-page-size"
    name = "Pagination Has Maximum"
    aip = 158
    severity = Severity.SUGGESTION
    description = "Page size parameter should have a maximum value"
    locations = ("query",)

    def check_parameter(self, param, method, path, spec, ctx: RuleContext) -> list[Finding]:
        if param.get("name") not in PAGE_SIZE_NAMES or method.lower() != "get":
            return []
        schema = param.get("schema")
        if not isinstance(schema, dict) or "maximum" in schema:
            return []

        index = _parameter_index(spec, path, method, param)
        if index is None:
            return []

        param_path = parameter_to_json_path(path, method, index)
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message=f"Parameter '{param['name']}' has no maximum value",
            suggestion=f"Add maximum: {DEFAULT_MAX_PAGE_SIZE} (or appropriate limit) to schema",
            context={"paramName": param["name"], "constraint": "maximum"},
            fix=Fix(
                type="set-schema-constraint",
                json_path=f"{param_path}.schema",
                spec_changes=[SpecChange(
                    operation="set",
                    path=f"{param_path}.schema.maximum",
                    value=DEFAULT_MAX_PAGE_SIZE,
                )],
            ),
        )]


def _parameter_index(spec: dict, path: str, method: str, param: dict):
    operation = ((spec.get("paths") or {}).get(path) or {}).get(method.lower()) or {}
    for index, candidate in enumerate(operation.get("parameters") or []):
        if candidate is param:
            return index
    return None


class ResponseNextTokenRule(OperationRule):
    id = "aip158/response-next-token"
    name = "Response Has Next Page Token"
    aip = 158
    severity = Severity.WARNING
    description = "Paginated list responses should include next_page_token"
    methods = ("get",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if not is_collection_endpoint(path):
            return []
        if not has_parameter(operation, PAGE_SIZE_NAMES + ("page_token", "pageToken", "cursor")):
            return []

        schema = get_response_schema(operation, "200", spec)
        if schema is None:
            return []
        properties = schema.get("properties") or {}
        if any(name in properties for name in NEXT_TOKEN_FIELDS):
            return []

        suggested = {"type": "string", "nullable": True}
        target = self._schema_json_path(operation, path, method, spec)
        fix = None
        if target is not None:
            field_path = f"{target}.properties.next_page_token"
            fix = Fix(
                type="add-response-field",
                json_path=target,
                spec_changes=[SpecChange(operation="set", path=field_path, value=suggested)],
            )

        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="Paginated response missing next_page_token field",
            suggestion="Add next_page_token (string, nullable) to response schema",
            context={"suggestedField": {"next_page_token": suggested}},
            fix=fix,
        )]

    @staticmethod
    def _schema_json_path(operation: dict, path: str, method: str, spec: dict):
        """JSONPath of the schema object that owns the response properties."""
        found = get_response_media(operation, "200", spec)
        if found is None:
            return None
        media_type, media = found
        schema = media.get("schema")
        if isinstance(schema, dict) and "$ref" in schema:
            name = schema_ref_name(schema["$ref"])
            return schema_to_json_path(name) if name else None
        response = (operation.get("responses") or {}).get("200")
        if isinstance(response, dict) and "$ref" in response:
            return None
        return f"{responses_to_json_path(path, method)}['200'].content{quote_key(media_type)}.schema"


RULE_CLASSES = (ListPaginatedRule, MaxPageSizeRule, ResponseNextTokenRule)
