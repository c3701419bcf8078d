"""
AIP-132 — Standard Methods: List
================================
List endpoints should expose filtering (AIP-160) and ordering.
Both rules only look at collection endpoints (``GET /v1/users``).

@see https://google.aip.dev/132
"""
from aip_reviewer.core.constants import Category, Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import OperationRule, RuleContext
from aip_reviewer.utils.jsonpath import parameters_to_json_path
from aip_reviewer.utils.path_utils import is_collection_endpoint
from aip_reviewer.utils.spec_utils import get_parameters

FILTER_PARAM_NAMES = ("filter", "q", "query", "search")
NON_FILTER_PARAM_NAMES = ("page_size", "page_token", "limit", "offset", "order_by")
ORDER_PARAM_NAMES = ("order_by", "orderBy", "sort", "sort_by", "sortBy", "order")


def _add_parameter_fix(path: str, method: str, param: dict) -> Fix:
    params_path = parameters_to_json_path(path, method)
    return Fix(
        type="add-parameter",
        json_path=params_path,
        spec_changes=[SpecChange(operation="add", path=params_path, value=param)],
    )


class HasFilteringRule(OperationRule):
    id = "aip132/has-filtering"
    name = "List Endpoints Document Filtering"
    aip = 160
    severity = Severity.SUGGESTION
    description = "List endpoints should document available filters or filter parameter"
    methods = ("get",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if not is_collection_endpoint(path):
            return []

        query_names = [
            str(p.get("name", "")) for p in get_parameters(operation) if p.get("in") == "query"
        ]
        has_filter_param = any(name.lower() in FILTER_PARAM_NAMES for name in query_names)
        has_field_filters = any(name not in NON_FILTER_PARAM_NAMES for name in query_names)
        if has_filter_param or has_field_filters:
            return []

        suggested = {
            "name": "filter",
            "in": "query",
            "required": False,
            "schema": {"type": "string"},
            "description": "Filter expression (AIP-160)",
        }
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="List endpoint has no filter parameters",
            suggestion="Add filter parameter or field-specific filters (e.g., status, created_after)",
            context={"suggestedParam": suggested},
            fix=_add_parameter_fix(path, method, suggested),
        )]


class HasOrderingRule(OperationRule):
    id = "aip132/has-ordering"
    name = "List Endpoints Support Ordering"
    aip = 132
    severity = Severity.SUGGESTION
    description = "List endpoints should support ordering/sorting"
    category_override = Category.FILTERING
    methods = ("get",)

    def check_operation(self, method, operation, path, spec, ctx: RuleContext) -> list[Finding]:
        if not is_collection_endpoint(path):
            return []

        has_order_param = any(
            p.get("in") == "query" and p.get("name") in ORDER_PARAM_NAMES
            for p in get_parameters(operation)
        )
        if has_order_param:
            return []

        suggested = {
            "name": "order_by",
            "in": "query",
            "schema": {"type": "string"},
            "description": 'Sort order (e.g., "created_at desc")',
        }
        return [ctx.create_finding(
            location=f"{method.upper()} {path}",
            message="List endpoint missing ordering parameter",
            suggestion='Add order_by query parameter (e.g., "created_at desc, name asc")',
            context={"suggestedParam": suggested},
            fix=_add_parameter_fix(path, method, suggested),
        )]


RULE_CLASSES = (HasFilteringRule, HasOrderingRule)
