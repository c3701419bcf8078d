"""
AIP-122 — Resource Names
========================
Path naming rules: plural collection names, no verbs, one casing style and
descriptive parameter names in nested paths.

Singleton handling (AIP-156):
    A segment owned by a singleton resource is exempt from the plural check
    when the singleton has declared sub-paths or is only implied by its
    children (``/v1/database/backup``).  A lone declared leaf such as
    ``/user`` is still checked.

@see https://google.aip.dev/122
"""
from collections import Counter

from aip_reviewer.core.constants import HTTP_METHODS, Category, Severity
from aip_reviewer.models.finding import Finding, Fix, SpecChange
from aip_reviewer.rules.base import PathRule, RuleContext, SpecRule
from aip_reviewer.utils import nlp
from aip_reviewer.utils.jsonpath import (
    parameter_to_json_path,
    path_to_json_path,
)
from aip_reviewer.utils.naming import (
    LOWERCASE,
    convert_casing,
    detect_casing_style,
    is_custom_method,
    is_verb_segment,
    strip_verb_prefix,
)
from aip_reviewer.utils.path_utils import (
    SINGLETON_ENDPOINTS,
    compute_renamed_path,
    get_resource_segments,
    get_segments,
    is_path_parameter,
    is_version_prefix,
)
from aip_reviewer.utils.singleton import is_singleton_path


def _rename_path_fix(path: str, new_path: str, fix_type: str = "rename-path-segment") -> Fix:
    return Fix(
        type=fix_type,
        json_path=path_to_json_path(path),
        spec_changes=[SpecChange(operation="rename-key", path="$.paths", from_key=path, to=new_path)],
    )


# ---------------------------------------------------------------------------
# Plural resources
# ---------------------------------------------------------------------------
class PluralResourcesRule(PathRule):
    id = "aip122/plural-resources"
    name = "Plural Resource Names"
    aip = 122
    severity = Severity.WARNING
    description = "Resource names should be plural nouns (except singletons per AIP-156)"

    def check_path(self, path, path_item, spec, ctx: RuleContext) -> list[Finding]:
        findings: list[Finding] = []
        singletons = ctx.singletons
        segments = get_segments(path)

        for i, segment in enumerate(segments):
            if is_path_parameter(segment) or ":" in segment:
                continue
            if is_version_prefix(segment):
                continue
            if segment.lower() in SINGLETON_ENDPOINTS:
                continue
            if is_custom_method(segment, path, singletons):
                continue
            if is_verb_segment(segment):
                continue
            if self._owned_by_singleton("/" + "/".join(segments[:i + 1]), ctx):
                continue
            if not nlp.is_singular(segment):
                continue

            plural = nlp.pluralize(segment)
            findings.append(ctx.create_finding(
                location=path,
                message=f"Resource name '{segment}' appears singular. Use plural form.",
                suggestion=f"Rename to '{plural}' or appropriate plural",
                context={"segment": segment, "suggestedFix": plural},
                fix=_rename_path_fix(path, compute_renamed_path(path, segment, plural)),
            ))
        return findings

    @staticmethod
    def _owned_by_singleton(prefix: str, ctx: RuleContext) -> bool:
        declared = ctx.index.declared_paths
        for singleton in ctx.singletons:
            if not is_singleton_path(prefix, {singleton}):
                continue
            if singleton not in declared:
                return True
            if any(p.startswith(singleton + "/") for p in declared):
                return True
        return False


# ---------------------------------------------------------------------------
# No verbs
# ---------------------------------------------------------------------------
class NoVerbsRule(PathRule):
    id = "aip122/no-verbs"
    name = "No Verbs in Paths"
    aip = 131
    severity = Severity.ERROR
    description = "Paths should use nouns for resources; actions belong in HTTP methods or custom methods"
    category_override = Category.NAMING

    def check_path(self, path, path_item, spec, ctx: RuleContext) -> list[Finding]:
        findings: list[Finding] = []
        for segment in get_segments(path):
            if is_path_parameter(segment) or ":" in segment:
                continue
            if is_version_prefix(segment):
                continue
            if is_custom_method(segment, path, ctx.singletons):
                continue
            if is_verb_segment(segment):
                findings.append(ctx.create_finding(
                    location=path,
                    message=f"Path contains verb '{segment}'. Use nouns for resources.",
                    suggestion=f"Extract the noun (e.g., '{strip_verb_prefix(segment)}')",
                    context={"segment": segment},
                ))
        return findings


# ---------------------------------------------------------------------------
# Consistent casing
# ---------------------------------------------------------------------------
class ConsistentCasingRule(SpecRule):
    id = "aip122/consistent-casing"
    name = "Consistent Path Casing"
    aip = 122
    severity = Severity.WARNING
    description = "Path segments should use one casing style across the API"

    def check_spec(self, spec, ctx: RuleContext) -> list[Finding]:
        paths = list((spec.get("paths") or {}).keys())
        styles: Counter = Counter()
        for path in paths:
            for segment in get_resource_segments(path):
                style = detect_casing_style(segment)
                if style != LOWERCASE:
                    styles[style] += 1

        if len(styles) <= 1:
            return []

        dominant = max(styles, key=styles.get)
        findings: list[Finding] = []
        for path in paths:
            for segment in get_resource_segments(path):
                style = detect_casing_style(segment)
                if style in (LOWERCASE, dominant):
                    continue
                converted = convert_casing(segment, dominant)
                findings.append(ctx.create_finding(
                    location=path,
                    message=f"Inconsistent casing: '{segment}' uses {style}, but API predominantly uses {dominant}",
                    suggestion=f"Convert to {dominant} for consistency",
                    context={"segment": segment, "style": style, "dominantStyle": dominant, "suggestedFix": converted},
                    fix=_rename_path_fix(path, compute_renamed_path(path, segment, converted), "rename-path-casing"),
                ))
        return findings


# ---------------------------------------------------------------------------
# Nested ownership
# ---------------------------------------------------------------------------
class NestedOwnershipRule(PathRule):
    id = "aip122/nested-ownership"
    name = "Nested Resource Ownership"
    aip = 122
    severity = Severity.SUGGESTION
    description = "Nested resource parameters should reflect parent ownership"

    def check_path(self, path, path_item, spec, ctx: RuleContext) -> list[Finding]:
        findings: list[Finding] = []
        segments = get_segments(path)

        for i in range(2, len(segments)):
            if segments[i] != "{id}":
                continue
            parent = segments[i - 1]
            if is_path_parameter(parent):
                continue
            # /v1/users/{id} is not nested
            if all(is_version_prefix(s) for s in segments[:i - 1]):
                continue

            suggested = f"{nlp.singularize(parent)}Id"
            findings.append(ctx.create_finding(
                location=path,
                message=f"Generic '{{id}}' in nested path. Use descriptive name like '{{{suggested}}}'",
                suggestion=f"Rename to {{{suggested}}} to clarify ownership",
                context={"paramName": "id", "parentResource": parent, "suggestedName": suggested},
                fix=self._build_fix(path, path_item, suggested),
            ))
        return findings

    @staticmethod
    def _build_fix(path: str, path_item: dict, suggested: str) -> Fix:
        new_path = compute_renamed_path(path, "{id}", "{" + suggested + "}")
        changes = [SpecChange(operation="rename-key", path="$.paths", from_key=path, to=new_path)]
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            for index, param in enumerate(operation.get("parameters") or []):
                if isinstance(param, dict) and param.get("in") == "path" and param.get("name") == "id":
                    changes.append(SpecChange(
                        operation="set",
                        path=f"{parameter_to_json_path(new_path, method, index)}.name",
                        value=suggested,
                    ))
        return Fix(type="rename-path-parameter", json_path=path_to_json_path(path), spec_changes=changes)


RULE_CLASSES = (
    PluralResourcesRule,
    NoVerbsRule,
    ConsistentCasingRule,
    NestedOwnershipRule,
)
