"""
Rule Base Classes
=================
Every rule declares the document element kind it examines.  The reviewer
partitions the catalog by kind once and dispatches each element only to the
rules of the matching kind.

    Kind        check method                                     filter
    SPEC        check_spec(spec, ctx)                            -
    PATH        check_path(path, path_item, spec, ctx)           -
    OPERATION   check_operation(method, operation, path, spec, ctx)  methods
    SCHEMA      check_schema(name, schema, spec, ctx)            -
    PROPERTY    check_property(name, prop, schema_name, spec, ctx)   -
    PARAMETER   check_parameter(param, method, path, spec, ctx)  locations

Check methods return a list of Findings.  Methods are lowercase
("get"), matching the document keys.
"""
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Callable, Optional

from aip_reviewer.core.constants import Severity, category_for_aip
from aip_reviewer.models.finding import Finding, Fix
from aip_reviewer.utils.singleton import infer_singleton_resources


class RuleKind(Enum):
    SPEC = "spec"
    PATH = "path"
    OPERATION = "operation"
    SCHEMA = "schema"
    PROPERTY = "property"
    PARAMETER = "parameter"


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------
class SpecIndex:
    """Per-review cache of facts derived from the whole spec."""

    def __init__(self, spec: dict):
        self.spec = spec

    @cached_property
    def singletons(self) -> set[str]:
        return infer_singleton_resources(self.spec)

    @cached_property
    def declared_paths(self) -> list[str]:
        return list((self.spec.get("paths") or {}).keys())


@dataclass
class RuleContext:
    spec: dict
    rule: "BaseRule"
    index: SpecIndex

    @classmethod
    def for_rule(cls, rule: "BaseRule", spec: dict, index: Optional[SpecIndex] = None) -> "RuleContext":
        return cls(spec=spec, rule=rule, index=index or SpecIndex(spec))

    @property
    def singletons(self) -> set[str]:
        return self.index.singletons

    def create_finding(
        self,
        location: str,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        fix: Optional[Fix] = None,
    ) -> Finding:
        """Build a Finding pre-filled with the rule's id, severity, category and AIP."""
        return Finding(
            rule_id=self.rule.id,
            severity=self.rule.severity,
            category=self.rule.category,
            location=location,
            message=message,
            aip_reference=f"AIP-{self.rule.aip}",
            suggestion=suggestion,
            context=context,
            fix=fix,
        )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
class BaseRule:
    kind: RuleKind

    id: str = ""
    name: str = ""
    aip: int = 0
    severity: str = Severity.WARNING
    description: str = ""
    category_override: Optional[str] = None

    @property
    def category(self) -> str:
        return self.category_override or category_for_aip(self.aip)

    def describe(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "aip": self.aip,
            "severity": self.severity,
            "category": self.category,
            "description": self.description,
        }

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"


class SpecRule(BaseRule):
    kind = RuleKind.SPEC

    def check_spec(self, spec: dict, ctx: RuleContext) -> list[Finding]:
        raise NotImplementedError


class PathRule(BaseRule):
    kind = RuleKind.PATH

    def check_path(self, path: str, path_item: dict, spec: dict, ctx: RuleContext) -> list[Finding]:
        raise NotImplementedError


class OperationRule(BaseRule):
    kind = RuleKind.OPERATION
    methods: Optional[tuple[str, ...]] = None

    def applies_to(self, method: str) -> bool:
        return self.methods is None or method.lower() in self.methods

    def check_operation(
        self, method: str, operation: dict, path: str, spec: dict, ctx: RuleContext
    ) -> list[Finding]:
        raise NotImplementedError


class SchemaRule(BaseRule):
    kind = RuleKind.SCHEMA

    def check_schema(self, name: str, schema: dict, spec: dict, ctx: RuleContext) -> list[Finding]:
        raise NotImplementedError


class PropertyRule(BaseRule):
    kind = RuleKind.PROPERTY

    def check_property(
        self, name: str, prop: dict, schema_name: str, spec: dict, ctx: RuleContext
    ) -> list[Finding]:
        raise NotImplementedError


class ParameterRule(BaseRule):
    kind = RuleKind.PARAMETER
    locations: Optional[tuple[str, ...]] = None

    def applies_to(self, param: dict) -> bool:
        return self.locations is None or param.get("in") in self.locations

    def check_parameter(
        self, param: dict, method: str, path: str, spec: dict, ctx: RuleContext
    ) -> list[Finding]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Legacy rules
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LegacyRule:
    """
    Older whole-spec rule shape: a plain check function over the spec.

    ``check(spec, ctx)`` may return Findings or dicts in the camelCase
    Finding shape; dicts are validated into Findings by the adapter.
    """
    id: str
    name: str
    category: str
    severity: str
    aip: int
    description: str
    check: Callable[[dict, RuleContext], list] = field(repr=False)


class LegacyRuleAdapter(SpecRule):
    """Runs a LegacyRule as a SPEC-kind rule."""

    def __init__(self, legacy: LegacyRule):
        self.legacy = legacy
        self.id = legacy.id
        self.name = legacy.name
        self.aip = legacy.aip
        self.severity = legacy.severity
        self.description = legacy.description
        self.category_override = legacy.category

    def check_spec(self, spec: dict, ctx: RuleContext) -> list[Finding]:
        results = self.legacy.check(spec, ctx) or []
        return [r if isinstance(r, Finding) else Finding.model_validate(r) for r in results]
