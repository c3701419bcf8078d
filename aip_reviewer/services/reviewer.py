"""
Reviewer
========
Runs the rule catalog over an OpenAPI document tree in one traversal.

TRAVERSAL CONTRACT (fixes the order of ReviewResult.findings):
  1. SPEC rules, once.
  2. For each path in document order:
       PATH rules;
       for each method in get, post, put, patch, delete, options, head:
         OPERATION rules (filtered by rule.methods),
         then each parameter in array order: PARAMETER rules
         (filtered by rule.locations).
  3. For each components.schemas entry in document order:
       SCHEMA rules, then each property: PROPERTY rules.

FAILURE CONTRACT:
  - A rule raising is caught per (rule, element), logged, and contributes
    nothing for that element.  review() itself never raises on rule errors.

STRICT MODE:
  - After traversal every warning becomes an error; summary counts are
    computed afterwards.  Suggestions and errors are untouched.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from aip_reviewer.core import config
from aip_reviewer.core.constants import DEFAULT_SPEC_PATH, HTTP_METHODS, REVIEWER_VERSION, Severity
from aip_reviewer.models.finding import Finding
from aip_reviewer.models.review_result import ReviewMetadata, ReviewResult, ReviewSummary
from aip_reviewer.rules.base import BaseRule, LegacyRule, RuleContext, RuleKind, SpecIndex
from aip_reviewer.rules.registry import RuleCatalog, adapt_legacy_rules, build_default_catalog
from aip_reviewer.utils.spec_utils import get_parameters

logger = logging.getLogger(__name__)


@dataclass
class ReviewerConfig:
    """
    Parameters
    ----------
    strict : bool
        Promote warnings to errors after the pass.
    categories : list[str]
        Only run default rules in these categories (all when empty).
    skip_rules : list[str]
        Rule ids to drop from the catalog.
    custom_rules : list[LegacyRule]
        Whole-spec rules appended after filtering.
    """
    strict: bool = False
    categories: list[str] = field(default_factory=list)
    skip_rules: list[str] = field(default_factory=list)
    custom_rules: list[LegacyRule] = field(default_factory=list)

    @classmethod
    def from_env(cls, **overrides) -> "ReviewerConfig":
        values: dict[str, Any] = {
            "strict": config.env_bool("REVIEW_STRICT", config.REVIEW_STRICT),
            "categories": config.env_list("REVIEW_CATEGORIES"),
            "skip_rules": config.env_list("REVIEW_SKIP_RULES"),
        }
        values.update(overrides)
        return cls(**values)


class Reviewer:
    """
    Reviews OpenAPI document trees against the AIP rule catalog.

    Parameters
    ----------
    config : ReviewerConfig, optional
        Strict mode and catalog filters.
    catalog : RuleCatalog, optional
        Base catalog to filter; a fresh default catalog when omitted.
    """

    def __init__(self, config: Optional[ReviewerConfig] = None, catalog: Optional[RuleCatalog] = None):
        self.config = config or ReviewerConfig()
        base = catalog if catalog is not None else build_default_catalog()
        active = base.filtered(self.config.categories, self.config.skip_rules)
        if self.config.custom_rules:
            active = active.extended(adapt_legacy_rules(self.config.custom_rules))
        self.catalog = active
        logger.debug("Reviewer initialised with %d rules (strict=%s)", len(active), self.config.strict)

    @property
    def rules(self) -> tuple[BaseRule, ...]:
        return self.catalog.rules

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def review(self, spec: dict, spec_path: str = DEFAULT_SPEC_PATH) -> ReviewResult:
        index = SpecIndex(spec)
        findings: list[Finding] = []

        self._run_spec_rules(spec, index, findings)
        self._run_path_rules(spec, index, findings)
        self._run_schema_rules(spec, index, findings)

        if self.config.strict:
            for finding in findings:
                if finding.severity == Severity.WARNING:
                    finding.severity = Severity.ERROR

        info = spec.get("info") if isinstance(spec.get("info"), dict) else {}
        result = ReviewResult(
            spec_path=spec_path,
            spec_title=info.get("title"),
            spec_version=None if info.get("version") is None else str(info.get("version")),
            findings=findings,
            summary=ReviewSummary.from_findings(findings),
            metadata=ReviewMetadata(
                reviewed_at=datetime.now(timezone.utc).isoformat(),
                reviewer_version=REVIEWER_VERSION,
                rules_applied=self.catalog.rule_ids,
            ),
        )
        logger.info(
            "Reviewed %s: %d errors, %d warnings, %d suggestions",
            spec_path, result.summary.errors, result.summary.warnings, result.summary.suggestions,
        )
        return result

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def _run_spec_rules(self, spec: dict, index: SpecIndex, findings: list[Finding]) -> None:
        for rule in self.catalog.partition(RuleKind.SPEC):
            self._invoke(rule, "spec", findings, lambda ctx: rule.check_spec(spec, ctx), spec, index)

    def _run_path_rules(self, spec: dict, index: SpecIndex, findings: list[Finding]) -> None:
        path_rules = self.catalog.partition(RuleKind.PATH)
        operation_rules = self.catalog.partition(RuleKind.OPERATION)
        parameter_rules = self.catalog.partition(RuleKind.PARAMETER)

        for path, path_item in (spec.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                path_item = {}
            for rule in path_rules:
                self._invoke(rule, path, findings,
                             lambda ctx: rule.check_path(path, path_item, spec, ctx), spec, index)

            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if not isinstance(operation, dict):
                    continue
                location = f"{method.upper()} {path}"

                for rule in operation_rules:
                    if not rule.applies_to(method):
                        continue
                    self._invoke(rule, location, findings,
                                 lambda ctx: rule.check_operation(method, operation, path, spec, ctx), spec, index)

                for param in get_parameters(operation):
                    for rule in parameter_rules:
                        if not rule.applies_to(param):
                            continue
                        self._invoke(rule, location, findings,
                                     lambda ctx: rule.check_parameter(param, method, path, spec, ctx), spec, index)

    def _run_schema_rules(self, spec: dict, index: SpecIndex, findings: list[Finding]) -> None:
        schema_rules = self.catalog.partition(RuleKind.SCHEMA)
        property_rules = self.catalog.partition(RuleKind.PROPERTY)
        components = spec.get("components") if isinstance(spec.get("components"), dict) else {}
        schemas = components.get("schemas") or {}
        if not isinstance(schemas, dict):
            return

        for name, schema in schemas.items():
            if not isinstance(schema, dict):
                continue
            location = f"components/schemas/{name}"
            for rule in schema_rules:
                self._invoke(rule, location, findings,
                             lambda ctx: rule.check_schema(name, schema, spec, ctx), spec, index)

            properties = schema.get("properties") or {}
            if not isinstance(properties, dict):
                continue
            for prop_name, prop in properties.items():
                if not isinstance(prop, dict):
                    continue
                for rule in property_rules:
                    self._invoke(rule, f"{location}/properties/{prop_name}", findings,
                                 lambda ctx: rule.check_property(prop_name, prop, name, spec, ctx), spec, index)

    @staticmethod
    def _invoke(
        rule: BaseRule,
        element: str,
        findings: list[Finding],
        check: Callable[[RuleContext], list[Finding]],
        spec: dict,
        index: SpecIndex,
    ) -> None:
        ctx = RuleContext.for_rule(rule, spec, index)
        try:
            findings.extend(check(ctx) or [])
        except Exception as exc:
            logger.warning("Rule %s threw error at %s: %s", rule.id, element, exc)


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------
def review_spec(spec: dict, spec_path: str = DEFAULT_SPEC_PATH, **options) -> ReviewResult:
    return Reviewer(ReviewerConfig(**options)).review(spec, spec_path)


def review_spec_strict(spec: dict, spec_path: str = DEFAULT_SPEC_PATH, **options) -> ReviewResult:
    options["strict"] = True
    return Reviewer(ReviewerConfig(**options)).review(spec, spec_path)
