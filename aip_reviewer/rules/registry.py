"""
Rule Registry & Catalog
=======================
RuleRegistry is the mutable builder: rules grouped by AIP number, queried by
id, category or kind.  RuleCatalog is the immutable snapshot a Reviewer runs
with, partitioned by RuleKind once at construction.

Nothing here is global: build_default_registry() / build_default_catalog()
return fresh objects, and callers pass the catalog they built to Reviewer.
"""
import logging
from typing import Iterable, Optional

from aip_reviewer.core.constants import SEVERITIES
from aip_reviewer.rules import aip122, aip131, aip132, aip133, aip134, aip135
from aip_reviewer.rules import aip140, aip142, aip155, aip158, aip193
from aip_reviewer.rules.base import BaseRule, LegacyRule, LegacyRuleAdapter, RuleKind

logger = logging.getLogger(__name__)

DEFAULT_RULE_MODULES = (
    aip122, aip131, aip132, aip133, aip134, aip135,
    aip140, aip142, aip155, aip158, aip193,
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class RuleRegistry:

    def __init__(self):
        self._by_aip: dict[int, list[BaseRule]] = {}
        self._by_id: dict[str, BaseRule] = {}

    def register(self, rule: BaseRule) -> "RuleRegistry":
        if rule.id in self._by_id:
            raise ValueError(f"Duplicate rule id: {rule.id}")
        if rule.severity not in SEVERITIES:
            raise ValueError(f"Rule {rule.id} has unknown severity: {rule.severity}")
        self._by_id[rule.id] = rule
        self._by_aip.setdefault(rule.aip, []).append(rule)
        return self

    def register_all(self, rules: Iterable[BaseRule]) -> "RuleRegistry":
        for rule in rules:
            self.register(rule)
        return self

    def all(self) -> list[BaseRule]:
        return list(self._by_id.values())

    def by_aip(self, aip: int) -> list[BaseRule]:
        return list(self._by_aip.get(aip, []))

    def by_category(self, category: str) -> list[BaseRule]:
        return [r for r in self._by_id.values() if r.category == category]

    def by_id(self, rule_id: str) -> Optional[BaseRule]:
        return self._by_id.get(rule_id)

    def by_kind(self, kind: RuleKind) -> list[BaseRule]:
        return [r for r in self._by_id.values() if r.kind is kind]

    def aips(self) -> list[int]:
        return sorted(self._by_aip)

    def __len__(self):
        return len(self._by_id)

    def __contains__(self, rule_id: str):
        return rule_id in self._by_id


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class RuleCatalog:
    """Ordered, immutable, kind-partitioned rule set."""

    __slots__ = ("_rules", "_partitions")

    def __init__(self, rules: Iterable[BaseRule] = ()):
        ordered = tuple(rules)
        ids = [r.id for r in ordered]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule ids: {', '.join(duplicates)}")

        partitions: dict[RuleKind, list[BaseRule]] = {kind: [] for kind in RuleKind}
        for rule in ordered:
            partitions[rule.kind].append(rule)

        object.__setattr__(self, "_rules", ordered)
        object.__setattr__(self, "_partitions", {k: tuple(v) for k, v in partitions.items()})

    def __setattr__(self, name, value):
        raise AttributeError("RuleCatalog is immutable")

    @classmethod
    def from_registry(cls, registry: RuleRegistry) -> "RuleCatalog":
        return cls(registry.all())

    @property
    def rules(self) -> tuple[BaseRule, ...]:
        return self._rules

    @property
    def rule_ids(self) -> list[str]:
        return [r.id for r in self._rules]

    def partition(self, kind: RuleKind) -> tuple[BaseRule, ...]:
        return self._partitions[kind]

    def filtered(
        self,
        categories: Optional[Iterable[str]] = None,
        skip_rules: Optional[Iterable[str]] = None,
    ) -> "RuleCatalog":
        rules = list(self._rules)
        if categories:
            wanted = set(categories)
            rules = [r for r in rules if r.category in wanted]
        if skip_rules:
            skipped = set(skip_rules)
            rules = [r for r in rules if r.id not in skipped]
        return RuleCatalog(rules)

    def extended(self, rules: Iterable[BaseRule]) -> "RuleCatalog":
        return RuleCatalog((*self._rules, *rules))

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __repr__(self):
        return f"<RuleCatalog {len(self._rules)} rules>"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
def build_default_registry() -> RuleRegistry:
    registry = RuleRegistry()
    for module in DEFAULT_RULE_MODULES:
        registry.register_all(rule_cls() for rule_cls in module.RULE_CLASSES)
    logger.debug("Default registry built with %d rules across AIPs %s", len(registry), registry.aips())
    return registry


def build_default_catalog() -> RuleCatalog:
    return RuleCatalog.from_registry(build_default_registry())


def adapt_legacy_rules(rules: Iterable[LegacyRule]) -> list[BaseRule]:
    return [r if isinstance(r, BaseRule) else LegacyRuleAdapter(r) for r in rules]


def list_rules(
    registry: Optional[RuleRegistry] = None,
    aip: Optional[int] = None,
    category: Optional[str] = None,
) -> list[dict]:
    """Describe rules, narrowed by AIP number or else by category."""
    registry = registry or build_default_registry()
    if aip is not None:
        rules = registry.by_aip(aip)
    elif category:
        rules = registry.by_category(category)
    else:
        rules = registry.all()
    return [r.describe() for r in rules]
