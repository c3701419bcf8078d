"""
Review Result Model
===================
Pydantic model for the output of one review pass.

Fields:
    spec_path     — source label supplied by the caller ("<inline>" by default)
    spec_title    — info.title, when present
    spec_version  — info.version, when present
    findings      — ordered by traversal, never by severity or rule id
    summary       — counts computed after strict-mode promotion
    metadata      — timestamp, reviewer version and the rule ids that ran
"""
from typing import Optional

from pydantic import Field

from .base import CamelModel
from .finding import Finding
from aip_reviewer.core.constants import CATEGORIES, Severity


def _empty_categories() -> dict[str, int]:
    return {category: 0 for category in CATEGORIES}


class ReviewSummary(CamelModel):
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0
    by_category: dict[str, int] = Field(default_factory=_empty_categories)

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> "ReviewSummary":
        summary = cls()
        for finding in findings:
            if finding.severity == Severity.ERROR:
                summary.errors += 1
            elif finding.severity == Severity.WARNING:
                summary.warnings += 1
            elif finding.severity == Severity.SUGGESTION:
                summary.suggestions += 1
            summary.by_category[finding.category] = summary.by_category.get(finding.category, 0) + 1
        return summary


class ReviewMetadata(CamelModel):
    reviewed_at: str
    reviewer_version: str
    rules_applied: list[str] = Field(default_factory=list)


class ReviewResult(CamelModel):
    spec_path: str
    spec_title: Optional[str] = None
    spec_version: Optional[str] = None
    findings: list[Finding] = Field(default_factory=list)
    summary: ReviewSummary = Field(default_factory=ReviewSummary)
    metadata: ReviewMetadata

    def has_errors(self) -> bool:
        return self.summary.errors > 0

    def fixable(self) -> list[Finding]:
        return [f for f in self.findings if f.fix is not None]
