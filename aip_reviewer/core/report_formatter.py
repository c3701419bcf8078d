"""
Report Formatter
================
Renders ReviewResults and fix summaries for the CLI.

DETERMINISM CONTRACT:
  - Never reads environment variables.
  - Findings are grouped by severity, keeping traversal order inside a group.
  - Given the same result, always returns the same string.

Formats:
    console   coloured (optional) text grouped by severity
    markdown  headed sections with a YAML block per machine-readable fix
    json      the camelCase ReviewResult document
    summary   a single line
"""
import json

import yaml

from aip_reviewer.core.constants import Severity, get_aip_info
from aip_reviewer.models.finding import Finding, Fix
from aip_reviewer.models.fix_result import FixOutcome
from aip_reviewer.models.review_result import ReviewResult

FORMATS = ("console", "json", "markdown", "summary")


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------
class _Colors:
    red = "\x1b[31m"
    yellow = "\x1b[33m"
    blue = "\x1b[38;5;39m"
    green = "\x1b[32m"
    gray = "\x1b[90m"
    bold = "\x1b[1m"
    reset = "\x1b[0m"


class _NoColors:
    red = yellow = blue = green = gray = bold = reset = ""


# (severity, markdown heading, console label, colour attribute)
SEVERITY_SECTIONS = (
    (Severity.ERROR, "### 🔴 Errors (MUST fix)", "Errors", "red"),
    (Severity.WARNING, "### 🟡 Warnings (SHOULD fix)", "Warnings", "yellow"),
    (Severity.SUGGESTION, "### 💡 Suggestions (MAY improve)", "Suggestions", "blue"),
)


def _by_severity(result: ReviewResult, severity: str) -> list[Finding]:
    return [f for f in result.findings if f.severity == severity]


def _summary_line(result: ReviewResult) -> str:
    s = result.summary
    return f"{s.errors} errors, {s.warnings} warnings, {s.suggestions} suggestions"


# ---------------------------------------------------------------------------
# JSON / summary
# ---------------------------------------------------------------------------
def format_json(result: ReviewResult) -> str:
    return json.dumps(result.to_json_dict(), indent=2, ensure_ascii=False)


def format_summary(result: ReviewResult) -> str:
    mark = "✗" if result.has_errors() else "✓"
    return f"{mark} {result.spec_path}: {_summary_line(result)}"


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------
def format_fix_yaml(fix: Fix) -> str:
    return yaml.safe_dump(fix.to_json_dict(), sort_keys=False, allow_unicode=True).rstrip()


def _finding_markdown(finding: Finding) -> str:
    lines = [
        f"- `{finding.location}` — {finding.message}",
        f"  - **Rule:** `{finding.rule_id}`",
    ]
    if finding.aip_reference:
        lines.append(f"  - **Reference:** {finding.aip_reference}")
    if finding.suggestion:
        lines.append(f"  - **Suggestion:** {finding.suggestion}")
    if finding.fix is not None:
        lines.extend(["", "  <details>", "  <summary>Machine-readable fix</summary>", "", "  ```yaml"])
        lines.extend(f"  {line}" for line in format_fix_yaml(finding.fix).splitlines())
        lines.extend(["  ```", "", "  </details>"])
    return "\n".join(lines)


def format_markdown(result: ReviewResult) -> str:
    lines = [f"## API Review: {result.spec_path}", ""]
    if result.spec_title:
        lines.append(f"**Title:** {result.spec_title}")
    if result.spec_version:
        lines.append(f"**Version:** {result.spec_version}")
    lines.extend([f"**Reviewed:** {result.metadata.reviewed_at}", ""])

    for severity, heading, _, _ in SEVERITY_SECTIONS:
        findings = _by_severity(result, severity)
        if not findings:
            continue
        lines.extend([heading, ""])
        lines.extend(_finding_markdown(f) for f in findings)
        lines.append("")

    if not result.findings:
        lines.extend(["### ✅ No issues found!", ""])

    lines.extend(["---", "", f"**Summary:** {_summary_line(result)}"])
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------
def format_console(result: ReviewResult, use_colors: bool = True) -> str:
    c = _Colors if use_colors else _NoColors
    lines = ["", f"{c.bold}API Review: {result.spec_path}{c.reset}", ""]

    for severity, _, label, color in SEVERITY_SECTIONS:
        findings = _by_severity(result, severity)
        if not findings:
            continue
        lines.append(f"{getattr(c, color)}{c.bold}{label} ({len(findings)}){c.reset}")
        for finding in findings:
            lines.append(f"  {finding.location}")
            lines.append(f"    {finding.message} {c.gray}[{finding.rule_id}]{c.reset}")
            if finding.suggestion:
                lines.append(f"    {c.green}→ {finding.suggestion}{c.reset}")
        lines.append("")

    if not result.findings:
        lines.extend([f"{c.green}No issues found!{c.reset}", ""])

    lines.append(f"{c.bold}Summary:{c.reset} {_summary_line(result)}")
    return "\n".join(lines)


def format_review(result: ReviewResult, fmt: str = "console", use_colors: bool = True) -> str:
    if fmt == "json":
        return format_json(result)
    if fmt == "markdown":
        return format_markdown(result)
    if fmt == "summary":
        return format_summary(result)
    if fmt == "console":
        return format_console(result, use_colors)
    raise ValueError(f"Unknown format: {fmt} (expected one of {', '.join(FORMATS)})")


# ---------------------------------------------------------------------------
# Fixes
# ---------------------------------------------------------------------------
def format_fix_summary(outcome: FixOutcome, dry_run: bool = False) -> str:
    s = outcome.summary
    prefix = "Would apply" if dry_run else "Applied"
    lines = [f"{prefix} {s.applied}/{s.total} fixes ({s.changes} changes, {s.failed} failed)"]
    for result in outcome.results:
        mark = "✓" if result.applied else "✗"
        lines.append(f"  {mark} {result.rule_id}")
        for entry in result.changes:
            if entry.error:
                lines.append(f"      {entry.change.operation} {entry.change.path}: {entry.error}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Rule listing
# ---------------------------------------------------------------------------
def format_rule_list(rules: list[dict]) -> str:
    """Rule descriptors grouped under their AIP heading."""
    lines: list[str] = []
    for aip in sorted({r["aip"] for r in rules}):
        info = get_aip_info(aip) or {}
        lines.append(f"AIP-{aip} {info.get('title', '')}".rstrip())
        for rule in (r for r in rules if r["aip"] == aip):
            lines.append(f"  {rule['id']:<34} {rule['severity']:<10} {rule['description']}")
    return "\n".join(lines)
