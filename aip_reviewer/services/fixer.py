"""
Fixer
=====
Applies the structured fixes attached to Findings to an OpenAPI document.

CONTRACT:
  - Not dry-run: the input spec is deep-copied at construction; the
    caller's tree is never mutated.  get_spec() returns the working copy.
  - Dry-run: the caller's tree is referenced, no mutation function runs and
    every change is recorded as applied without any precondition check.
  - A Fix's spec_changes run in order.  A failing change does not stop the
    following ones and earlier changes are not rolled back.
  - apply_fix() never raises for a bad change: every failure is returned
    as a ChangeLogEntry.error string.
  - A Finding without a fix is not logged.  The summary counts changes
    that were actually applied.

Operations:
    rename-key  parent object at path; from must exist, to must not;
                sibling order is preserved
    set         write value, creating missing intermediate objects
    add         append to an array, creating [value] when absent
    remove      delete if present; absent is a successful no-op
    merge       extend arrays / update objects; initialise when absent
"""
import copy
import logging
from typing import Any, Iterable, Union

from aip_reviewer.models.finding import Finding, SpecChange, SpecChangeOperation
from aip_reviewer.models.fix_result import (
    ChangeLogEntry,
    FixError,
    FixOutcome,
    FixResult,
    FixSummary,
)
from aip_reviewer.utils.jsonpath import MISSING, JsonPathError, resolve, resolve_parent

logger = logging.getLogger(__name__)


class SpecChangeError(ValueError):
    """A change's preconditions do not hold against the current tree."""


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


# ---------------------------------------------------------------------------
# Container helpers (dict keys or list indices)
# ---------------------------------------------------------------------------
def _get(parent: Any, key: str, path: str) -> Any:
    if isinstance(parent, dict):
        return parent.get(key, MISSING)
    index = _index(key, path)
    return parent[index] if index < len(parent) else MISSING


def _put(parent: Any, key: str, value: Any, path: str) -> None:
    if isinstance(parent, dict):
        parent[key] = value
        return
    index = _index(key, path)
    if index < len(parent):
        parent[index] = value
    elif index == len(parent):
        parent.append(value)
    else:
        raise SpecChangeError(f"Index {index} out of range at {path}")


def _index(key: str, path: str) -> int:
    if not key.isdigit():
        raise SpecChangeError(f"Expected array index at {path}, got '{key}'")
    return int(key)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
def _rename_key(spec: Any, change: SpecChange) -> None:
    if change.from_key is None or change.to is None:
        raise SpecChangeError("rename-key requires from and to")

    parent = resolve(spec, change.path)
    if parent is MISSING or parent is None:
        raise SpecChangeError(f"Cannot resolve parent at {change.path}")
    if not isinstance(parent, dict):
        raise SpecChangeError(f"Expected object at {change.path}, got {json_type_name(parent)}")
    if change.from_key not in parent:
        raise SpecChangeError(f"Key '{change.from_key}' not found at {change.path}")
    if change.to in parent:
        raise SpecChangeError(f"Key '{change.to}' already exists at {change.path}")

    items = list(parent.items())
    parent.clear()
    for key, value in items:
        parent[change.to if key == change.from_key else key] = value


def _set(spec: Any, change: SpecChange) -> None:
    parent, key = resolve_parent(spec, change.path)
    _put(parent, key, copy.deepcopy(change.value), change.path)


def _add(spec: Any, change: SpecChange) -> None:
    parent, key = resolve_parent(spec, change.path)
    target = _get(parent, key, change.path)
    if target is MISSING:
        _put(parent, key, [copy.deepcopy(change.value)], change.path)
    elif isinstance(target, list):
        target.append(copy.deepcopy(change.value))
    else:
        raise SpecChangeError(f"Expected array at {change.path}, got {json_type_name(target)}")


def _remove(spec: Any, change: SpecChange) -> None:
    parent, key = resolve_parent(spec, change.path)
    if isinstance(parent, dict):
        parent.pop(key, None)
    elif key.isdigit() and int(key) < len(parent):
        del parent[int(key)]


def _merge(spec: Any, change: SpecChange) -> None:
    parent, key = resolve_parent(spec, change.path)
    target = _get(parent, key, change.path)
    value = copy.deepcopy(change.value)

    if target is MISSING:
        if isinstance(value, (list, dict)):
            _put(parent, key, value, change.path)
            return
        raise SpecChangeError(f"Cannot initialize merge with {json_type_name(value)}")

    if isinstance(target, list) and isinstance(value, list):
        target.extend(value)
    elif isinstance(target, dict) and isinstance(value, dict):
        target.update(value)
    else:
        raise SpecChangeError(
            f"Cannot merge {json_type_name(value)} into {json_type_name(target)} at {change.path}"
        )


OPERATIONS = {
    SpecChangeOperation.RENAME_KEY: _rename_key,
    SpecChangeOperation.SET: _set,
    SpecChangeOperation.ADD: _add,
    SpecChangeOperation.REMOVE: _remove,
    SpecChangeOperation.MERGE: _merge,
}


# ---------------------------------------------------------------------------
# Fixer
# ---------------------------------------------------------------------------
class Fixer:
    """
    Applies Finding fixes to a private copy of a spec.

    Parameters
    ----------
    spec : dict
        Parsed OpenAPI document.
    dry_run : bool
        Record what would be applied without touching the tree.
    """

    def __init__(self, spec: dict, dry_run: bool = False):
        self.dry_run = dry_run
        self._spec = spec if dry_run else copy.deepcopy(spec)
        self._log: list[FixResult] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def apply_fix(self, finding: Union[Finding, dict]) -> FixResult:
        finding = _as_finding(finding)
        if finding.fix is None:
            # Nothing to apply; kept out of the log and summary
            return FixResult(rule_id=finding.rule_id, applied=False, changes=[])

        entries: list[ChangeLogEntry] = []
        for change in finding.fix.spec_changes:
            if self.dry_run:
                entries.append(ChangeLogEntry(change=change, applied=True))
                continue
            try:
                self._apply_change(change)
                entries.append(ChangeLogEntry(change=change, applied=True))
            except (SpecChangeError, JsonPathError) as exc:
                logger.debug("Change %s on %s failed for %s: %s",
                             change.operation, change.path, finding.rule_id, exc)
                entries.append(ChangeLogEntry(change=change, applied=False, error=str(exc)))

        result = FixResult(
            rule_id=finding.rule_id,
            applied=all(e.applied for e in entries),
            changes=entries,
        )
        self._log.append(result)
        return result

    def apply_fixes(self, findings: Iterable[Union[Finding, dict]]) -> list[FixResult]:
        results: list[FixResult] = []
        for finding in findings:
            finding = _as_finding(finding)
            if finding.fix is not None:
                results.append(self.apply_fix(finding))
        return results

    def get_spec(self) -> dict:
        return self._spec

    def get_log(self) -> list[FixResult]:
        return list(self._log)

    def get_summary(self) -> FixSummary:
        applied = sum(1 for r in self._log if r.applied)
        return FixSummary(
            total=len(self._log),
            applied=applied,
            failed=len(self._log) - applied,
            changes=sum(1 for r in self._log for entry in r.changes if entry.applied),
        )

    def get_errors(self) -> list[FixError]:
        errors: list[FixError] = []
        for result in self._log:
            for entry in result.changes:
                if entry.error:
                    errors.append(FixError(rule_id=result.rule_id, error=entry.error))
        return errors

    def has_errors(self) -> bool:
        return any(entry.error for result in self._log for entry in result.changes)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _apply_change(self, change: SpecChange) -> None:
        operation = OPERATIONS.get(change.operation)
        if operation is None:
            raise SpecChangeError(f"Unknown operation: {change.operation}")
        operation(self._spec, change)


def _as_finding(finding: Union[Finding, dict]) -> Finding:
    if isinstance(finding, Finding):
        return finding
    return Finding.model_validate(finding)


def apply_all_fixes(spec: dict, findings: Iterable[Union[Finding, dict]], dry_run: bool = False) -> FixOutcome:
    """Apply every fixable finding and return the resulting spec, log and summary."""
    fixer = Fixer(spec, dry_run=dry_run)
    results = fixer.apply_fixes(findings)
    summary = fixer.get_summary()
    logger.info("Applied %d/%d fixes (%d changes, dry_run=%s)",
                summary.applied, summary.total, summary.changes, dry_run)
    return FixOutcome(spec=fixer.get_spec(), results=results, summary=summary)
