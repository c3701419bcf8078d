"""
Finding Model
=============
Pydantic models for review output and the structured fixes attached to it.
This is the contract between the rule catalog, the reviewer and the fixer.

SpecChange fields:
    operation   — rename-key | set | add | remove | merge (kept as a plain
                  string so unknown operations fail inside the fixer, as data)
    path        — JSONPath subset, always relative to the document root ($)
    from_key    — serialised as "from"; old key for rename-key
    to          — new key for rename-key
    value       — payload for set / add / merge

Fix fields:
    type          — fix kind label (e.g. "rename-path-segment")
    json_path     — node the fix is about, for display
    spec_changes  — ordered; applied in sequence, non-transactionally

Finding fields:
    rule_id, severity, category — copied from the producing rule
    location        — human-readable locator ("GET /users", "/users")
    message         — what is wrong
    aip_reference   — "AIP-122"
    suggestion      — how to resolve it
    context         — free-form details (segment, suggestedParam, ...)
    fix             — optional machine-applicable Fix
"""
from typing import Any, Optional

from pydantic import Field

from .base import CamelModel


class SpecChangeOperation:
    RENAME_KEY = "rename-key"
    SET        = "set"
    ADD        = "add"
    REMOVE     = "remove"
    MERGE      = "merge"


class SpecChange(CamelModel):
    operation: str
    path: str
    from_key: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    value: Any = None


class Fix(CamelModel):
    type: str
    json_path: str
    spec_changes: list[SpecChange] = Field(default_factory=list)


class Finding(CamelModel):
    rule_id: str
    severity: str
    category: str
    location: str
    message: str
    aip_reference: Optional[str] = None
    suggestion: Optional[str] = None
    context: Optional[dict[str, Any]] = None
    fix: Optional[Fix] = None
