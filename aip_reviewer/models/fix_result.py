"""
Fix Result Model
================
Pydantic models tracking the outcome of applying fixes.

Fields:
    ChangeLogEntry  — one SpecChange with its own applied flag and error text
    FixResult       — one finding's fix; applied only if every change applied
    FixSummary      — total / applied / failed fixes and total change count
    FixError        — one entry per failed change, tagged with its rule id
    FixOutcome      — final spec plus results and summary (apply_all_fixes)
"""
from typing import Any, Optional

from pydantic import Field

from .base import CamelModel
from .finding import SpecChange


class ChangeLogEntry(CamelModel):
    change: SpecChange
    applied: bool
    error: Optional[str] = None


class FixResult(CamelModel):
    rule_id: str
    applied: bool
    changes: list[ChangeLogEntry] = Field(default_factory=list)


class FixSummary(CamelModel):
    total: int = 0
    applied: int = 0
    failed: int = 0
    changes: int = 0


class FixError(CamelModel):
    rule_id: str
    error: str


class FixOutcome(CamelModel):
    spec: Any
    results: list[FixResult] = Field(default_factory=list)
    summary: FixSummary = Field(default_factory=FixSummary)
