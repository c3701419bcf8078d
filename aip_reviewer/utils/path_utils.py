"""
Path Utils
==========
Segment-level helpers for OpenAPI path templates.

Responsibilities:
    - Split a path template into resource segments
    - Recognise version prefixes (v1, v2.1, api) and path parameters
    - Rename a single segment while keeping the rest of the path intact
    - Decide whether a path addresses a collection (List) endpoint
"""
import re

from aip_reviewer.utils import nlp
from aip_reviewer.utils.naming import is_custom_method

VERSION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^v\d+$", re.IGNORECASE),
    re.compile(r"^v\d+\.\d+$", re.IGNORECASE),
    re.compile(r"^api$", re.IGNORECASE),
)

# Leaf names that address a single well-known endpoint, never a collection.
SINGLETON_ENDPOINTS: frozenset[str] = frozenset({
    "health", "healthz", "ready", "readyz", "live", "livez",
    "status", "info", "version", "config", "configuration", "settings",
    "me", "self", "current",
    "auth", "login", "logout", "register", "verify", "refresh", "token",
    "callback", "webhook", "webhooks",
    "metrics", "stats", "statistics", "analytics",
    "ping", "echo", "debug",
    "swagger", "openapi", "docs", "graphql",
})


def is_version_prefix(segment: str) -> bool:
    return any(p.match(segment) for p in VERSION_PATTERNS)


def is_path_parameter(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def get_segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def get_resource_segments(path: str) -> list[str]:
    """Non-empty segments that are neither parameters nor colon custom methods."""
    return [s for s in get_segments(path) if not is_path_parameter(s) and ":" not in s]


def compute_renamed_path(path: str, old_segment: str, new_segment: str) -> str:
    """Replace every exact occurrence of a segment, leaving other segments alone."""
    return "/".join(new_segment if s == old_segment else s for s in path.split("/"))


def is_collection_endpoint(path: str) -> bool:
    """
    True when the last segment names a plural resource collection
    (``/v1/users``), false for ``/v1/users/{id}``, ``/health`` or ``/me``.
    """
    segments = get_segments(path)
    if not segments:
        return False
    last = segments[-1]

    if is_path_parameter(last) or ":" in last:
        return False
    if is_version_prefix(last):
        return False
    if last.lower() in SINGLETON_ENDPOINTS:
        return False
    if is_custom_method(last, path, set()):
        return False
    if nlp.is_uncountable(last):
        return False

    head = nlp.head_word(last)
    return nlp.is_noun(head) and nlp.is_plural(last)
