"""
Constants
=========
Centralised storage for severities, categories, HTTP method order and the
AIP catalogue shared by the rules, the reviewer and the report formatter.
"""

REVIEWER_VERSION = "2.0.0"
DEFAULT_SPEC_PATH = "<inline>"


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------
class Severity:
    """Finding severities.  Values are the serialised lowercase strings."""
    ERROR      = "error"
    WARNING    = "warning"
    SUGGESTION = "suggestion"


SEVERITIES: tuple[str, ...] = (Severity.ERROR, Severity.WARNING, Severity.SUGGESTION)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class Category:
    """Rule categories.  Order here is the order of ``byCategory`` in summaries."""
    NAMING           = "naming"
    STANDARD_METHODS = "standard-methods"
    ERRORS           = "errors"
    PAGINATION       = "pagination"
    FILTERING        = "filtering"
    LRO              = "lro"
    IDEMPOTENCY      = "idempotency"
    VERSIONING       = "versioning"
    SECURITY         = "security"


CATEGORIES: tuple[str, ...] = (
    Category.NAMING,
    Category.STANDARD_METHODS,
    Category.ERRORS,
    Category.PAGINATION,
    Category.FILTERING,
    Category.LRO,
    Category.IDEMPOTENCY,
    Category.VERSIONING,
    Category.SECURITY,
)


def category_for_aip(aip: int) -> str:
    """Map an AIP number to its rule category (naming when unknown)."""
    if aip in (122, 123, 140, 142):
        return Category.NAMING
    if 131 <= aip <= 136:
        return Category.STANDARD_METHODS
    if aip == 155:
        return Category.IDEMPOTENCY
    if aip == 158:
        return Category.PAGINATION
    if aip == 160:
        return Category.FILTERING
    if aip in (193, 194):
        return Category.ERRORS
    return Category.NAMING


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
# Traversal order for operations on a path item.
HTTP_METHODS: tuple[str, ...] = ("get", "post", "put", "patch", "delete", "options", "head")

# Error codes AIP-193 considers standard.
STANDARD_ERROR_CODES: frozenset[str] = frozenset({
    "400", "401", "403", "404", "405", "409", "412",
    "422", "429", "500", "501", "502", "503", "504",
})


# ---------------------------------------------------------------------------
# AIP metadata
# ---------------------------------------------------------------------------
AIP_METADATA: dict[int, dict[str, str]] = {
    122: {
        "title": "Resource Names",
        "summary": "URIs should use plural nouns, lowercase, hyphen-separated",
        "category": Category.NAMING,
    },
    123: {
        "title": "Resource Types",
        "summary": "Resource schemas should use UpperCamelCase singular names",
        "category": Category.NAMING,
    },
    131: {
        "title": "Standard Methods: Get",
        "summary": "GET requests should not have a request body",
        "category": Category.STANDARD_METHODS,
    },
    132: {
        "title": "Standard Methods: List",
        "summary": "List operations should support filtering and ordering",
        "category": Category.STANDARD_METHODS,
    },
    133: {
        "title": "Standard Methods: Create",
        "summary": "POST should return 201 Created with the created resource",
        "category": Category.STANDARD_METHODS,
    },
    134: {
        "title": "Standard Methods: Update",
        "summary": "Use PATCH for partial updates, support field masks",
        "category": Category.STANDARD_METHODS,
    },
    135: {
        "title": "Standard Methods: Delete",
        "summary": "DELETE should be idempotent",
        "category": Category.STANDARD_METHODS,
    },
    140: {
        "title": "Field Names",
        "summary": "Field names should be lower_snake_case",
        "category": Category.NAMING,
    },
    142: {
        "title": "Time and Duration",
        "summary": "Timestamp fields should end in _time and use date-time format",
        "category": Category.NAMING,
    },
    155: {
        "title": "Request Identification",
        "summary": "Support Idempotency-Key header for POST requests",
        "category": Category.IDEMPOTENCY,
    },
    158: {
        "title": "Pagination",
        "summary": "List endpoints should use page_token and page_size parameters",
        "category": Category.PAGINATION,
    },
    160: {
        "title": "Filtering",
        "summary": "List endpoints should support filter expressions",
        "category": Category.FILTERING,
    },
    193: {
        "title": "Errors",
        "summary": "Use consistent error schema with code, message, and details",
        "category": Category.ERRORS,
    },
}


def get_aip_info(aip: int) -> dict[str, str] | None:
    return AIP_METADATA.get(aip)


def implemented_aips() -> list[int]:
    return sorted(AIP_METADATA)
