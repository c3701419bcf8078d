"""
Naming Heuristics
=================
Verb detection, custom-method detection and casing helpers for path segments.

Custom methods (AIP-136) are actions on a resource rather than resources:
    /v1/orders/{id}:cancel        colon syntax
    /v1/files/validate-hash       hyphenated, action verb first
    /v1/database/backup           bare action verb under a singleton
"""
import re

from aip_reviewer.utils import nlp

CUSTOM_METHOD_VERBS: frozenset[str] = frozenset({
    "validate", "verify", "check", "test",
    "export", "import", "download", "upload",
    "clear", "reset", "restore", "backup",
    "start", "stop", "pause", "resume",
    "enable", "disable", "toggle",
    "send", "publish", "notify",
    "archive", "unarchive", "approve", "reject", "cancel",
    "encrypt", "decrypt", "hash",
    "sync", "refresh", "reload",
    "train", "predict",
})

# Verb-prefixed words that are nouns in API vocabulary.
NOUN_EXCEPTIONS: frozenset[str] = frozenset({
    "checklist", "checklists", "checkout", "checkouts",
    "checkup", "checkups", "checksum", "checksums",
    "checkpoint", "checkpoints", "update", "updates",
    "search", "searches", "download", "downloads",
    "upload", "uploads", "listing", "listings",
})

VERB_PREFIX_PATTERN = re.compile(
    r"^(get|fetch|create|add|update|edit|delete|remove|list|find|search|retrieve)",
    re.IGNORECASE,
)

SNAKE_CASE = "snake_case"
KEBAB_CASE = "kebab-case"
CAMEL_CASE = "camelCase"
PASCAL_CASE = "PascalCase"
LOWERCASE = "lowercase"


# ---------------------------------------------------------------------------
# Verbs
# ---------------------------------------------------------------------------
def is_verb_segment(segment: str) -> bool:
    """True if a path segment reads as an action rather than a resource."""
    if not segment:
        return False
    if segment.lower() in NOUN_EXCEPTIONS:
        return False

    match = VERB_PREFIX_PATTERN.match(segment)
    if match:
        rest = segment[match.end():]
        if rest and (rest[0] in "-_" or rest[0].isupper()):
            return True
        if len(rest) >= 3 and nlp.is_noun(rest):
            return True

    return nlp.is_verb(segment)


def strip_verb_prefix(segment: str) -> str:
    """"getUsers" -> "users"; falls back to "resource" when nothing is left."""
    stripped = VERB_PREFIX_PATTERN.sub("", segment).lstrip("-_")
    return stripped.lower() or "resource"


def _parent_of(segment: str, path: str) -> str:
    parts = path.split("/")
    for i in range(len(parts) - 1, -1, -1):
        if parts[i] == segment:
            return "/".join(parts[:i])
    return path.rsplit("/", 1)[0]


def is_custom_method(segment: str, path: str, singletons: set[str]) -> bool:
    if ":" in segment:
        return True

    lower = segment.lower()
    if "-" in lower and lower.split("-", 1)[0] in CUSTOM_METHOD_VERBS:
        return True

    if lower in CUSTOM_METHOD_VERBS:
        parent = _parent_of(segment, path)
        if parent in singletons or "{" in parent:
            return True

    return False


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------
def detect_casing_style(segment: str) -> str:
    if "_" in segment:
        return SNAKE_CASE
    if "-" in segment:
        return KEBAB_CASE
    if segment[:1].islower() and any(c.isupper() for c in segment):
        return CAMEL_CASE
    if segment[:1].isupper():
        return PASCAL_CASE
    return LOWERCASE


def convert_casing(segment: str, style: str) -> str:
    words = [w.lower() for w in nlp.split_words(segment)]
    if not words:
        return segment
    if style == SNAKE_CASE:
        return "_".join(words)
    if style == KEBAB_CASE:
        return "-".join(words)
    if style == CAMEL_CASE:
        return words[0] + "".join(w.capitalize() for w in words[1:])
    if style == PASCAL_CASE:
        return "".join(w.capitalize() for w in words)
    return "".join(words)


def is_snake_case(name: str) -> bool:
    return re.fullmatch(r"[a-z][a-z0-9]*(_[a-z0-9]+)*", name) is not None


def is_pascal_case(name: str) -> bool:
    return re.fullmatch(r"[A-Z][a-zA-Z0-9]*", name) is not None
