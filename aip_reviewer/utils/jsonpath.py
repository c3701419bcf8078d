"""
JSONPath Subset
===============
Builders, parser and resolver for the restricted path syntax used by fixes.

Supported syntax (always rooted at ``$``):
    $.paths                         dot key
    $.paths['/users/{id}']          quoted bracket key (single or double)
    $.components[schemas]           bare bracket key
    $.paths['/users'].get.parameters[0]   numeric index

Filters, wildcards, slices and recursive descent are not supported.
"""
from enum import Enum
from typing import Any

MISSING = object()


class JsonPathError(ValueError):
    """A path cannot be walked for mutation."""


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
def quote_key(key: str) -> str:
    if "'" in key:
        return f'["{key}"]'
    return f"['{key}']"


def path_to_json_path(path: str) -> str:
    return f"$.paths{quote_key(path)}"


def operation_to_json_path(path: str, method: str) -> str:
    return f"{path_to_json_path(path)}.{method.lower()}"


def parameters_to_json_path(path: str, method: str) -> str:
    return f"{operation_to_json_path(path, method)}.parameters"


def parameter_to_json_path(path: str, method: str, index: int) -> str:
    return f"{parameters_to_json_path(path, method)}[{index}]"


def responses_to_json_path(path: str, method: str) -> str:
    return f"{operation_to_json_path(path, method)}.responses"


def schema_to_json_path(name: str) -> str:
    return f"$.components.schemas{quote_key(name)}"


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
class _State(Enum):
    PLAIN = "plain"
    IN_BRACKET = "in_bracket"
    IN_QUOTED = "in_quoted"


def parse_segments(path: str) -> list[str]:
    """
    Split a JSONPath-subset string into key segments.

    >>> parse_segments("$.paths['/users'].get")
    ['paths', '/users', 'get']
    """
    if path.startswith("$"):
        path = path[1:]
        if path.startswith("."):
            path = path[1:]

    segments: list[str] = []
    current = ""
    state = _State.PLAIN
    quote = ""

    for char in path:
        if state is _State.IN_QUOTED:
            if char == quote:
                state = _State.IN_BRACKET
            else:
                current += char
        elif state is _State.IN_BRACKET:
            if char in ("'", '"'):
                quote = char
                state = _State.IN_QUOTED
            elif char == "]":
                segments.append(current)
                current = ""
                state = _State.PLAIN
            else:
                current += char
        elif char == ".":
            if current:
                segments.append(current)
            current = ""
        elif char == "[":
            if current:
                segments.append(current)
            current = ""
            state = _State.IN_BRACKET
        else:
            current += char

    if current:
        segments.append(current)
    return segments


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------
def _step(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, MISSING)
    if isinstance(node, list) and segment.isdigit():
        index = int(segment)
        return node[index] if index < len(node) else MISSING
    return MISSING


def resolve(root: Any, path: str) -> Any:
    """Value at ``path`` or MISSING when any step is absent."""
    node = root
    for segment in parse_segments(path):
        node = _step(node, segment)
        if node is MISSING:
            return MISSING
    return node


def resolve_parent(root: Any, path: str) -> tuple[Any, str]:
    """
    Walk all but the last segment, creating empty objects for missing
    intermediates, and return (parent, last_key).
    """
    segments = parse_segments(path)
    if not segments:
        raise JsonPathError("Cannot resolve parent of root")

    node = root
    for segment in segments[:-1]:
        child = _step(node, segment)
        if child is MISSING:
            if not isinstance(node, dict):
                raise JsonPathError(f"Cannot traverse through non-object at {segment}")
            child = {}
            node[segment] = child
        elif not isinstance(child, (dict, list)):
            raise JsonPathError(f"Cannot traverse through non-object at {segment}")
        node = child
    return node, segments[-1]
