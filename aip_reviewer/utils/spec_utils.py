"""
Spec Utils
==========
Read-only accessors for the well-known parts of an OpenAPI document tree.
"""
from typing import Any, Optional

JSON_MEDIA_PREFERENCE = ("application/json", "*/*")


def resolve_ref(spec: dict, ref: str) -> Optional[Any]:
    """Resolve a local ``#/a/b`` reference; None for external or broken refs."""
    if not isinstance(ref, str) or not ref.startswith("#/"):
        return None
    node: Any = spec
    for raw in ref[2:].split("/"):
        key = raw.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def deref(spec: dict, node: Any) -> Any:
    if isinstance(node, dict) and "$ref" in node:
        return resolve_ref(spec, node["$ref"])
    return node


def get_parameters(operation: dict) -> list[dict]:
    params = operation.get("parameters") or []
    return [p for p in params if isinstance(p, dict)]


def has_parameter(operation: dict, names: tuple[str, ...], location: Optional[str] = None) -> bool:
    for param in get_parameters(operation):
        if param.get("name") in names and (location is None or param.get("in") == location):
            return True
    return False


def get_response_media(operation: dict, status: str, spec: dict) -> Optional[tuple[str, dict]]:
    """
    Return (media_type, media_object) for a response, preferring
    application/json, then */*, then the first declared media type.
    """
    responses = operation.get("responses") or {}
    response = deref(spec, responses.get(status))
    if not isinstance(response, dict):
        return None
    content = response.get("content") or {}
    if not isinstance(content, dict) or not content:
        return None
    for media_type in JSON_MEDIA_PREFERENCE:
        if isinstance(content.get(media_type), dict):
            return media_type, content[media_type]
    media_type, media = next(iter(content.items()))
    return (media_type, media) if isinstance(media, dict) else None


def get_response_schema(operation: dict, status: str, spec: dict) -> Optional[dict]:
    found = get_response_media(operation, status, spec)
    if found is None:
        return None
    schema = deref(spec, found[1].get("schema"))
    return schema if isinstance(schema, dict) else None


def schema_ref_name(ref: str) -> Optional[str]:
    prefix = "#/components/schemas/"
    if isinstance(ref, str) and ref.startswith(prefix):
        return ref[len(prefix):]
    return None
