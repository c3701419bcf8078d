"""
Singleton Resource Inference
============================
A singleton is a resource with exactly one instance per parent scope, so it
is correctly named with a singular noun (``/v1/users/{id}/settings``,
``/v1/database``).

Two passes over the declared path keys:

    1. A declared path without parameters is a singleton when no declared
       path has the form ``<path>/{param}``.
    2. Every ancestor prefix of a parameter-free path that is not itself
       declared becomes an implicit singleton when nothing beneath it is
       ``<prefix>/{param}``.  Covers ``/v1/database/backup`` and
       ``/v1/database/restore`` with no ``/v1/database``.

Version segments (v1, v2.1, api) never become singletons.  Both passes are
quadratic in the number of paths.
"""
import logging
import re

from aip_reviewer.utils.path_utils import get_segments, is_version_prefix

logger = logging.getLogger(__name__)


def infer_singleton_resources(spec: dict) -> set[str]:
    paths = list((spec.get("paths") or {}).keys()) if isinstance(spec, dict) else []
    declared = set(paths)
    singletons: set[str] = set()

    # Pass 1: declared paths with no {id} child
    for path in paths:
        if "{" in path or path == "/":
            continue
        child = re.compile("^" + re.escape(path) + r"/\{[^/]+\}$")
        if not any(child.match(other) for other in paths):
            segments = get_segments(path)
            if segments and is_version_prefix(segments[-1]):
                continue
            singletons.add(path)

    # Pass 2: implicit parents inferred from their children
    for path in paths:
        if "{" in path:
            continue
        segments = get_segments(path)
        for i in range(1, len(segments)):
            parent = "/" + "/".join(segments[:i])
            if parent in declared or is_version_prefix(segments[i - 1]):
                continue
            child = re.compile("^" + re.escape(parent) + r"/\{[^/]+\}")
            if not any(child.match(other) for other in paths):
                singletons.add(parent)

    logger.debug("Inferred %d singleton resources", len(singletons))
    return singletons


def is_singleton_path(path: str, singletons: set[str]) -> bool:
    if path in singletons:
        return True
    return any(path.startswith(s + "/") for s in singletons)
