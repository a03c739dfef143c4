"""Resolve ``$ref`` pointers and flatten ``allOf`` in OpenAPI specifications.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition, and ``allOf``
lists to compose schemas.  This module performs a recursive rebuilding
traversal of the spec that:

* replaces every resolvable ``$ref`` with the (recursively resolved) object it
  points to,
* merges every ``allOf`` list into a single synthetic object schema,
* resolves each ``oneOf``/``anyOf`` variant in place while keeping the union
  wrapper itself.

Only **internal** references (those starting with ``#/``) are supported.
Anything else, and any pointer whose target does not exist, is passed through
verbatim so that rendering can carry on with imperfect input.

Circular references are detected via the set of ``$ref`` strings on the
active resolution path.  At the cycle point the reference is replaced by a
plain ``{"type": "object"}`` placeholder, which guarantees termination on
self-referencing and mutually-referencing schemas alike.

The input document is never mutated; every dict and list in the result is a
new object.

The single public function is :func:`resolve_refs`.
"""

from __future__ import annotations

import copy
from typing import Any

_MISSING = object()

_MERGE_SKIP_KEYS = frozenset({"properties", "required", "allOf"})


def resolve_refs(spec: dict[str, Any]) -> dict[str, Any]:
    """Resolve all ``$ref`` pointers and ``allOf`` compositions in the spec.

    Args:
        spec: The raw OpenAPI spec dictionary.

    Returns:
        A **new** dictionary with all resolvable ``$ref`` pointers replaced by
        their target objects and all ``allOf`` lists merged.

    Example::

        resolved = resolve_refs(raw)
        # resolved["paths"]["/pets"]["get"]["responses"]["200"]["content"]
        # now contains the inlined schema instead of a $ref pointer.
    """
    return _deep_resolve(spec, spec, frozenset())


def _lookup_ref(ref: str, root: dict[str, Any]) -> Any:
    """Look up a single ``$ref`` string against the root spec.

    Parses JSON Pointer references like ``#/components/schemas/Pet`` and
    navigates the root dict to locate the referenced value.  Handles
    RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/schemas/Pet"``).
        root: The root spec dictionary to resolve against.

    Returns:
        The value found at the referenced path, or ``_MISSING`` when the
        reference is external or any segment does not exist.
    """
    if not ref.startswith("#/"):
        return _MISSING

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                return _MISSING
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING

    if current is None:
        return _MISSING
    return current


def _deep_resolve(obj: Any, root: dict[str, Any], seen: frozenset[str]) -> Any:
    """Recursively resolve all ``$ref`` pointers and ``allOf`` lists within *obj*.

    Walks dicts and lists depth-first.  ``seen`` holds the ``$ref`` strings
    currently on the resolution stack; it is extended (never mutated) when
    following a reference so that sibling branches do not interfere with
    each other.

    Args:
        obj: The current node -- a dict (potentially a ``$ref`` or ``allOf``
            schema), a list, or a scalar value.
        root: The root spec dictionary, used as the lookup target for all
            ``$ref`` resolution.
        seen: ``$ref`` strings on the active resolution path.

    Returns:
        The resolved object.  Dicts and lists are new objects; scalars are
        returned as-is.
    """
    if isinstance(obj, list):
        return [_deep_resolve(item, root, seen) for item in obj]

    if not isinstance(obj, dict):
        return obj

    ref = obj.get("$ref")
    if isinstance(ref, str):
        if ref in seen:
            return {"type": "object"}
        target = _lookup_ref(ref, root)
        if target is _MISSING:
            # Dangling or external reference: keep it as written
            return copy.deepcopy(obj)
        return _deep_resolve(target, root, seen | {ref})

    if isinstance(obj.get("allOf"), list):
        return _merge_all_of(obj["allOf"], root, seen)

    return {key: _deep_resolve(value, root, seen) for key, value in obj.items()}


def _merge_all_of(
    fragments: list[Any], root: dict[str, Any], seen: frozenset[str]
) -> dict[str, Any]:
    """Merge ``allOf`` fragments into a single object schema.

    Properties are unioned (later fragments win on a name clash), ``required``
    lists are unioned without duplicates, and every other key is taken from
    the last fragment that declares it.  Fragments that do not resolve to a
    dict contribute nothing.

    Args:
        fragments: The raw ``allOf`` list.
        root: The root spec dictionary.
        seen: ``$ref`` strings on the active resolution path.

    Returns:
        A new ``{"type": "object", ...}`` schema.
    """
    merged: dict[str, Any] = {"type": "object"}
    properties: dict[str, Any] = {}
    required: list[str] = []

    for fragment in fragments:
        resolved = _deep_resolve(fragment, root, seen)
        if not isinstance(resolved, dict):
            continue

        if isinstance(resolved.get("properties"), dict):
            properties.update(resolved["properties"])
        if isinstance(resolved.get("required"), list):
            for name in resolved["required"]:
                if name not in required:
                    required.append(name)

        for key, value in resolved.items():
            if key not in _MERGE_SKIP_KEYS:
                merged[key] = value

    if properties:
        merged["properties"] = properties
    if required:
        merged["required"] = required
    return merged
