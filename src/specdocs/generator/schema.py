"""Render JSON Schema nodes as compact or pretty text.

Two notations share one traversal (:func:`_render`) and differ only in how
the leaves are written.  Each notation is a small :class:`SchemaStyle`
subclass:

* :class:`CompactStyle` -- minimum tokens while staying unambiguous::

      {email*, password*, role:boolean, tags:string[], owner:{id, name}}

  ``*`` marks a required field, ``:type`` is appended to every non-string
  scalar, ``[]`` marks arrays and ``|`` separates union variants.

* :class:`PrettyStyle` -- multi-line and indented for humans::

      {
        "email": string (required)
        "status": string — e.g. "ok"
      }

Both renderers stop descending after :data:`MAX_DEPTH` nested levels and
emit :data:`ELLIPSIS` instead, so pathological or cyclic input always
terminates.  Schemas are expected to be ``$ref``-resolved already; an
unresolved ``{"$ref": ...}`` node simply renders as ``any``.
"""

from __future__ import annotations

import json
from typing import Any, Optional

MAX_DEPTH = 3
"""Deepest nesting level that is still rendered."""

ELLIPSIS = "..."
"""Placeholder emitted for ``None`` schemas and beyond :data:`MAX_DEPTH`."""


def compact_schema(schema: Optional[dict[str, Any]], depth: int = 0) -> str:
    """Render *schema* in compact notation.

    Example::

        >>> compact_schema({
        ...     "type": "object",
        ...     "required": ["email"],
        ...     "properties": {"email": {"type": "string"}, "age": {"type": "integer"}},
        ... })
        '{email*, age:integer}'
    """
    return _render(schema, depth, _COMPACT)


def pretty_schema(schema: Optional[dict[str, Any]], depth: int = 0) -> str:
    """Render *schema* as indented, human-readable pseudo-JSON."""
    return _render(schema, depth, _PRETTY)


def schema_type(schema: Any) -> str:
    """Return the declared type of *schema*, or ``""`` when it has none.

    OpenAPI 3.1 type arrays (``["string", "null"]``) yield their first
    non-null member.
    """
    if not isinstance(schema, dict):
        return ""
    value = schema.get("type")
    if isinstance(value, list):
        non_null = [t for t in value if isinstance(t, str) and t != "null"]
        return non_null[0] if non_null else ""
    return value if isinstance(value, str) else ""


def is_object_schema(schema: Any) -> bool:
    """True for ``type: object`` schemas and for anything declaring properties."""
    return isinstance(schema, dict) and (
        schema_type(schema) == "object" or isinstance(schema.get("properties"), dict)
    )


def has_properties(schema: Any) -> bool:
    """True when *schema* carries a ``properties`` mapping, even an empty one."""
    return isinstance(schema, dict) and isinstance(schema.get("properties"), dict)


class SchemaStyle:
    """Leaf formatting for one notation.

    :func:`_render` owns the walk; a style decides how object bodies,
    properties and the required marker are written.  Every method receives
    the depth of the object that owns the property.
    """

    def render_object(self, parts: list[str], depth: int) -> str:
        raise NotImplementedError

    def nested_property(self, name: str, required: bool, rendered: str, depth: int) -> str:
        raise NotImplementedError

    def object_array_property(
        self, name: str, required: bool, rendered: str, depth: int
    ) -> str:
        raise NotImplementedError

    def primitive_array_property(
        self, name: str, required: bool, item_type: str, depth: int
    ) -> str:
        raise NotImplementedError

    def scalar_property(
        self, name: str, required: bool, prop: dict[str, Any], depth: int
    ) -> str:
        raise NotImplementedError


class CompactStyle(SchemaStyle):
    """``{name*, count:integer, tags:string[]}``"""

    def render_object(self, parts: list[str], depth: int) -> str:
        return "{" + ", ".join(parts) + "}"

    def nested_property(self, name: str, required: bool, rendered: str, depth: int) -> str:
        return f"{name}{_star(required)}:{rendered}"

    def object_array_property(
        self, name: str, required: bool, rendered: str, depth: int
    ) -> str:
        return f"{name}{_star(required)}:[{rendered}]"

    def primitive_array_property(
        self, name: str, required: bool, item_type: str, depth: int
    ) -> str:
        return f"{name}{_star(required)}:{item_type}[]"

    def scalar_property(
        self, name: str, required: bool, prop: dict[str, Any], depth: int
    ) -> str:
        type_name = schema_type(prop) or "string"
        suffix = "" if type_name == "string" else f":{type_name}"
        return f"{name}{_star(required)}{suffix}"


class PrettyStyle(SchemaStyle):
    """One ``"name": type`` line per property, two spaces per level."""

    def render_object(self, parts: list[str], depth: int) -> str:
        if not parts:
            return "{}"
        return "\n".join(["{", *parts, f"{_indent(depth)}}}"])

    def nested_property(self, name: str, required: bool, rendered: str, depth: int) -> str:
        return f'{_indent(depth + 1)}"{name}": {rendered}{_required_label(required)}'

    def object_array_property(
        self, name: str, required: bool, rendered: str, depth: int
    ) -> str:
        return f'{_indent(depth + 1)}"{name}": [{rendered}]{_required_label(required)}'

    def primitive_array_property(
        self, name: str, required: bool, item_type: str, depth: int
    ) -> str:
        return f'{_indent(depth + 1)}"{name}": {item_type}[]{_required_label(required)}'

    def scalar_property(
        self, name: str, required: bool, prop: dict[str, Any], depth: int
    ) -> str:
        type_name = schema_type(prop) or "string"
        example = ""
        if "example" in prop:
            example = f" — e.g. {_json_literal(prop['example'])}"
        return f'{_indent(depth + 1)}"{name}": {type_name}{example}{_required_label(required)}'


_COMPACT = CompactStyle()
_PRETTY = PrettyStyle()


def _render(schema: Any, depth: int, style: SchemaStyle) -> str:
    """Walk *schema* and format it with *style*."""
    if schema is None or depth > MAX_DEPTH:
        return ELLIPSIS
    if not isinstance(schema, dict):
        return "any"

    variants = schema.get("oneOf") or schema.get("anyOf")
    if isinstance(variants, list):
        return " | ".join(_render(variant, depth, style) for variant in variants)

    if is_object_schema(schema):
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        required = schema.get("required")
        if not isinstance(required, list):
            required = []
        required_names = {r for r in required if isinstance(r, str)}

        parts = [
            _render_property(str(name), name in required_names, prop, depth, style)
            for name, prop in properties.items()
        ]
        return style.render_object(parts, depth)

    if schema_type(schema) == "array":
        items = schema.get("items")
        if has_properties(items):
            return "[" + _render(items, depth, style) + "]"
        return f"{_item_type(items)}[]"

    return schema_type(schema) or "any"


def _render_property(
    name: str, required: bool, prop: Any, depth: int, style: SchemaStyle
) -> str:
    if not isinstance(prop, dict):
        prop = {}

    if is_object_schema(prop):
        return style.nested_property(name, required, _render(prop, depth + 1, style), depth)

    if schema_type(prop) == "array":
        items = prop.get("items")
        if has_properties(items):
            return style.object_array_property(
                name, required, _render(items, depth + 1, style), depth
            )
        return style.primitive_array_property(name, required, _item_type(items), depth)

    return style.scalar_property(name, required, prop, depth)


def _item_type(items: Any) -> str:
    return schema_type(items) or "any"


def _star(required: bool) -> str:
    return "*" if required else ""


def _required_label(required: bool) -> str:
    return " (required)" if required else ""


def _indent(depth: int) -> str:
    return "  " * depth


def _json_literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
