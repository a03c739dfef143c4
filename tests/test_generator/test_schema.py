"""Tests for specdocs.generator.schema."""

from __future__ import annotations

from typing import Any

import pytest

from specdocs.generator.schema import (
    ELLIPSIS,
    compact_schema,
    is_object_schema,
    pretty_schema,
    schema_type,
)


def _obj(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required is not None:
        schema["required"] = required
    return schema


def _nest(levels: int) -> dict[str, Any]:
    """Object schema nested *levels* deep under keys a, b, c, ..."""
    schema: dict[str, Any] = {"type": "string"}
    for name in reversed("abcdefgh"[:levels]):
        schema = _obj({name: schema})
    return schema


# ---------------------------------------------------------------------------
# compact_schema
# ---------------------------------------------------------------------------


class TestCompactSchema:
    """Compact notation used in llms.txt."""

    def test_required_markers_and_types(self) -> None:
        schema = _obj(
            {
                "email": {"type": "string"},
                "password": {"type": "string"},
                "role": {"type": "boolean"},
            },
            required=["email", "password"],
        )
        assert compact_schema(schema) == "{email*, password*, role:boolean}"

    def test_untyped_property_treated_as_string(self) -> None:
        assert compact_schema(_obj({"note": {}})) == "{note}"

    def test_nested_object_property(self) -> None:
        schema = _obj(
            {
                "id": {"type": "string"},
                "owner": _obj({"id": {"type": "string"}, "name": {"type": "string"}}, ["id"]),
            },
            required=["owner"],
        )
        assert compact_schema(schema) == "{id, owner*:{id*, name}}"

    def test_array_properties(self) -> None:
        schema = _obj(
            {
                "tags": {"type": "array", "items": {"type": "string"}},
                "scores": {"type": "array", "items": {"type": "integer"}},
                "data": {"type": "array", "items": _obj({"id": {"type": "string"}})},
                "blobs": {"type": "array"},
            }
        )
        assert compact_schema(schema) == (
            "{tags:string[], scores:integer[], data:[{id}], blobs:any[]}"
        )

    def test_top_level_arrays(self) -> None:
        vaccinations = {
            "type": "array",
            "items": _obj({"date": {"type": "string"}, "vaccine": {"type": "string"}}),
        }
        assert compact_schema(vaccinations) == "[{date, vaccine}]"
        assert compact_schema({"type": "array", "items": {"type": "string"}}) == "string[]"

    def test_unions(self) -> None:
        schema = {"oneOf": [_obj({"a": {"type": "string"}}), {"type": "integer"}]}
        assert compact_schema(schema) == "{a} | integer"
        assert compact_schema({"anyOf": [{"type": "string"}, {"type": "null"}]}) == (
            "string | null"
        )

    def test_properties_without_type_render_as_object(self) -> None:
        assert compact_schema({"properties": {"x": {"type": "number"}}}) == "{x:number}"

    def test_empty_object(self) -> None:
        assert compact_schema({"type": "object"}) == "{}"

    def test_type_list_uses_first_non_null(self) -> None:
        assert compact_schema(_obj({"age": {"type": ["null", "integer"]}})) == "{age:integer}"

    @pytest.mark.parametrize(
        ("schema", "expected"),
        [
            (None, ELLIPSIS),
            ({}, "any"),
            ("not a schema", "any"),
            ({"$ref": "#/components/schemas/Missing"}, "any"),
            ({"type": "integer"}, "integer"),
        ],
    )
    def test_degenerate_inputs(self, schema: Any, expected: str) -> None:
        assert compact_schema(schema) == expected

    def test_stops_at_max_depth(self) -> None:
        assert compact_schema(_nest(3)) == "{a:{b:{c}}}"
        assert compact_schema(_nest(5)) == "{a:{b:{c:{d:...}}}}"

    def test_malformed_required_is_ignored(self) -> None:
        schema = {"type": "object", "required": "id", "properties": {"id": {"type": "string"}}}
        assert compact_schema(schema) == "{id}"


# ---------------------------------------------------------------------------
# pretty_schema
# ---------------------------------------------------------------------------


class TestPrettySchema:
    """Indented notation used in the Markdown reference."""

    def test_required_and_example(self) -> None:
        schema = _obj(
            {
                "email": {"type": "string"},
                "status": {"type": "string", "example": "ok"},
                "count": {"type": "integer", "example": 3},
            },
            required=["email"],
        )
        assert pretty_schema(schema) == (
            "{\n"
            '  "email": string (required)\n'
            '  "status": string — e.g. "ok"\n'
            '  "count": integer — e.g. 3\n'
            "}"
        )

    def test_nested_indentation(self) -> None:
        schema = _obj({"owner": _obj({"id": {"type": "string"}}, ["id"])})
        assert pretty_schema(schema) == (
            "{\n"
            '  "owner": {\n'
            '    "id": string (required)\n'
            "  }\n"
            "}"
        )

    def test_arrays(self) -> None:
        schema = _obj(
            {
                "tags": {"type": "array", "items": {"type": "string"}},
                "items": {"type": "array", "items": _obj({"sku": {"type": "string"}})},
            },
            required=["tags"],
        )
        assert pretty_schema(schema) == (
            "{\n"
            '  "tags": string[] (required)\n'
            '  "items": [{\n'
            '    "sku": string\n'
            "  }]\n"
            "}"
        )

    def test_empty_object(self) -> None:
        assert pretty_schema({"type": "object", "properties": {}}) == "{}"

    def test_non_object(self) -> None:
        assert pretty_schema({"type": "array", "items": {"type": "number"}}) == "number[]"
        assert pretty_schema(None) == ELLIPSIS

    def test_example_object_is_json(self) -> None:
        schema = _obj({"meta": {"type": "string", "example": {"k": "v"}}})
        assert '"meta": string — e.g. {"k":"v"}' in pretty_schema(schema)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestSchemaHelpers:
    def test_schema_type(self) -> None:
        assert schema_type({"type": "string"}) == "string"
        assert schema_type({"type": ["null"]}) == ""
        assert schema_type({"type": 5}) == ""
        assert schema_type("x") == ""

    def test_is_object_schema(self) -> None:
        assert is_object_schema({"type": "object"})
        assert is_object_schema({"properties": {}})
        assert not is_object_schema({"type": "array"})
        assert not is_object_schema(None)
