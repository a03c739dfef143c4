"""Tests for specdocs.parser.resolver."""

from __future__ import annotations

import copy

from specdocs.parser.resolver import _lookup_ref, _MISSING, resolve_refs


def _schema_at(spec: dict, path: str, status: str = "200") -> dict:
    return spec["paths"][path]["get"]["responses"][status]["content"]["application/json"][
        "schema"
    ]


# ---------------------------------------------------------------------------
# resolve_refs (top-level)
# ---------------------------------------------------------------------------


class TestResolveRefs:
    """Test the top-level resolve_refs function."""

    def test_resolves_simple_ref(self) -> None:
        spec = {
            "paths": {
                "/pets": {
                    "get": {
                        "responses": {
                            "200": {
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/Pet"}
                                    }
                                }
                            }
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    "Pet": {"type": "object", "properties": {"name": {"type": "string"}}}
                }
            },
        }

        resolved = resolve_refs(spec)

        assert _schema_at(resolved, "/pets") == {
            "type": "object",
            "properties": {"name": {"type": "string"}},
        }

    def test_does_not_mutate_original(self, ref_spec: dict) -> None:
        snapshot = copy.deepcopy(ref_spec)
        resolve_refs(ref_spec)
        assert ref_spec == snapshot

    def test_result_shares_no_containers_with_input(self) -> None:
        spec = {"components": {"schemas": {"A": {"type": "object", "properties": {}}}}}
        resolved = resolve_refs(spec)
        resolved["components"]["schemas"]["A"]["properties"]["x"] = {"type": "string"}
        assert spec["components"]["schemas"]["A"]["properties"] == {}

    def test_is_idempotent(self, ref_spec: dict) -> None:
        once = resolve_refs(ref_spec)
        assert resolve_refs(once) == once

    def test_resolves_refs_inside_lists(self) -> None:
        spec = {
            "components": {"schemas": {"S": {"type": "string"}}},
            "x-list": [{"$ref": "#/components/schemas/S"}, 3, "text"],
        }
        resolved = resolve_refs(spec)
        assert resolved["x-list"] == [{"type": "string"}, 3, "text"]

    def test_chained_refs(self) -> None:
        spec = {
            "components": {
                "schemas": {
                    "A": {"$ref": "#/components/schemas/B"},
                    "B": {"type": "integer"},
                }
            },
            "target": {"$ref": "#/components/schemas/A"},
        }
        assert resolve_refs(spec)["target"] == {"type": "integer"}


# ---------------------------------------------------------------------------
# Cycles and dangling references
# ---------------------------------------------------------------------------


class TestCycles:
    """Circular references terminate with an object placeholder."""

    def test_self_reference_becomes_object_placeholder(self, ref_spec: dict) -> None:
        resolved = resolve_refs(ref_spec)
        pet = resolved["components"]["schemas"]["Pet"]
        assert pet["properties"]["id"] == {"type": "string"}
        # One level of Pet is expanded, the recursive edge is cut
        assert pet["properties"]["parent"]["properties"]["parent"] == {"type": "object"}

    def test_mutual_recursion_terminates(self) -> None:
        spec = {
            "components": {
                "schemas": {
                    "A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/B"}}},
                    "B": {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/A"}}},
                }
            }
        }
        resolved = resolve_refs(spec)
        a = resolved["components"]["schemas"]["A"]
        assert a["properties"]["b"]["properties"]["a"]["properties"]["b"] == {"type": "object"}

    def test_sibling_branches_resolve_independently(self) -> None:
        spec = {
            "components": {"schemas": {"S": {"type": "string"}}},
            "pair": {
                "left": {"$ref": "#/components/schemas/S"},
                "right": {"$ref": "#/components/schemas/S"},
            },
        }
        resolved = resolve_refs(spec)
        assert resolved["pair"] == {"left": {"type": "string"}, "right": {"type": "string"}}


class TestDanglingRefs:
    def test_missing_target_passes_through(self) -> None:
        spec = {"x": {"$ref": "#/components/schemas/Nope"}}
        assert resolve_refs(spec)["x"] == {"$ref": "#/components/schemas/Nope"}

    def test_external_ref_passes_through(self) -> None:
        spec = {"x": {"$ref": "other.yaml#/Pet", "description": "kept"}}
        assert resolve_refs(spec)["x"] == {"$ref": "other.yaml#/Pet", "description": "kept"}


# ---------------------------------------------------------------------------
# allOf merging
# ---------------------------------------------------------------------------


class TestAllOf:
    def test_merges_properties_and_required(self) -> None:
        spec = {
            "components": {
                "schemas": {
                    "Base": {
                        "type": "object",
                        "required": ["id"],
                        "properties": {"id": {"type": "string"}},
                    }
                }
            },
            "target": {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {
                        "required": ["name", "id"],
                        "properties": {"name": {"type": "string"}},
                    },
                ]
            },
        }

        merged = resolve_refs(spec)["target"]

        assert merged["type"] == "object"
        assert merged["properties"] == {"id": {"type": "string"}, "name": {"type": "string"}}
        assert merged["required"] == ["id", "name"]
        assert "allOf" not in merged

    def test_later_fragment_wins_on_property_clash(self) -> None:
        spec = {
            "target": {
                "allOf": [
                    {"properties": {"age": {"type": "string"}}},
                    {"properties": {"age": {"type": "integer"}}},
                ]
            }
        }
        assert resolve_refs(spec)["target"]["properties"]["age"] == {"type": "integer"}

    def test_other_keys_carried_over(self) -> None:
        spec = {"target": {"allOf": [{"description": "first"}, {"description": "second"}]}}
        merged = resolve_refs(spec)["target"]
        assert merged == {"type": "object", "description": "second"}

    def test_non_dict_fragments_ignored(self) -> None:
        spec = {"target": {"allOf": ["junk", None, {"properties": {"a": {"type": "string"}}}]}}
        merged = resolve_refs(spec)["target"]
        assert merged == {"type": "object", "properties": {"a": {"type": "string"}}}

    def test_empty_all_of(self) -> None:
        assert resolve_refs({"target": {"allOf": []}})["target"] == {"type": "object"}


class TestUnions:
    def test_one_of_variants_resolved_in_place(self) -> None:
        spec = {
            "components": {"schemas": {"Cat": {"type": "object", "properties": {"meow": {"type": "boolean"}}}}},
            "target": {"oneOf": [{"$ref": "#/components/schemas/Cat"}, {"type": "string"}]},
        }
        target = resolve_refs(spec)["target"]
        assert target["oneOf"][0]["properties"] == {"meow": {"type": "boolean"}}
        assert target["oneOf"][1] == {"type": "string"}


# ---------------------------------------------------------------------------
# JSON Pointer lookup
# ---------------------------------------------------------------------------


class TestLookupRef:
    def test_unescapes_pointer_segments(self) -> None:
        root = {"paths": {"/pets/{id}": {"get": {"summary": "x"}}, "a~b": 1}}
        assert _lookup_ref("#/paths/~1pets~1{id}/get", root) == {"summary": "x"}
        assert _lookup_ref("#/paths/a~0b", root) == 1

    def test_indexes_into_lists(self) -> None:
        root = {"servers": [{"url": "a"}, {"url": "b"}]}
        assert _lookup_ref("#/servers/1", root) == {"url": "b"}
        assert _lookup_ref("#/servers/5", root) is _MISSING
        assert _lookup_ref("#/servers/x", root) is _MISSING

    def test_external_and_missing(self) -> None:
        assert _lookup_ref("other.json#/x", {}) is _MISSING
        assert _lookup_ref("#/nope", {}) is _MISSING

    def test_null_target_is_missing(self) -> None:
        assert _lookup_ref("#/x", {"x": None}) is _MISSING
