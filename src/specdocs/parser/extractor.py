"""Flatten the ``paths`` tree of an OpenAPI spec into tag-grouped endpoints.

This module walks a (usually ``$ref``-resolved) OpenAPI spec dictionary and
builds one :class:`~specdocs.models.EndpointInfo` per path + HTTP method
combination, grouped under the operation's tags.  All three document
generators consume its output.

Public entry points:

* :func:`group_by_tag` -- ``{tag: [EndpointInfo, ...]}`` in traversal order.
* :func:`extract_tags` -- the spec's declared ``tags`` list.
* :func:`extract_params_by_location` -- filter parameters by ``in``.

Parameter merging follows the OpenAPI specification: path-level parameters
provide defaults, and operation-level parameters override them when they share
the same ``name`` and ``in`` values.  Extraction never raises on missing or
oddly-typed optional fields; such fields fall back to empty values.
"""

from __future__ import annotations

from typing import Any, Iterable

from specdocs.models import (
    EndpointInfo,
    HTTPMethod,
    ParameterInfo,
    ParameterLocation,
    TagDefinition,
)

UNTAGGED = "Other"
"""Synthetic tag assigned to operations that declare no tags."""

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

# Request body content types, in order of preference
_BODY_CONTENT_TYPES = ("application/json", "multipart/form-data")


def group_by_tag(spec: dict[str, Any]) -> dict[str, list[EndpointInfo]]:
    """Group every operation of *spec* under each of its tags.

    Only ``get``, ``post``, ``put``, ``patch`` and ``delete`` keys of a path
    item are treated as operations.  An operation without tags lands under
    :data:`UNTAGGED`; an operation with several tags appears once under each, as an independent
    copy.

    Args:
        spec: The OpenAPI spec dictionary.

    Returns:
        A dict mapping tag name to endpoints.  Tags appear in first-seen order
        and endpoints within a tag keep the path/method order of the input.

    Example::

        groups = group_by_tag(resolve_refs(raw))
        for ep in groups.get("Pets", []):
            print(ep.method.upper(), ep.path)
    """
    groups: dict[str, list[EndpointInfo]] = {}

    for path, path_item in _as_dict(spec.get("paths")).items():
        if not isinstance(path_item, dict):
            continue

        path_params = _as_list(path_item.get("parameters"))

        for method, operation in path_item.items():
            if method not in _HTTP_METHODS or not isinstance(operation, dict):
                continue

            endpoint = _build_endpoint(path, method, operation, path_params)
            for tag in _operation_tags(operation):
                groups.setdefault(tag, []).append(endpoint.model_copy(deep=True))

    return groups


def extract_tags(spec: dict[str, Any]) -> list[TagDefinition]:
    """Return the spec's declared ``tags`` in declaration order.

    Entries without a string ``name`` are skipped.
    """
    tags: list[TagDefinition] = []
    for entry in _as_list(spec.get("tags")):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            continue
        description = entry.get("description")
        tags.append(
            TagDefinition(
                name=entry["name"],
                description=description if isinstance(description, str) else "",
            )
        )
    return tags


def extract_params_by_location(
    parameters: Iterable[ParameterInfo],
    location: ParameterLocation | str,
) -> list[ParameterInfo]:
    """Return the parameters declared ``in`` *location*, preserving order."""
    location = ParameterLocation(location)
    return [p for p in parameters if p.location == location]


def _build_endpoint(
    path: str,
    method: str,
    operation: dict[str, Any],
    path_params: list[Any],
) -> EndpointInfo:
    """Build the :class:`EndpointInfo` for one operation."""
    security = operation.get("security")
    responses = operation.get("responses")

    return EndpointInfo(
        method=method,
        path=path,
        summary=_as_str(operation.get("summary")),
        description=_as_str(operation.get("description")),
        security=(
            [entry for entry in security if isinstance(entry, dict)]
            if isinstance(security, list)
            else None
        ),
        parameters=_extract_parameters(
            _merge_parameters(path_params, _as_list(operation.get("parameters")))
        ),
        body=_extract_request_body(operation.get("requestBody")),
        responses=(
            {str(code): value for code, value in responses.items()}
            if isinstance(responses, dict)
            else {}
        ),
    )


def _operation_tags(operation: dict[str, Any]) -> list[str]:
    """Return the distinct string tags of *operation*, or ``[UNTAGGED]``."""
    tags: list[str] = []
    for tag in _as_list(operation.get("tags")):
        if isinstance(tag, str) and tag not in tags:
            tags.append(tag)
    return tags or [UNTAGGED]


def _merge_parameters(path_params: list[Any], op_params: list[Any]) -> list[Any]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    name and location (``in`` field), per the OpenAPI spec.
    """
    op_keys = {_param_key(param) for param in op_params if isinstance(param, dict)}

    merged = [
        param
        for param in path_params
        if isinstance(param, dict) and _param_key(param) not in op_keys
    ]
    merged.extend(op_params)
    return merged


def _param_key(param: dict[str, Any]) -> tuple[str, str]:
    return str(param.get("name", "")), str(param.get("in", ""))


def _extract_parameters(params_list: list[Any]) -> list[ParameterInfo]:
    """Convert raw parameter dicts into :class:`ParameterInfo` models.

    Parameters with no name or an unrecognised ``in`` location are skipped.
    Path parameters are always required regardless of the ``required`` field.
    """
    parameters: list[ParameterInfo] = []

    for param in params_list:
        if not isinstance(param, dict) or not isinstance(param.get("name"), str):
            continue

        try:
            location = ParameterLocation(param.get("in"))
        except ValueError:
            continue

        schema = param.get("schema")
        description = param.get("description")

        parameters.append(
            ParameterInfo(
                name=param["name"],
                location=location,
                required=location == ParameterLocation.PATH or param.get("required") is True,
                description=description if isinstance(description, str) else None,
                schema_=schema if isinstance(schema, dict) else None,
            )
        )

    return parameters


def _extract_request_body(body: Any) -> dict[str, Any] | None:
    """Pick the request schema, preferring JSON over multipart form data."""
    if not isinstance(body, dict):
        return None

    content = _as_dict(body.get("content"))
    for content_type in _BODY_CONTENT_TYPES:
        media = content.get(content_type)
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            return media["schema"]
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
