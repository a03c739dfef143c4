"""Pick response schemas out of an operation's ``responses`` mapping."""

from __future__ import annotations

from typing import Any, Optional

from specdocs.generator.schema import schema_type

SUCCESS_STATUS = "200"


def success_response(responses: dict[str, Any]) -> Optional[tuple[str, Any]]:
    """Return ``(status, response)`` for the success response to document.

    ``200`` wins; otherwise the first other ``2xx`` entry in declaration
    order.  Returns ``None`` when the operation declares no success response.
    """
    if SUCCESS_STATUS in responses:
        return SUCCESS_STATUS, responses[SUCCESS_STATUS]
    for status, response in responses.items():
        if status.startswith("2"):
            return status, response
    return None


def response_schema(response: Any) -> Optional[dict[str, Any]]:
    """Return the renderable schema of one response object, if any.

    The JSON media type's schema is preferred.  Responses that inline a
    schema directly (``{"type": "object", ...}``) are accepted as-is.  A
    schema is renderable when it declares a type, properties or a
    ``oneOf``/``anyOf`` union.
    """
    if not isinstance(response, dict):
        return None

    schema: Any = response
    content = response.get("content")
    if isinstance(content, dict):
        media = content.get("application/json")
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            schema = media["schema"]

    if _is_renderable(schema):
        return schema
    return None


def _is_renderable(schema: dict[str, Any]) -> bool:
    return bool(
        schema_type(schema)
        or isinstance(schema.get("properties"), dict)
        or isinstance(schema.get("oneOf"), list)
        or isinstance(schema.get("anyOf"), list)
    )
