"""Generate the token-compact ``llms.txt`` summary of an API.

The summary is meant to be pasted into an LLM context window, so every line
earns its place:

* schemas use compact notation (``{email*, password*, role:boolean}``),
* auth is a shorthand (``JWT``, ``KEY``, ``JWT|KEY``, ``AUTH``, ``NONE``),
* common error shapes are stated once under "Conventions",
* only the success response is shown per endpoint.

Layout::

    # Pet Store API

    > A sample API for managing pets.

    Base: https://api.petstore.io
    Docs: [HTML](https://api.petstore.io/) | [OpenAPI JSON](https://api.petstore.io/openapi.json)

    ## Auth Methods
    - JWT: `Authorization: Bearer <token>` via POST /auth/login

    ## Conventions
    ...

    ---

    ## Pets
    Manage pets

    ### GET /pets/{petId} - Get pet | JWT|KEY
    Path: :petId (Pet ID)
    200: {id, name, age:number}
"""

from __future__ import annotations

from typing import Any, Optional

from specdocs.generator.context import DocumentContext, build_context
from specdocs.generator.formatters import (
    API_KEY_SCHEME,
    BEARER_SCHEME,
    api_key_header,
    format_query_compact,
    format_security_compact,
)
from specdocs.generator.responses import response_schema, success_response
from specdocs.generator.schema import compact_schema
from specdocs.models import EndpointInfo, GenerateOptions, ParameterLocation
from specdocs.parser.extractor import extract_params_by_location

CONVENTIONS = (
    "## Conventions",
    "- Auth: JWT = Bearer token, KEY = API Key, JWT|KEY = either, "
    "AUTH = other scheme, NONE = no auth",
    "- `*` after field name = required, all fields string unless noted with `:type`",
    "- Common errors: 400/401/404 return `{success:false, error}`",
)
"""Static notation legend emitted in every summary."""


def generate_compact_summary(
    spec: dict[str, Any], options: Optional[GenerateOptions] = None
) -> str:
    """Render the ``llms.txt`` document for an already-resolved *spec*.

    Args:
        spec: OpenAPI document, normally passed through
            :func:`~specdocs.parser.resolver.resolve_refs` first.
        options: Title and base URL overrides.

    Returns:
        The summary as a single newline-joined string.
    """
    ctx = build_context(spec, options)
    lines: list[str] = [f"# {ctx.title}", ""]

    if ctx.first_paragraph:
        lines.extend([f"> {ctx.first_paragraph}", ""])

    lines.append(f"Base: {ctx.base_url}")
    lines.append(
        f"Docs: [HTML]({ctx.base_url}/) | [OpenAPI JSON]({ctx.base_url}/openapi.json)"
    )
    lines.append("")

    if ctx.security_schemes:
        lines.append("## Auth Methods")
        if ctx.has_scheme(BEARER_SCHEME):
            lines.append("- JWT: `Authorization: Bearer <token>` via POST /auth/login")
        if ctx.has_scheme(API_KEY_SCHEME):
            header = api_key_header(ctx.security_schemes[API_KEY_SCHEME])
            lines.append(f"- KEY: `{header}: sk_<appId>_<hex>` via POST /api-keys")
        lines.append("")

    lines.extend(CONVENTIONS)
    lines.extend(["", "---", ""])

    for tag in ctx.group_order:
        lines.extend(_tag_section(ctx, tag))

    return "\n".join(lines)


def _tag_section(ctx: DocumentContext, tag: str) -> list[str]:
    lines = [f"## {tag}"]
    description = ctx.tag_description(tag)
    if description:
        lines.append(description)
    lines.append("")

    for endpoint in ctx.groups[tag]:
        lines.extend(_endpoint_entry(endpoint))
        lines.append("")
    return lines


def _endpoint_entry(endpoint: EndpointInfo) -> list[str]:
    auth = format_security_compact(endpoint.security)
    lines = [
        f"### {endpoint.method.upper()} {endpoint.path} - {endpoint.summary} | {auth}"
    ]

    path_params = extract_params_by_location(endpoint.parameters, ParameterLocation.PATH)
    if path_params:
        rendered = " ".join(
            f":{p.name} ({p.description})" if p.description else f":{p.name}"
            for p in path_params
        )
        lines.append(f"Path: {rendered}")

    query_params = extract_params_by_location(endpoint.parameters, ParameterLocation.QUERY)
    if query_params:
        lines.append(f"Query: {format_query_compact(query_params)}")

    if endpoint.body is not None:
        lines.append(f"Body: {compact_schema(endpoint.body)}")

    success = success_response(endpoint.responses)
    if success is not None:
        status, response = success
        schema = response_schema(response)
        if schema is not None:
            lines.append(f"{status}: {compact_schema(schema)}")

    return lines
