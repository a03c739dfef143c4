"""Generate the human-readable Markdown reference (``to-humans.md``).

Unlike the compact summary this document keeps the full API description,
shows every response status with a usable schema and lays parameters out as
Markdown tables.  Endpoints grouped under tags that the spec never declares
get an abbreviated entry (heading, summary and auth only) after the declared
sections.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from specdocs.generator.context import DocumentContext, build_context
from specdocs.generator.formatters import (
    API_KEY_SCHEME,
    BEARER_SCHEME,
    api_key_header,
    format_security,
    param_type,
)
from specdocs.generator.responses import response_schema
from specdocs.generator.schema import pretty_schema
from specdocs.models import EndpointInfo, GenerateOptions, ParameterInfo, ParameterLocation
from specdocs.parser.extractor import extract_params_by_location

_WHITESPACE = re.compile(r"\s+")


def generate_human_reference(
    spec: dict[str, Any], options: Optional[GenerateOptions] = None
) -> str:
    """Render the Markdown reference for an already-resolved *spec*."""
    ctx = build_context(spec, options)
    lines: list[str] = [
        f"# {ctx.title}",
        "",
        f"**Version:** {ctx.version}  ",
        f"**Base URL:** {ctx.base_url}",
        "",
    ]
    if ctx.description:
        lines.extend([ctx.description, ""])

    lines.extend(_table_of_contents(ctx))

    if ctx.security_schemes:
        lines.extend(_authentication_section(ctx))

    for tag in ctx.group_order:
        if ctx.is_declared(tag):
            lines.extend(_tag_section(ctx, tag))
        else:
            lines.extend(_abbreviated_section(ctx, tag))

    return "\n".join(lines)


def tag_anchor(tag: str) -> str:
    """Markdown heading anchor for *tag*: lower-cased, whitespace as ``-``."""
    return _WHITESPACE.sub("-", tag.lower())


def _table_of_contents(ctx: DocumentContext) -> list[str]:
    lines = ["## Table of Contents", "", "- [Authentication](#authentication)"]
    lines.extend(f"- [{tag}](#{tag_anchor(tag)})" for tag in ctx.group_order)
    lines.append("")
    return lines


def _authentication_section(ctx: DocumentContext) -> list[str]:
    lines = ["---", "", "## Authentication", ""]

    if ctx.has_scheme(BEARER_SCHEME):
        lines.extend(
            [
                "### JWT Bearer Token",
                "",
                "Used for admin panel access.",
                "",
                "```",
                "Authorization: Bearer <token>",
                "```",
                "",
                "Obtain a token via `POST /auth/login` with email and password.",
                "",
            ]
        )

    if ctx.has_scheme(API_KEY_SCHEME):
        header = api_key_header(ctx.security_schemes[API_KEY_SCHEME])
        lines.extend(
            [
                "### API Key",
                "",
                "Used for backend-to-backend authentication.",
                "",
                "```",
                f"{header}: sk_<appId>_<randomhex>",
                "```",
                "",
                "Create keys via `POST /api-keys`. Each key is scoped to a specific app.",
                "",
            ]
        )

    for name, scheme in ctx.security_schemes.items():
        if name in (BEARER_SCHEME, API_KEY_SCHEME):
            continue
        lines.extend(_other_scheme(name, scheme))

    return lines


def _other_scheme(name: str, scheme: Any) -> list[str]:
    scheme = scheme if isinstance(scheme, dict) else {}
    lines = [f"### {name}", ""]

    kind = scheme.get("type")
    if isinstance(kind, str) and kind:
        detail = kind
        if kind == "http" and isinstance(scheme.get("scheme"), str):
            detail = f"http ({scheme['scheme']})"
        elif kind == "apiKey" and isinstance(scheme.get("name"), str):
            detail = f"apiKey (`{scheme['name']}` in {scheme.get('in', 'header')})"
        lines.extend([f"**Type:** {detail}", ""])

    description = scheme.get("description")
    if isinstance(description, str) and description:
        lines.extend([description, ""])
    return lines


def _tag_section(ctx: DocumentContext, tag: str) -> list[str]:
    lines = ["---", "", f"## {tag}", ""]
    description = ctx.tag_description(tag)
    if description:
        lines.extend([description, ""])

    for endpoint in ctx.groups[tag]:
        lines.extend(_endpoint_entry(endpoint))
    return lines


def _abbreviated_section(ctx: DocumentContext, tag: str) -> list[str]:
    lines = ["---", "", f"## {tag}", ""]
    for endpoint in ctx.groups[tag]:
        lines.extend(_endpoint_heading(endpoint))
        lines.extend([f"**Auth:** {format_security(endpoint.security)}", ""])
    return lines


def _endpoint_heading(endpoint: EndpointInfo) -> list[str]:
    lines = [f"### `{endpoint.method.upper()}` {endpoint.path}", ""]
    if endpoint.summary:
        lines.extend([f"**{endpoint.summary}**", ""])
    return lines


def _endpoint_entry(endpoint: EndpointInfo) -> list[str]:
    lines = _endpoint_heading(endpoint)

    if endpoint.description and endpoint.description != endpoint.summary:
        lines.extend([endpoint.description, ""])

    lines.extend([f"**Auth:** {format_security(endpoint.security)}", ""])

    path_params = extract_params_by_location(endpoint.parameters, ParameterLocation.PATH)
    if path_params:
        lines.extend(_path_table(path_params))

    query_params = extract_params_by_location(endpoint.parameters, ParameterLocation.QUERY)
    if query_params:
        lines.extend(_query_table(query_params))

    if endpoint.body is not None:
        lines.extend(["**Request Body:**", "", "```json", pretty_schema(endpoint.body), "```", ""])

    for status, response in endpoint.responses.items():
        schema = response_schema(response)
        if schema is None:
            continue
        lines.extend([f"**Response {status}:**", "", "```json", pretty_schema(schema), "```", ""])

    return lines


def _path_table(params: list[ParameterInfo]) -> list[str]:
    lines = [
        "**Path Parameters:**",
        "",
        "| Parameter | Type | Description |",
        "|-----------|------|-------------|",
    ]
    for p in params:
        lines.append(f"| `{p.name}` | {param_type(p)} | {p.description or '-'} |")
    lines.append("")
    return lines


def _query_table(params: list[ParameterInfo]) -> list[str]:
    lines = [
        "**Query Parameters:**",
        "",
        "| Parameter | Type | Required | Description |",
        "|-----------|------|----------|-------------|",
    ]
    for p in params:
        required = "Yes" if p.required else "No"
        description = p.description or _schema_description(p) or "-"
        lines.append(f"| `{p.name}` | {param_type(p)} | {required} | {description} |")
    lines.append("")
    return lines


def _schema_description(param: ParameterInfo) -> str:
    schema = param.schema_
    if isinstance(schema, dict) and isinstance(schema.get("description"), str):
        return schema["description"]
    return ""
