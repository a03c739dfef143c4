"""Generate the static HTML landing page (``index.html``).

The page is rendered from ``templates/landing.html.j2`` with Jinja2
autoescaping switched on, so every spec-derived string (title, tag names,
paths, summaries, ...) is HTML-escaped on insertion.  Spec content may come
from untrusted tenants; nothing from the spec is ever marked safe.

The page carries no JavaScript.  It shows a hero with an optional "tell your
AI agent" prompt, endpoint/category/version statistics, one card per tag,
links to the other formats and a full endpoint reference as tables.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from specdocs.generator.context import DocumentContext, build_context
from specdocs.generator.formatters import (
    API_KEY_SCHEME,
    BEARER_SCHEME,
    api_key_header,
    format_security,
)
from specdocs.models import GenerateOptions

TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Directory holding the Jinja2 templates shipped with the package."""

LANDING_TEMPLATE = "landing.html.j2"

FORMAT_LINKS = ("/llms.txt", "/to-humans.md", "/openapi.json")
"""Sibling routes advertised under "Available formats"."""


def generate_landing_page(
    spec: dict[str, Any], options: Optional[GenerateOptions] = None
) -> str:
    """Render the HTML landing page for an already-resolved *spec*.

    Args:
        spec: OpenAPI document, normally ``$ref``-resolved.
        options: Title/base URL overrides and :class:`~specdocs.models.LandingOptions`.

    Returns:
        A complete HTML5 document starting with ``<!DOCTYPE html>``.
    """
    ctx = build_context(spec, options)
    template = _create_jinja_env().get_template(LANDING_TEMPLATE)
    return template.render(**_build_template_context(ctx))


@lru_cache(maxsize=1)
def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment for the landing template.

    Autoescape is forced on for ``.html.j2`` templates; ``select_autoescape``
    would otherwise only match a bare ``.html`` suffix.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _build_template_context(ctx: DocumentContext) -> dict[str, Any]:
    """Flatten a :class:`DocumentContext` into plain template variables."""
    landing = ctx.landing
    groups = [
        {
            "name": tag,
            "description": ctx.tag_description(tag),
            "endpoints": [
                {
                    "method": endpoint.method.upper(),
                    "path": endpoint.path,
                    "summary": endpoint.summary,
                    "auth": format_security(endpoint.security),
                }
                for endpoint in ctx.groups[tag]
            ],
        }
        for tag in ctx.group_order
    ]

    auth_methods: list[dict[str, str]] = []
    if ctx.has_scheme(BEARER_SCHEME):
        auth_methods.append(
            {
                "name": "JWT Bearer Token",
                "header": "Authorization: Bearer <token>",
                "use_case": "Admin panel access. Obtain via POST /auth/login.",
            }
        )
    if ctx.has_scheme(API_KEY_SCHEME):
        header = api_key_header(ctx.security_schemes[API_KEY_SCHEME])
        auth_methods.append(
            {
                "name": "API Key",
                "header": f"{header}: sk_<appId>_<hex>",
                "use_case": "Backend-to-backend. Create via POST /api-keys.",
            }
        )

    return {
        "title": ctx.title,
        "description": ctx.first_paragraph,
        "version": ctx.version,
        "show_prompt": landing.show_prompt,
        "prompt_text": landing.prompt_text or f"Learn {ctx.base_url or 'this API'}",
        "show_powered_by": landing.show_powered_by,
        "endpoint_count": ctx.endpoint_count,
        "category_count": len(groups),
        "groups": groups,
        "format_links": FORMAT_LINKS,
        "has_auth": bool(ctx.security_schemes),
        "auth_methods": auth_methods,
    }
