"""Inspect command -- preview what ``generate`` would produce for a spec.

Read-only: prints the endpoint count per tag group and the size and
estimated token count of each generated document, without writing files.
Useful for checking that an ``llms.txt`` summary still fits a model's
context window.
"""

from __future__ import annotations

from typing import Optional

import typer

from specdocs.output import OutputFormat, error, get_output, info, print_record


def inspect_command(
    spec: str = typer.Argument(
        help="Path, URL, or '-' (stdin) of an OpenAPI 3.x spec (JSON or YAML)."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-b", help="Override the base URL from the spec."
    ),
) -> None:
    """Show tag groups and document token estimates for an OpenAPI spec.

    Example::

        specdocs inspect openapi.json
        specdocs --json inspect openapi.json
    """
    from specdocs.exceptions import SpecdocsError
    from specdocs.generate import generate
    from specdocs.generator.context import build_context
    from specdocs.generator.formatters import estimate_tokens
    from specdocs.models import GenerateOptions
    from specdocs.parser import load_spec, resolve_refs, validate_openapi_version

    try:
        raw = load_spec(spec)
        version = validate_openapi_version(raw)
    except SpecdocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    options = GenerateOptions(base_url=base_url)
    ctx = build_context(resolve_refs(raw), options)
    docs = generate(raw, options)

    tags = [
        {"tag": tag, "endpoints": len(ctx.groups[tag]), "declared": ctx.is_declared(tag)}
        for tag in ctx.group_order
    ]
    documents = [
        {"document": name, "bytes": len(text.encode("utf-8")), "tokens": estimate_tokens(text)}
        for name, text in (
            ("llms.txt", docs.compact_summary),
            ("to-humans.md", docs.human_reference),
            ("index.html", docs.landing_page),
        )
    ]

    output = get_output()
    if output.format == OutputFormat.JSON:
        print_record(
            {
                "title": ctx.title,
                "version": ctx.version,
                "openapi": version,
                "endpoints": ctx.endpoint_count,
                "tags": tags,
                "documents": documents,
            }
        )
        return

    info(f"{ctx.title} v{ctx.version} (OpenAPI {version}), {ctx.endpoint_count} endpoints")
    output.print_table(
        ["Tag", "Endpoints", "Declared"],
        [[t["tag"], str(t["endpoints"]), "Yes" if t["declared"] else "No"] for t in tags],
        title="Tag groups",
    )
    output.print_table(
        ["Document", "Bytes", "Tokens"],
        [[d["document"], str(d["bytes"]), str(d["tokens"])] for d in documents],
        title="Generated documents",
    )
