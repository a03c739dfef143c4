"""One-call entry point producing all three documents from a raw spec.

:func:`generate` resolves ``$ref`` pointers exactly once and hands the
resolved document to every generator with identical options.  It does not
catch anything: a serving layer that must always answer wraps the call and
falls back to :func:`fallback_output`, as :class:`~specdocs.cache.DocsCache`
does.
"""

from __future__ import annotations

from typing import Any, Optional

from specdocs.generator.compact import generate_compact_summary
from specdocs.generator.landing import generate_landing_page
from specdocs.generator.reference import generate_human_reference
from specdocs.models import GeneratedDocs, GenerateOptions
from specdocs.parser.resolver import resolve_refs

_FALLBACK = GeneratedDocs(
    compact_summary="# API\n\n> Documentation generation failed.",
    human_reference="# API\n\nDocumentation generation failed.",
    landing_page=(
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        '<head><meta charset="utf-8"><title>API</title></head>\n'
        "<body><h1>API</h1><p>Documentation generation failed.</p></body>\n"
        "</html>"
    ),
)


def generate(
    spec: dict[str, Any], options: Optional[GenerateOptions] = None
) -> GeneratedDocs:
    """Render the compact summary, human reference and landing page.

    Args:
        spec: A raw OpenAPI 3.x document.  It is not modified.
        options: Overrides shared by all three generators.

    Returns:
        A :class:`~specdocs.models.GeneratedDocs` with all three documents.

    Example::

        docs = generate(spec, GenerateOptions(base_url="https://api.example.com"))
        Path("llms.txt").write_text(docs.compact_summary)
    """
    options = options or GenerateOptions()
    resolved = resolve_refs(spec)
    return GeneratedDocs(
        compact_summary=generate_compact_summary(resolved, options),
        human_reference=generate_human_reference(resolved, options),
        landing_page=generate_landing_page(resolved, options),
    )


def fallback_output() -> GeneratedDocs:
    """Minimal placeholder documents served when generation fails."""
    return _FALLBACK
