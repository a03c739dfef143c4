"""Document generators -- render a resolved OpenAPI spec into three formats.

This sub-package is the second half of the specdocs pipeline.  Each
generator takes a ``$ref``-resolved spec dict plus
:class:`~specdocs.models.GenerateOptions` and returns a string:

* :mod:`~specdocs.generator.compact` -- ``llms.txt``, a token-compact summary
  for LLM context windows.
* :mod:`~specdocs.generator.reference` -- ``to-humans.md``, the full Markdown
  reference.
* :mod:`~specdocs.generator.landing` -- ``index.html``, a static landing page
  rendered with Jinja2.

Shared building blocks live in :mod:`~specdocs.generator.schema` (compact and
pretty schema notation), :mod:`~specdocs.generator.formatters` (auth and
parameter labels, ETags, token estimates) and
:mod:`~specdocs.generator.context` (default resolution).
"""

from specdocs.generator.compact import generate_compact_summary
from specdocs.generator.context import DocumentContext, build_context
from specdocs.generator.formatters import (
    compute_etag,
    estimate_tokens,
    extract_first_paragraph,
    format_query_compact,
    format_security,
    format_security_compact,
)
from specdocs.generator.landing import generate_landing_page
from specdocs.generator.reference import generate_human_reference
from specdocs.generator.schema import compact_schema, pretty_schema

__all__ = [
    "DocumentContext",
    "build_context",
    "compact_schema",
    "compute_etag",
    "estimate_tokens",
    "extract_first_paragraph",
    "format_query_compact",
    "format_security",
    "format_security_compact",
    "generate_compact_summary",
    "generate_human_reference",
    "generate_landing_page",
    "pretty_schema",
]
