"""specdocs -- Generate AI-first documentation from OpenAPI 3.0/3.1 specs.

This package turns one OpenAPI document into three derived formats:

* ``llms.txt`` -- a token-compact summary meant for LLM context windows,
* ``to-humans.md`` -- a complete Markdown reference,
* ``index.html`` -- a static, script-free landing page.

Typical usage::

    from specdocs import generate, GenerateOptions

    docs = generate(spec, GenerateOptions(base_url="https://api.example.com"))
    print(docs.compact_summary)

or from the command line::

    specdocs generate openapi.json -o ./public

Modules:
    app: Typer application and CLI entry point.
    generate: One-call generation of all three documents.
    models: Pydantic models shared across the entire package.
    parser: Spec loading, ``$ref`` resolution and endpoint grouping.
    generator: The three document generators and their shared helpers.
    cache: In-memory document cache with ETags for HTTP serving.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from specdocs.generate import fallback_output, generate  # noqa: E402
from specdocs.models import (  # noqa: E402
    GeneratedDocs,
    GenerateOptions,
    LandingOptions,
)

__all__ = [
    "GenerateOptions",
    "GeneratedDocs",
    "LandingOptions",
    "__version__",
    "fallback_output",
    "generate",
]
