"""Generate command -- write the documentation files for one OpenAPI spec.

``specdocs generate SPEC`` loads the spec (file, URL or ``-`` for stdin),
renders the requested documents and writes them into the output directory:

* ``llms.txt`` -- compact summary for LLM context windows
* ``to-humans.md`` -- full Markdown reference
* ``index.html`` -- static landing page

Option values fall back to the resolved configuration
(:func:`~specdocs.config.resolve_config`), so a project can pin its base URL
and title in ``./specdocs.json`` and run ``specdocs generate openapi.yaml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specdocs.exit_codes import EXIT_GENERIC_FAILURE
from specdocs.models import DocFormat, GeneratedDocs
from specdocs.output import debug, error, get_output, suggest, success, warning

OUTPUT_FILES: dict[DocFormat, str] = {
    DocFormat.LLMS_TXT: "llms.txt",
    DocFormat.HUMAN: "to-humans.md",
    DocFormat.HTML: "index.html",
}
"""File name written for each single-document format."""


def generate_command(
    spec: str = typer.Argument(
        help="Path, URL, or '-' (stdin) of an OpenAPI 3.x spec (JSON or YAML)."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Directory to write files into."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-b", help="Override the base URL from the spec."
    ),
    title: Optional[str] = typer.Option(
        None, "--title", "-t", help="Override the API title from the spec."
    ),
    doc_format: Optional[DocFormat] = typer.Option(
        None, "--format", "-f", help="Which documents to write.", case_sensitive=False
    ),
    no_prompt: bool = typer.Option(
        False, "--no-prompt", help="Hide the AI prompt callout on the landing page."
    ),
    prompt_text: Optional[str] = typer.Option(
        None, "--prompt-text", help="Custom text for the landing page prompt callout."
    ),
    no_powered_by: bool = typer.Option(
        False, "--no-powered-by", help="Hide the generator credit on the landing page."
    ),
) -> None:
    """Generate llms.txt, to-humans.md and index.html from an OpenAPI spec.

    Example::

        specdocs generate openapi.json
        specdocs generate https://api.example.com/openapi.json -o ./public
        specdocs generate openapi.yaml -f llms-txt --base-url https://api.example.com
    """
    from specdocs.config import atomic_write, resolve_config
    from specdocs.exceptions import SpecdocsError
    from specdocs.generate import generate
    from specdocs.generator.formatters import estimate_tokens
    from specdocs.parser import load_spec, validate_openapi_version

    landing_overrides = {
        "show_prompt": False if no_prompt else None,
        "prompt_text": prompt_text,
        "show_powered_by": False if no_powered_by else None,
    }

    try:
        config = resolve_config(
            {
                "output_dir": output_dir,
                "base_url": base_url,
                "title": title,
                "format": doc_format.value if doc_format is not None else None,
                "landing": landing_overrides,
            }
        )
        debug(f"Loading spec from: {spec}")
        raw = load_spec(spec)
        version = validate_openapi_version(raw)
        debug(f"OpenAPI version: {version}")
    except SpecdocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not raw.get("paths"):
        warning("The spec declares no paths; only the overview will be rendered.")

    docs = generate(raw, config.to_generate_options())

    out_path = Path(config.output_dir)
    rows: list[list[str]] = []
    for fmt in selected_formats(config.format):
        target = out_path / OUTPUT_FILES[fmt]
        content = document_for(docs, fmt)
        try:
            atomic_write(target, content)
        except OSError as exc:
            error(f"Cannot write {target}: {exc}")
            raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None
        rows.append([str(target), str(len(content.encode("utf-8"))), str(estimate_tokens(content))])

    get_output().print_table(["File", "Bytes", "Tokens"], rows, title="Generated documentation")
    success(f"Wrote {len(rows)} file(s) to {out_path}")
    suggest("Serve the directory alongside /openapi.json so the landing page links resolve.")


def selected_formats(doc_format: DocFormat) -> list[DocFormat]:
    """Expand ``all`` into the three single-document formats."""
    if doc_format == DocFormat.ALL:
        return [DocFormat.LLMS_TXT, DocFormat.HUMAN, DocFormat.HTML]
    return [doc_format]


def document_for(docs: GeneratedDocs, doc_format: DocFormat) -> str:
    """Pick the generated document matching a single-document format."""
    if doc_format == DocFormat.LLMS_TXT:
        return docs.compact_summary
    if doc_format == DocFormat.HUMAN:
        return docs.human_reference
    return docs.landing_page
