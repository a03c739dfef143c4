"""Read an OpenAPI document from disk, a URL, or stdin.

Generators never touch I/O; they take a plain ``dict``. This module is the
CLI's way of getting one: it reads raw text from wherever the user pointed,
works out whether that text is JSON or YAML, and checks that the result is an
OpenAPI 3.x document before anything gets rendered from it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specdocs.exceptions import SpecParseError

FETCH_TIMEOUT = 30.0

_EXTENSION_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from *source*.

    Args:
        source: ``-`` for stdin, an ``http(s)://`` URL, or a file path.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the source cannot be read or is not a JSON/YAML
            object.
    """
    if source == "-":
        text, fmt = _read_stdin(), ""
    elif source.startswith(("http://", "https://")):
        text, fmt = _fetch(source)
    else:
        text, fmt = _read_file(Path(source))
    return _parse_content(text, hint=fmt)


def _read_stdin() -> str:
    try:
        text = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input received from stdin")
    return text


def _fetch(url: str) -> tuple[str, str]:
    """GET *url* and return its body with a format guessed from Content-Type."""
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "").lower()
    if "json" in content_type:
        fmt = "json"
    elif "yaml" in content_type or "yml" in content_type:
        fmt = "yaml"
    else:
        fmt = ""
    return response.text, fmt


def _read_file(path: Path) -> tuple[str, str]:
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"Spec file is empty: {path}")
    return text, _EXTENSION_FORMATS.get(path.suffix.lower(), "")


def _as_document(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    got = "empty document" if value is None else type(value).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {got})")


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON, falling back to YAML.

    A ``json`` hint makes JSON errors final; a ``yaml`` hint skips the JSON
    attempt. Without a hint both parsers are tried and both errors reported.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _as_document(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _as_document(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError("\n  ".join(["Failed to parse spec as JSON or YAML", *errors]))


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version, which must be ``3.x``.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or any other major version.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Convert it to OpenAPI 3 first (https://converter.swagger.io)."
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version = str(version)
    if not version.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version}. Only 3.x documents can be rendered."
        )
    return version
