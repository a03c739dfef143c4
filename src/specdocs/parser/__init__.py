"""OpenAPI spec parser -- load, resolve ``$ref`` pointers, and extract endpoints.

This sub-package is responsible for the first half of the specdocs pipeline:
turning a raw OpenAPI 3.x document into the tag-grouped
:class:`~specdocs.models.EndpointInfo` records that the generators render.

Typical usage::

    from specdocs.parser import load_spec, resolve_refs, group_by_tag

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    groups = group_by_tag(resolve_refs(raw))

Sub-modules:

* :mod:`~specdocs.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specdocs.parser.resolver` -- Recursive ``$ref`` resolution and
  ``allOf`` merging with circular-reference detection.
* :mod:`~specdocs.parser.extractor` -- Walks the spec tree and groups
  operations by tag.
"""

from specdocs.parser.extractor import (
    UNTAGGED,
    extract_params_by_location,
    extract_tags,
    group_by_tag,
)
from specdocs.parser.loader import load_spec, validate_openapi_version
from specdocs.parser.resolver import resolve_refs

__all__ = [
    "UNTAGGED",
    "extract_params_by_location",
    "extract_tags",
    "group_by_tag",
    "load_spec",
    "resolve_refs",
    "validate_openapi_version",
]
