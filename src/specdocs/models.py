"""Canonical Pydantic models shared across all specdocs modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory
or passed programmatically to :func:`~specdocs.generate.generate`:
    :class:`LandingOptions`, :class:`GenerateOptions`, :class:`DocFormat`
    and :class:`DocsConfig`.

**Extraction output models** -- produced by the endpoint extractor and
consumed by the three document generators:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`ParameterInfo`,
    :class:`EndpointInfo`, :class:`TagDefinition` and :class:`GeneratedDocs`.

Schema nodes, response objects and the OpenAPI document itself are kept as
plain ``dict`` trees: they are arbitrary JSON and must round-trip unknown keys
untouched. Extraction models are frozen and shared by every generator in a
generation pass.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Generation options ---


class LandingOptions(BaseModel):
    """Options that only affect the HTML landing page."""

    model_config = ConfigDict(frozen=True)

    show_prompt: bool = Field(
        default=True, description="Render the 'tell your AI agent' prompt callout"
    )
    prompt_text: Optional[str] = Field(
        default=None,
        description="Custom prompt text (defaults to 'Learn <base url>')",
    )
    show_powered_by: bool = Field(
        default=True, description="Render the generator credit in header and footer"
    )


class GenerateOptions(BaseModel):
    """Caller overrides applied identically to all three generators.

    Any field left as ``None`` falls back to the spec itself: ``info.title``
    for the title and the first ``servers`` entry for the base URL.

    Example::

        GenerateOptions(
            title="Pet Store",
            base_url="https://api.petstore.io",
            landing=LandingOptions(show_prompt=False),
        )
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    base_url: Optional[str] = None
    landing: LandingOptions = Field(default_factory=LandingOptions)


class DocFormat(str, enum.Enum):
    """Which documents the CLI writes to disk."""

    LLMS_TXT = "llms-txt"
    HUMAN = "human"
    HTML = "html"
    ALL = "all"


class DocsConfig(BaseModel):
    """User-wide defaults persisted at ``~/.config/specdocs/config.json``.

    Loaded and saved by :func:`~specdocs.config.load_global_config` and
    :func:`~specdocs.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~specdocs.config.resolve_config`
    for the full precedence chain.
    """

    output_dir: str = Field(default="./docs", description="Where generated files go")
    format: DocFormat = Field(default=DocFormat.ALL, description="Documents to write")
    base_url: Optional[str] = Field(
        default=None, description="Override the base URL taken from the spec"
    )
    title: Optional[str] = Field(
        default=None, description="Override the title taken from the spec"
    )
    landing: LandingOptions = Field(default_factory=LandingOptions)

    def to_generate_options(self) -> GenerateOptions:
        """Project the generator-relevant fields onto :class:`GenerateOptions`."""
        return GenerateOptions(
            title=self.title, base_url=self.base_url, landing=self.landing
        )


# --- Extraction output models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods treated as operations when walking a path item.

    Any other key under a path item (``parameters``, ``summary``, ``head``,
    vendor extensions) is ignored.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class ParameterInfo(BaseModel):
    """A single parameter of an operation, as declared in the spec."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")


class EndpointInfo(BaseModel):
    """One (path, method) pair flattened out of the spec's ``paths`` tree.

    ``security`` is ``None`` when the operation declares no ``security`` key
    at all, which is distinct from an explicit empty list. Both render as
    "no auth required".
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    summary: str = ""
    description: str = ""
    security: Optional[list[dict[str, Any]]] = None
    parameters: list[ParameterInfo] = Field(default_factory=list)
    body: Optional[dict[str, Any]] = None
    responses: dict[str, Any] = Field(default_factory=dict)


class TagDefinition(BaseModel):
    """An entry of the spec's top-level ``tags`` list."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class GeneratedDocs(BaseModel):
    """The three documents produced by one generation pass."""

    model_config = ConfigDict(frozen=True)

    compact_summary: str
    human_reference: str
    landing_page: str
