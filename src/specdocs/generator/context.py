"""Resolve every optional spec field once, before any document is rendered.

Each generator starts with :func:`build_context`, which reads the loosely
shaped OpenAPI dict and the caller's :class:`~specdocs.models.GenerateOptions`
and produces a :class:`DocumentContext` in which every field has a concrete
value.  Rendering code reads the context only, so defaults ("API" title, empty
base URL, "Other" tag, ...) are decided in exactly one place.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from specdocs.generator.formatters import extract_first_paragraph
from specdocs.models import EndpointInfo, GenerateOptions, LandingOptions, TagDefinition
from specdocs.parser.extractor import extract_tags, group_by_tag

DEFAULT_TITLE = "API"


class DocumentContext(BaseModel):
    """Everything a generator needs, with defaults already applied.

    ``group_order`` lists the declared tags that have endpoints, in
    declaration order, followed by undeclared tags in first-seen order.
    ``security_schemes`` is empty when the spec declares none.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    base_url: str
    version: str
    description: str
    first_paragraph: str
    tags: list[TagDefinition] = Field(default_factory=list)
    groups: dict[str, list[EndpointInfo]] = Field(default_factory=dict)
    group_order: list[str] = Field(default_factory=list)
    security_schemes: dict[str, Any] = Field(default_factory=dict)
    landing: LandingOptions = Field(default_factory=LandingOptions)

    @property
    def endpoint_count(self) -> int:
        return sum(len(endpoints) for endpoints in self.groups.values())

    def is_declared(self, tag: str) -> bool:
        return any(t.name == tag for t in self.tags)

    def tag_description(self, tag: str) -> str:
        for definition in self.tags:
            if definition.name == tag:
                return definition.description
        return ""

    def has_scheme(self, name: str) -> bool:
        return name in self.security_schemes


def build_context(
    spec: dict[str, Any], options: Optional[GenerateOptions] = None
) -> DocumentContext:
    """Apply option overrides and spec defaults.

    Args:
        spec: The (normally ``$ref``-resolved) OpenAPI document.
        options: Caller overrides; ``None`` means no overrides.

    Returns:
        A fully populated :class:`DocumentContext`.
    """
    options = options or GenerateOptions()
    info = _as_dict(spec.get("info"))
    description = _as_str(info.get("description"))

    tags = _unique_tags(extract_tags(spec))
    groups = group_by_tag(spec)
    declared = [tag.name for tag in tags]

    group_order = [name for name in declared if groups.get(name)]
    group_order.extend(name for name in groups if name not in declared)

    components = _as_dict(spec.get("components"))

    return DocumentContext(
        title=options.title or _as_str(info.get("title")) or DEFAULT_TITLE,
        base_url=options.base_url or _first_server_url(spec),
        version=_as_str(info.get("version")),
        description=description,
        first_paragraph=extract_first_paragraph(description),
        tags=tags,
        groups=groups,
        group_order=group_order,
        security_schemes=_as_dict(components.get("securitySchemes")),
        landing=options.landing,
    )


def _first_server_url(spec: dict[str, Any]) -> str:
    servers = spec.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        return _as_str(servers[0].get("url"))
    return ""


def _unique_tags(tags: list[TagDefinition]) -> list[TagDefinition]:
    seen: set[str] = set()
    unique: list[TagDefinition] = []
    for tag in tags:
        if tag.name not in seen:
            seen.add(tag.name)
            unique.append(tag)
    return unique


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    # Versions are often written unquoted in YAML (1.0 -> float)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""
