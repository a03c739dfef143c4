"""In-memory document cache for serving the generated formats over HTTP.

A web integration mounts four routes (``/``, ``/llms.txt``, ``/to-humans.md``
and ``/openapi.json``).  :class:`DocsCache` generates all documents on first
use, keeps them for the lifetime of the process and precomputes one ETag per
document so handlers can answer conditional requests with ``304 Not
Modified``.

Generation failures never reach the client: the error is logged and the
placeholder documents from :func:`~specdocs.generate.fallback_output` are
cached instead.

The landing route negotiates on ``Accept``: a client asking for
``text/markdown`` gets the ``llms.txt`` summary plus an ``X-Markdown-Tokens``
estimate instead of HTML.

See Also:
    :func:`~specdocs.generator.formatters.compute_etag` for the ETag format.
"""

from __future__ import annotations

import enum
import json
import logging
import threading
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from specdocs.generate import fallback_output, generate
from specdocs.generator.formatters import compute_etag, estimate_tokens
from specdocs.models import GeneratedDocs, GenerateOptions

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=3600"
MARKDOWN_MEDIA_TYPE = "text/markdown"
MARKDOWN_CONTENT_TYPE = f"{MARKDOWN_MEDIA_TYPE}; charset=utf-8"


class DocKind(str, enum.Enum):
    """A document served by the integration routes."""

    LANDING = "landing"
    LLMS_TXT = "llms-txt"
    HUMAN = "human"
    OPENAPI = "openapi"


CONTENT_TYPES: dict[DocKind, str] = {
    DocKind.LANDING: "text/html; charset=utf-8",
    DocKind.LLMS_TXT: "text/plain; charset=utf-8",
    DocKind.HUMAN: MARKDOWN_CONTENT_TYPE,
    DocKind.OPENAPI: "application/json; charset=utf-8",
}


class CachedResponse(BaseModel):
    """A ready-to-send response: status, headers and body."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str]
    body: str


class CacheEntry(BaseModel):
    """Generated documents plus their ETags, keyed by :class:`DocKind`."""

    model_config = ConfigDict(frozen=True)

    docs: GeneratedDocs
    spec_json: str
    etags: dict[DocKind, str]


def wants_markdown(accept: Optional[str]) -> bool:
    """True when an ``Accept`` header asks for ``text/markdown``."""
    return isinstance(accept, str) and MARKDOWN_MEDIA_TYPE in accept


def is_not_modified(if_none_match: Optional[str], etag: str) -> bool:
    """True when the client's ``If-None-Match`` equals the current *etag*."""
    return if_none_match is not None and if_none_match == etag


class DocsCache:
    """Lazily generated, process-lifetime cache of all served documents.

    Args:
        spec: The raw OpenAPI document.  It is never modified.
        options: Generation options shared by all documents.

    Example::

        cache = DocsCache(spec, GenerateOptions(base_url="https://api.example.com"))
        response = cache.response_for(
            DocKind.LANDING,
            accept=request.headers.get("accept"),
            if_none_match=request.headers.get("if-none-match"),
        )
    """

    def __init__(
        self, spec: dict[str, Any], options: Optional[GenerateOptions] = None
    ) -> None:
        self._spec = spec
        self._options = options or GenerateOptions()
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()

    @property
    def entry(self) -> CacheEntry:
        """The cached documents, generating them on first access."""
        if self._entry is None:
            with self._lock:
                if self._entry is None:
                    self._entry = self._build()
        return self._entry

    @property
    def docs(self) -> GeneratedDocs:
        return self.entry.docs

    def body(self, kind: DocKind) -> str:
        """Return the document served for *kind*."""
        entry = self.entry
        if kind == DocKind.OPENAPI:
            return entry.spec_json
        if kind == DocKind.LLMS_TXT:
            return entry.docs.compact_summary
        if kind == DocKind.HUMAN:
            return entry.docs.human_reference
        return entry.docs.landing_page

    def etag(self, kind: DocKind) -> str:
        return self.entry.etags[kind]

    def headers_for(self, kind: DocKind, markdown: bool = False) -> dict[str, str]:
        """Response headers for *kind*.

        Args:
            kind: The route being served.
            markdown: Only meaningful for :attr:`DocKind.LANDING`; when true
                the headers describe the negotiated Markdown summary.

        Returns:
            ``Content-Type``, ``ETag`` and ``Cache-Control``, plus ``Vary``
            on the landing route and ``X-Markdown-Tokens`` when Markdown
            was negotiated.
        """
        served = self._served_kind(kind, markdown)
        headers = {
            "Content-Type": CONTENT_TYPES[served],
            "ETag": self.etag(served),
            "Cache-Control": CACHE_CONTROL,
        }
        if kind == DocKind.LANDING:
            headers["Vary"] = "accept"
            if served == DocKind.LLMS_TXT:
                headers["Content-Type"] = MARKDOWN_CONTENT_TYPE
                headers["X-Markdown-Tokens"] = str(estimate_tokens(self.body(served)))
        return headers

    def response_for(
        self,
        kind: DocKind,
        accept: Optional[str] = None,
        if_none_match: Optional[str] = None,
    ) -> CachedResponse:
        """Build the full response for one request to the *kind* route.

        Returns ``304`` with an empty body when *if_none_match* matches the
        served document's ETag, ``200`` with the document otherwise.
        """
        markdown = kind == DocKind.LANDING and wants_markdown(accept)
        served = self._served_kind(kind, markdown)
        headers = self.headers_for(kind, markdown)

        if is_not_modified(if_none_match, self.etag(served)):
            return CachedResponse(status_code=304, headers=headers, body="")
        return CachedResponse(status_code=200, headers=headers, body=self.body(served))

    @staticmethod
    def _served_kind(kind: DocKind, markdown: bool) -> DocKind:
        if kind == DocKind.LANDING and markdown:
            return DocKind.LLMS_TXT
        return kind

    def _build(self) -> CacheEntry:
        try:
            docs = generate(self._spec, self._options)
        except Exception:
            logger.exception("Failed to generate docs; serving fallback output")
            docs = fallback_output()
        else:
            logger.info(
                "Generated docs: landing (%dB), llms.txt (%dB), to-humans.md (%dB)",
                len(docs.landing_page),
                len(docs.compact_summary),
                len(docs.human_reference),
            )

        spec_json = _serialise_spec(self._spec)
        return CacheEntry(
            docs=docs,
            spec_json=spec_json,
            etags={
                DocKind.LANDING: compute_etag(docs.landing_page),
                DocKind.LLMS_TXT: compute_etag(docs.compact_summary),
                DocKind.HUMAN: compute_etag(docs.human_reference),
                DocKind.OPENAPI: compute_etag(spec_json),
            },
        )


def _serialise_spec(spec: Any) -> str:
    try:
        return json.dumps(spec, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        logger.warning("OpenAPI document is not JSON-serialisable; serving '{}'")
        return "{}"
