"""In-memory caching of generated documents for HTTP serving.

Re-exports :class:`DocsCache` and the request helpers so callers can do::

    from specdocs.cache import DocsCache, DocKind
"""

from specdocs.cache.cache import (
    CachedResponse,
    DocKind,
    DocsCache,
    is_not_modified,
    wants_markdown,
)

__all__ = ["CachedResponse", "DocKind", "DocsCache", "is_not_modified", "wants_markdown"]
