"""Small formatting helpers shared by the document generators.

Security requirements, query parameters and descriptions are rendered in two
registers: a compact one for ``llms.txt`` and a readable one for the human
reference and the landing page.  Only the two conventional scheme names
``bearerAuth`` and ``apiKeyAuth`` get dedicated labels; any other scheme
collapses to a generic "auth required" marker.

The module also hosts the two helpers serving layers need to advertise a
generated document: :func:`compute_etag` and :func:`estimate_tokens`.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, Optional

from specdocs.generator.schema import schema_type
from specdocs.models import ParameterInfo, ParameterLocation

BEARER_SCHEME = "bearerAuth"
API_KEY_SCHEME = "apiKeyAuth"
DEFAULT_API_KEY_HEADER = "X-API-Key"

_SECURITY_LABELS = {
    BEARER_SCHEME: "Bearer Token (JWT)",
    API_KEY_SCHEME: "API Key (X-API-Key)",
}

_PARAGRAPH_BREAK = re.compile(r"\n\n")

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def format_security_compact(security: Optional[list[dict[str, Any]]]) -> str:
    """Compact auth notation: ``JWT``, ``KEY``, ``JWT|KEY``, ``AUTH`` or ``NONE``.

    Args:
        security: The operation's security requirement list.  ``None`` (not
            declared) and ``[]`` (explicitly public) both mean no auth.

    Returns:
        The shorthand string.
    """
    if not security:
        return "NONE"

    has_jwt = _requires(security, BEARER_SCHEME)
    has_key = _requires(security, API_KEY_SCHEME)
    if has_jwt and has_key:
        return "JWT|KEY"
    if has_jwt:
        return "JWT"
    if has_key:
        return "KEY"
    return "AUTH"


def format_security(security: Optional[list[dict[str, Any]]]) -> str:
    """Human auth label, e.g. ``"Bearer Token (JWT) or API Key (X-API-Key)"``.

    Returns ``"None required"`` for absent or empty requirements and
    ``"Required"`` when only unrecognised schemes are listed.
    """
    if not security:
        return "None required"

    labels: list[str] = []
    for requirement in security:
        if not isinstance(requirement, dict):
            continue
        for scheme, label in _SECURITY_LABELS.items():
            if scheme in requirement and label not in labels:
                labels.append(label)

    return " or ".join(labels) if labels else "Required"


def format_query_compact(params: Iterable[ParameterInfo]) -> str:
    """Compact query notation: ``?page:integer ?q*``.

    Non-query parameters are ignored; an empty input yields ``""``.
    """
    rendered: list[str] = []
    for param in params:
        if param.location != ParameterLocation.QUERY:
            continue
        type_name = param_type(param)
        type_str = "" if type_name == "string" else f":{type_name}"
        required = "*" if param.required else ""
        rendered.append(f"?{param.name}{required}{type_str}")
    return " ".join(rendered)


def param_type(param: ParameterInfo) -> str:
    """The parameter's schema type, defaulting to ``string``."""
    return schema_type(param.schema_) or "string"


def api_key_header(scheme: Any) -> str:
    """Header name declared by an ``apiKey`` scheme, or ``X-API-Key``."""
    if isinstance(scheme, dict):
        name = scheme.get("name")
        if isinstance(name, str) and name:
            return name
    return DEFAULT_API_KEY_HEADER


def extract_first_paragraph(text: str) -> str:
    """Return the text before the first blank line, on a single line."""
    return _PARAGRAPH_BREAK.split(text, maxsplit=1)[0].replace("\n", " ").strip()


def compute_etag(content: str) -> str:
    """Compute a quoted, content-addressed ETag for *content*.

    Uses the djb2 hash over UTF-16 code units, reduced to 32 bits and
    written in base 36 (e.g. ``'"1fk3qz"'``).  The value is stable across
    processes and platforms; it is not a cryptographic digest.
    """
    value = 5381
    data = content.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 33 + unit) & 0xFFFFFFFF
    return f'"{_to_base36(value)}"'


def estimate_tokens(text: str) -> int:
    """Estimate the LLM token count of *text* (about four characters per token)."""
    return math.ceil(len(text) / 4)


def _requires(security: list[dict[str, Any]], scheme: str) -> bool:
    return any(isinstance(req, dict) and scheme in req for req in security)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))
