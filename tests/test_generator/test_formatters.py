"""Tests for specdocs.generator.formatters."""

from __future__ import annotations

import re

import pytest

from specdocs.generator.formatters import (
    DEFAULT_API_KEY_HEADER,
    api_key_header,
    compute_etag,
    estimate_tokens,
    extract_first_paragraph,
    format_query_compact,
    format_security,
    format_security_compact,
)
from specdocs.models import ParameterInfo


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------


class TestFormatSecurityCompact:
    @pytest.mark.parametrize(
        ("security", "expected"),
        [
            (None, "NONE"),
            ([], "NONE"),
            ([{"bearerAuth": []}], "JWT"),
            ([{"apiKeyAuth": []}], "KEY"),
            ([{"bearerAuth": []}, {"apiKeyAuth": []}], "JWT|KEY"),
            ([{"apiKeyAuth": [], "bearerAuth": []}], "JWT|KEY"),
            ([{"oauth2": ["read"]}], "AUTH"),
            ([{"oauth2": []}, {"bearerAuth": []}], "JWT"),
        ],
    )
    def test_shorthand(self, security, expected: str) -> None:
        assert format_security_compact(security) == expected


class TestFormatSecurity:
    def test_no_auth(self) -> None:
        assert format_security(None) == "None required"
        assert format_security([]) == "None required"

    def test_bearer_and_key(self) -> None:
        assert format_security([{"bearerAuth": []}, {"apiKeyAuth": []}]) == (
            "Bearer Token (JWT) or API Key (X-API-Key)"
        )

    def test_labels_are_not_repeated(self) -> None:
        security = [{"bearerAuth": []}, {"bearerAuth": [], "other": []}]
        assert format_security(security) == "Bearer Token (JWT)"

    def test_unknown_scheme(self) -> None:
        assert format_security([{"basicAuth": []}]) == "Required"


class TestApiKeyHeader:
    def test_declared_name(self) -> None:
        assert api_key_header({"type": "apiKey", "name": "X-App-Key", "in": "header"}) == "X-App-Key"

    @pytest.mark.parametrize("scheme", [None, {}, {"name": ""}, {"name": 3}])
    def test_default(self, scheme) -> None:
        assert api_key_header(scheme) == DEFAULT_API_KEY_HEADER


# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------


class TestFormatQueryCompact:
    def test_types_and_required(self) -> None:
        params = [
            ParameterInfo(name="page", location="query", schema={"type": "integer"}),
            ParameterInfo(name="q", location="query", required=True, schema={"type": "string"}),
            ParameterInfo(name="verbose", location="query", schema={"type": "boolean"}),
            ParameterInfo(name="cursor", location="query"),
        ]
        assert format_query_compact(params) == "?page:integer ?q* ?verbose:boolean ?cursor"

    def test_ignores_other_locations(self) -> None:
        params = [
            ParameterInfo(name="id", location="path", required=True),
            ParameterInfo(name="X-Trace", location="header"),
        ]
        assert format_query_compact(params) == ""


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


class TestExtractFirstParagraph:
    def test_stops_at_blank_line(self) -> None:
        text = "A sample API for managing pets and orders.\n\nSupports CRUD operations."
        assert extract_first_paragraph(text) == "A sample API for managing pets and orders."

    def test_joins_wrapped_lines(self) -> None:
        assert extract_first_paragraph("first line\nsecond line\n\nnext") == (
            "first line second line"
        )

    def test_empty(self) -> None:
        assert extract_first_paragraph("") == ""


class TestComputeEtag:
    def test_known_values(self) -> None:
        assert compute_etag("") == '"45h"'
        assert compute_etag("a") == '"3t3a"'

    def test_format(self) -> None:
        etag = compute_etag("# Pet Store API\n\n> A sample API")
        assert re.fullmatch(r'"[0-9a-z]+"', etag)

    def test_stable_and_content_sensitive(self) -> None:
        assert compute_etag("llms.txt") == compute_etag("llms.txt")
        assert compute_etag("llms.txt") != compute_etag("llms.txt ")

    def test_non_ascii_content(self) -> None:
        assert compute_etag("café 🐾") == compute_etag("café 🐾")
        assert compute_etag("é") != compute_etag("e")


class TestEstimateTokens:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("", 0), ("a", 1), ("abcd", 1), ("abcde", 2), ("x" * 400, 100)],
    )
    def test_four_chars_per_token(self, text: str, expected: int) -> None:
        assert estimate_tokens(text) == expected
