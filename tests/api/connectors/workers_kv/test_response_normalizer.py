"""Testes de normalização de respostas Workers KV."""

from __future__ import annotations

import logging

import httpx
import pytest

from api.connectors.workers_kv import normalize_response, shorten_content_type
from api.connectors.workers_kv.response_normalizer import unwrap_string_payload
from utils.errors import ResponseDecodeError, UnrecognizedContentTypeError


class TestShortenContentType:
    """Allow-list de content types."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("application/json", "object"),
            ("application/json; charset=utf-8", "object"),
            ("Application/JSON", "object"),
            ("application/octet-stream", "string"),
        ],
    )
    def test_allowed(self, raw: str, expected: str) -> None:
        assert shorten_content_type(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "text/html", "text/plain", "application/xml"])
    def test_rejected(self, raw: str | None) -> None:
        with pytest.raises(UnrecognizedContentTypeError) as exc_info:
            shorten_content_type(raw)
        assert exc_info.value.content_type == raw


class TestUnwrapString:
    """Remoção do par de aspas externo."""

    def test_quoted_text(self) -> None:
        raw = '"abc"'
        assert len(raw) == 5
        assert unwrap_string_payload(raw) == "abc"

    def test_unquoted_text_is_cut_and_warned(self, caplog: pytest.LogCaptureFixture) -> None:
        """Sem aspas o corte acontece do mesmo jeito, com warning."""
        caplog.set_level(logging.WARNING)
        assert unwrap_string_payload("abc") == "b"
        assert any(r.message == "kv_string_payload_unquoted" for r in caplog.records)


class TestNormalizeResponse:
    """normalize_response sobre httpx.Response."""

    @pytest.mark.asyncio
    async def test_json_object(self) -> None:
        response = httpx.Response(200, json={"success": True, "result": []})
        canonical = await normalize_response(response)
        assert canonical.short_content_type == "object"
        assert canonical.payload == {"success": True, "result": []}
        assert canonical.http_success is True
        assert canonical.status_code == 200

    @pytest.mark.asyncio
    async def test_http_failure_preserved(self) -> None:
        response = httpx.Response(404, json={"success": False})
        canonical = await normalize_response(response)
        assert canonical.http_success is False
        assert canonical.status_code == 404

    @pytest.mark.asyncio
    async def test_octet_stream_string(self) -> None:
        response = httpx.Response(
            200,
            content=b'"abc"',
            headers={"content-type": "application/octet-stream"},
        )
        canonical = await normalize_response(response)
        assert canonical.short_content_type == "string"
        assert canonical.payload == "abc"

    @pytest.mark.asyncio
    async def test_unrecognized_content_type(self) -> None:
        response = httpx.Response(200, content=b"<html/>", headers={"content-type": "text/html"})
        with pytest.raises(UnrecognizedContentTypeError):
            await normalize_response(response)

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        response = httpx.Response(
            200,
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        with pytest.raises(ResponseDecodeError) as exc_info:
            await normalize_response(response)
        assert exc_info.value.detail == {"status_code": 200}
