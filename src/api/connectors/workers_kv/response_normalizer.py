"""Normalização de respostas da API Workers KV.

O content type declarado decide o formato do payload:
- application/json          -> "object" (JSON decodificado)
- application/octet-stream  -> "string" (texto sem o par de aspas externo)

Qualquer outro valor é erro fatal de classificação.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from utils.errors import ResponseDecodeError, UnrecognizedContentTypeError

from .models import CanonicalResponse, ShortContentType

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

CONTENT_TYPE_MAP: dict[str, ShortContentType] = {
    "application/json": "object",
    "application/octet-stream": "string",
}


def shorten_content_type(raw_content_type: str | None) -> ShortContentType:
    """Mapeia o header Content-Type para "object" ou "string".

    Parâmetros do media type (ex.: `; charset=utf-8`) são ignorados.

    Raises:
        UnrecognizedContentTypeError: header ausente ou fora da allow-list
    """
    if not raw_content_type:
        raise UnrecognizedContentTypeError(raw_content_type)
    media_type = raw_content_type.split(";", 1)[0].strip().lower()
    short = CONTENT_TYPE_MAP.get(media_type)
    if short is None:
        raise UnrecognizedContentTypeError(raw_content_type)
    return short


def unwrap_string_payload(text: str) -> str:
    """Remove exatamente um caractere inicial e um final.

    O serviço devolve valores entre aspas (`"abc"` -> `abc`). Não há
    verificação de que as aspas existem; texto fora desse formato é
    cortado do mesmo jeito e apenas gera warning.
    """
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        logger.warning("kv_string_payload_unquoted", extra={"length": len(text)})
    return text[1:-1]


async def normalize_response(response: httpx.Response) -> CanonicalResponse:
    """Converte a resposta HTTP em CanonicalResponse.

    Raises:
        UnrecognizedContentTypeError: content type não suportado
        ResponseDecodeError: corpo "object" com JSON inválido
    """
    raw_content_type = response.headers.get("content-type")
    short = shorten_content_type(raw_content_type)

    await response.aread()

    if short == "object":
        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise ResponseDecodeError(
                "Invalid JSON response",
                "Response declared as JSON could not be decoded",
                {"status_code": response.status_code},
            ) from exc
    else:
        payload = unwrap_string_payload(response.text)

    return CanonicalResponse(
        http_success=response.is_success,
        status_code=response.status_code,
        short_content_type=short,
        payload=payload,
        headers=dict(response.headers),
    )
