"""Montagem de requisições HTTP para a API Workers KV.

Converte um OperationDescriptor em TransportRequest:
- URL completa (endpoint KV da conta + path + query string)
- Corpo codificado conforme o content type
- Headers de autenticação sempre aplicados por último
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from utils.errors import EmptyBodyError, InvalidBodyShapeError

from .models import ContentType, OperationDescriptor, TransportRequest

if TYPE_CHECKING:
    from config.settings import WorkersKvSettings

AUTH_KEY_HEADER = "X-Auth-Key"
AUTH_EMAIL_HEADER = "X-Auth-Email"


def _param_value(value: Any) -> str:
    """Renderiza valor de query string (bool em minúsculas, como JSON)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Serializa parâmetros em query string; None ou vazio gera string vazia."""
    if not params:
        return ""
    return urlencode([(key, _param_value(value)) for key, value in params.items()])


def auth_headers(settings: WorkersKvSettings) -> dict[str, str]:
    """Headers fixos de autenticação."""
    return {
        AUTH_KEY_HEADER: settings.global_api_key,
        AUTH_EMAIL_HEADER: settings.account_email,
    }


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _encode_body(
    descriptor: OperationDescriptor,
) -> tuple[str | None, dict[str, str] | None, dict[str, str]]:
    """Codifica o corpo conforme o content type.

    Returns:
        (content, form_fields, headers específicos do content type)

    Raises:
        EmptyBodyError: content type json sem corpo
        InvalidBodyShapeError: content type formData com corpo não chave/valor
    """
    body = descriptor.body
    content_type = descriptor.content_type

    if content_type == ContentType.JSON:
        if body is None:
            raise EmptyBodyError("Empty body", "body is empty")
        return json.dumps(body), None, {"Content-Type": "application/json"}

    if content_type == ContentType.PLAIN_TEXT:
        # Mesmo valores simples seguem como JSON (ex.: abc -> "abc")
        content = None if body is None else json.dumps(body)
        return content, None, {"Content-Type": "text/plain"}

    if content_type == ContentType.FORM_DATA:
        if not isinstance(body, Mapping):
            raise InvalidBodyShapeError(
                "Invalid body shape",
                "Received non object data to form a formData",
                {"body_type": type(body).__name__},
            )
        fields = {str(key): _form_value(value) for key, value in body.items()}
        return None, fields, {}

    content = None if body is None else json.dumps(body)
    return content, None, {}


def build_transport_request(
    descriptor: OperationDescriptor,
    settings: WorkersKvSettings,
) -> TransportRequest:
    """Monta a TransportRequest de um descriptor.

    Args:
        descriptor: Operação lógica (método, path, params, corpo, content type)
        settings: Credenciais e endpoint

    Returns:
        Requisição pronta para o transporte
    """
    content, form_fields, headers = _encode_body(descriptor)

    url = settings.kv_endpoint + descriptor.path
    query = encode_query(descriptor.params)
    if query:
        url = f"{url}?{query}"

    return TransportRequest(
        url=url,
        method=descriptor.method,
        headers={**headers, **auth_headers(settings)},
        content=content,
        form_fields=form_fields,
    )
