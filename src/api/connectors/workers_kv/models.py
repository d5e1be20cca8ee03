"""Modelos de transporte e classificação do conector Workers KV."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Modo de validação do formato da resposta; False desliga a validação
ValidationMode = Literal["full", "withoutResult", "string", False]

ShortContentType = Literal["object", "string"]

CommandType = Literal["CRUD", "namespace", "other"]


class ContentType(StrEnum):
    """Codificação do corpo da requisição."""

    NONE = "none"
    JSON = "json"
    PLAIN_TEXT = "plainText"
    FORM_DATA = "formData"

    def __str__(self) -> str:
        return self.value


class Verdict(StrEnum):
    """Resultado em três valores de uma operação remota.

    - SUCCESS: operação confirmada pelo serviço
    - FAILURE: serviço respondeu e reportou falha (ou resposta mal-formada)
    - INDETERMINATE: não foi possível determinar o resultado
    """

    SUCCESS = "success"
    FAILURE = "failure"
    INDETERMINATE = "indeterminate"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationDescriptor:
    """Descrição lógica de uma chamada HTTP (imutável por chamada)."""

    method: HttpMethod
    path: str
    params: dict[str, Any] | None = None
    body: Any = None
    content_type: ContentType = ContentType.NONE


@dataclass(frozen=True)
class TransportRequest:
    """Requisição concreta derivada de um OperationDescriptor.

    `content` e `form_fields` são mutuamente exclusivos.
    """

    url: str
    method: HttpMethod
    headers: dict[str, str] = field(default_factory=dict)
    content: str | None = None
    form_fields: dict[str, str] | None = None


@dataclass(frozen=True)
class CanonicalResponse:
    """Resposta normalizada pelo content type declarado."""

    http_success: bool
    status_code: int
    short_content_type: ShortContentType
    payload: Any
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SuccessVerdict:
    """Veredito do classificador.

    Attributes:
        verdict: Resultado em três valores
        well_formed: True/False, ou None quando a validação foi desligada
        error: Lista `errors` do envelope, quando aplicável
    """

    verdict: Verdict
    well_formed: bool | None
    error: list[dict[str, Any]] | None = None


@dataclass(frozen=True)
class OwnResponse:
    """Resposta canônica somada ao veredito (saída do bridge)."""

    response: CanonicalResponse
    success: Verdict
    well_formed: bool | None
    error: list[dict[str, Any]] | None = None

    @property
    def payload(self) -> Any:
        return self.response.payload

    @property
    def short_content_type(self) -> ShortContentType:
        return self.response.short_content_type


@dataclass(frozen=True)
class CommandInput:
    """Entrada lógica de um comando (independe da codificação HTTP)."""

    relative_path_param: dict[str, str] | None = None
    data: Any = None
    url_param: dict[str, Any] | None = None


@dataclass(frozen=True)
class CommandRecord:
    """Qual operação lógica foi pedida (usado para observabilidade)."""

    command_type: CommandType
    command: str
    input: CommandInput = field(default_factory=CommandInput)


@dataclass(frozen=True)
class OperationOutcome:
    """Resultado de uma operação concluída, entregue ao monitor e aos handlers."""

    verdict: Verdict
    command: CommandRecord
    response: CanonicalResponse | None = None
    error_detail: Any = None
