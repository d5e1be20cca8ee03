"""Exceções de domínio do cliente Workers KV.

Hierarquia:
- WorkersKvError: base, carrega `title` (nome exibido) e `detail` estruturado
- RequestBuildError: violação de contrato ao montar a requisição (local)
- TransportError: falha de transporte/interpretação da resposta
- OperationFailedError: o serviço respondeu, mas reportou falha
"""

from __future__ import annotations

from typing import Any


class WorkersKvError(RuntimeError):
    """Base para todos os erros do cliente Workers KV.

    Args:
        title: Nome curto do erro (ex.: "Failed to Remove a namespace").
        message: Descrição curta.
        detail: Detalhe estruturado (lista de erros remotos, causa serializada...).
    """

    def __init__(self, title: str, message: str = "", detail: Any = None) -> None:
        super().__init__(message or title)
        self.title = title
        self.detail = detail

    def __str__(self) -> str:
        message = self.args[0] if self.args else ""
        if message and message != self.title:
            return f"{self.title}: {message}"
        return self.title


class MissingCredentialsError(WorkersKvError):
    """Credenciais obrigatórias ausentes na construção do cliente."""


class RequestBuildError(WorkersKvError):
    """Descritor de operação inválido para o content type pedido."""


class EmptyBodyError(RequestBuildError):
    """Content type `json` exige corpo não nulo."""


class InvalidBodyShapeError(RequestBuildError):
    """Content type `formData` exige corpo chave/valor."""


class UnrecognizedContentTypeError(WorkersKvError):
    """Resposta com Content-Type fora da allow-list.

    Args:
        content_type: Valor bruto do header (None se ausente).
    """

    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            "Unrecognized content type",
            f"Response content type is not supported: {content_type!r}",
            {"content_type": content_type},
        )
        self.content_type = content_type


class ResponseDecodeError(WorkersKvError):
    """Corpo declarado como JSON não pôde ser decodificado."""


class RedirectNotFollowedError(WorkersKvError):
    """O serviço respondeu com redirect; redirects não são seguidos."""

    def __init__(self, status_code: int, location: str | None) -> None:
        super().__init__(
            "Redirect not followed",
            f"Received HTTP {status_code} redirect",
            {"status_code": status_code, "location": location},
        )
        self.status_code = status_code
        self.location = location


class TransportError(WorkersKvError):
    """Falha ao executar a chamada HTTP; `detail` é a causa serializada."""


class OperationFailedError(WorkersKvError):
    """O serviço respondeu, mas a operação não teve sucesso."""
