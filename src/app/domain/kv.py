"""Modelos tipados dos resultados da API Workers KV.

Campos extras vindos da API são ignorados; apenas os campos usados pelo
cliente são validados.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Namespace(BaseModel):
    """Namespace KV da conta."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Identificador do namespace")
    title: str = Field(..., description="Nome legível do namespace")
    supports_url_encoding: bool | None = Field(
        default=None,
        description="Se o namespace aceita chaves URL-encoded",
    )


class KeyInfo(BaseModel):
    """Chave listada em um namespace."""

    model_config = ConfigDict(extra="ignore")

    name: str
    expiration: int | None = Field(default=None, description="Epoch (segundos) de expiração")
    metadata: Any = Field(default=None, description="Metadado da chave (qualquer valor JSON)")


class ResultInfo(BaseModel):
    """Paginação por cursor da listagem de chaves."""

    model_config = ConfigDict(extra="ignore")

    count: int = 0
    cursor: str = Field(default="", description="Cursor da próxima página (vazio no fim)")


class KeyListPage(BaseModel):
    """Uma página da listagem de chaves."""

    model_config = ConfigDict(extra="ignore")

    result: list[KeyInfo] = Field(default_factory=list)
    result_info: ResultInfo = Field(default_factory=ResultInfo)

    @property
    def has_more(self) -> bool:
        return bool(self.result_info.cursor)
