"""Settings do cliente Workers KV.

Credenciais e endpoint da API de storage KV da Cloudflare.
Leitura de env centralizada aqui; o cliente recebe a instância pronta.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

# Constantes da API Cloudflare
CF_API_BASE_URL: str = "https://api.cloudflare.com/client/v4"
CF_KV_API_PATH: str = "storage/kv"


class WorkersKvSettings(BaseModel):
    """Configurações de acesso ao Workers KV."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    account_email: str = Field(
        default="",
        description="Email da conta Cloudflare (header X-Auth-Email).",
    )
    account_id: str = Field(
        default="",
        description="ID da conta Cloudflare (compõe o path da API).",
    )
    global_api_key: str = Field(
        default="",
        description="Global API key da conta (header X-Auth-Key).",
    )
    api_base_url: str = Field(
        default=CF_API_BASE_URL,
        min_length=8,
        description="URL base da API v4.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por requisição HTTP (segundos).",
    )

    @property
    def kv_endpoint(self) -> str:
        """URL base das operações KV da conta (com barra final)."""
        base = self.api_base_url.rstrip("/")
        return f"{base}/accounts/{self.account_id}/{CF_KV_API_PATH}/"

    def validate_credentials(self) -> list[str]:
        """Valida credenciais obrigatórias.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []
        if not self.account_email:
            errors.append("CF_EMAIL não configurado")
        if not self.account_id:
            errors.append("CF_ACCOUNT_ID não configurado")
        if not self.global_api_key:
            errors.append("CF_GLOBAL_API_KEY não configurado")
        return errors


def _load_workers_kv_from_env() -> WorkersKvSettings:
    """Carrega WorkersKvSettings a partir de variáveis de ambiente."""
    return WorkersKvSettings(
        account_email=os.getenv("CF_EMAIL", ""),
        account_id=os.getenv("CF_ACCOUNT_ID", ""),
        global_api_key=os.getenv("CF_GLOBAL_API_KEY", ""),
        api_base_url=os.getenv("CF_API_BASE_URL", CF_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("CF_REQUEST_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_workers_kv_settings() -> WorkersKvSettings:
    """Retorna instância cacheada de WorkersKvSettings."""
    return _load_workers_kv_from_env()


__all__ = [
    "CF_API_BASE_URL",
    "CF_KV_API_PATH",
    "WorkersKvSettings",
    "get_workers_kv_settings",
]
