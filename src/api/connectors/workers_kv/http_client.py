"""Cliente HTTP do conector Workers KV.

Uma chamada HTTP por operação lógica:
- Redirects desligados; status de redirect vira RedirectNotFollowedError
- Sem retry/backoff nesta camada
- Cliente httpx injetável (pool gerenciado por quem chama, ou testes)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from utils.errors import RedirectNotFollowedError

from .kv_logging import log_http_exchange

if TYPE_CHECKING:
    from .models import TransportRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float | None = 30.0
    verify_ssl: bool = True


class KvHttpClient:
    """Executa TransportRequests contra a API.

    Args:
        config: Timeout e TLS. Ignorados quando `client` é injetado.
        client: httpx.AsyncClient externo; se None, um cliente é criado
            e fechado a cada chamada.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._client = client

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            verify=self._config.verify_ssl,
            follow_redirects=False,
        )

    async def send(self, request: TransportRequest) -> httpx.Response:
        """Envia a requisição e devolve a resposta com corpo já lido.

        Raises:
            RedirectNotFollowedError: qualquer status de redirect (3xx), com ou
                sem Location
            httpx.HTTPError: falhas de rede/protocolo (propagadas)
        """
        files = None
        if request.form_fields is not None:
            # (None, valor) -> campo multipart sem filename
            files = {key: (None, value) for key, value in request.form_fields.items()}

        if self._client is not None:
            response = await self._request(self._client, request, files)
        else:
            async with self._new_client() as client:
                response = await self._request(client, request, files)

        log_http_exchange(request.method, request.url, response.status_code)

        if httpx.codes.is_redirect(response.status_code):
            raise RedirectNotFollowedError(
                response.status_code,
                response.headers.get("location"),
            )
        return response

    async def _request(
        self,
        client: httpx.AsyncClient,
        request: TransportRequest,
        files: dict[str, tuple[None, str]] | None,
    ) -> httpx.Response:
        response = await client.request(
            request.method,
            request.url,
            content=request.content,
            files=files,
            headers=request.headers,
            follow_redirects=False,
        )
        await response.aread()
        return response
