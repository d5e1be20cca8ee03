"""Protocolos HTTP usados pelo app.

Evita dependência direta da implementação concreta na camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import httpx

    from api.connectors.workers_kv.models import TransportRequest


class KvTransportProtocol(Protocol):
    """Contrato mínimo para o transporte do Workers KV.

    Uma chamada HTTP por TransportRequest, redirects desligados, corpo
    da resposta já lido quando o método retorna.
    """

    async def send(self, request: TransportRequest) -> httpx.Response: ...
