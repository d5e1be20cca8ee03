"""Factories do cliente Workers KV."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from api.connectors.workers_kv import HttpClientConfig, KvHttpClient
from app.workers_kv import WorkersKvClient
from config.settings import get_workers_kv_settings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.protocols import ActivitySinkProtocol, OutcomeHandlerProtocol
    from config.settings import WorkersKvSettings

logger = logging.getLogger(__name__)


def create_workers_kv_client(
    settings: WorkersKvSettings | None = None,
    *,
    monitor: ActivitySinkProtocol | None = None,
    handlers: Iterable[OutcomeHandlerProtocol] = (),
    http_client: httpx.AsyncClient | None = None,
) -> WorkersKvClient:
    """Cria WorkersKvClient com transporte HTTP configurado.

    Args:
        settings: Credenciais; default lido do ambiente (CF_EMAIL,
            CF_ACCOUNT_ID, CF_GLOBAL_API_KEY)
        monitor: Sink de atividade (ex: ActivityMonitor criado pelo chamador)
        handlers: Handlers de resultado
        http_client: httpx.AsyncClient compartilhado; se None, cada
            operação abre e fecha o seu

    Raises:
        MissingCredentialsError: credenciais ausentes
    """
    settings = settings or get_workers_kv_settings()
    transport = KvHttpClient(
        HttpClientConfig(timeout_seconds=settings.request_timeout_seconds),
        client=http_client,
    )
    client = WorkersKvClient(
        settings,
        monitor=monitor,
        handlers=handlers,
        transport=transport,
    )
    logger.info(
        "workers_kv_client_created",
        extra={
            "account_id": settings.account_id,
            "shared_http_client": http_client is not None,
        },
    )
    return client
