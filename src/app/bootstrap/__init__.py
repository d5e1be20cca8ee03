"""Bootstrap do cliente: inicialização e wiring.

Este módulo é o composition root: configura logging e conecta
implementações concretas (transporte HTTP, monitor de atividade) ao
cliente Workers KV.

Uso:
    from app.bootstrap import create_workers_kv_client, initialize_app
    from app.observability import ActivityMonitor

    initialize_app()
    monitor = ActivityMonitor()
    kv = create_workers_kv_client(monitor=monitor)
"""

from __future__ import annotations

import logging
import os

from app.bootstrap.clients import create_workers_kv_client
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_workers_kv_settings

# Nome do serviço para logs e métricas
SERVICE_NAME = "workers_kv"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging JSON com correlation_id e mascaramento de credenciais.

    Deve ser chamada uma vez no início do processo.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    settings = get_workers_kv_settings()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        secrets=[settings.global_api_key, settings.account_email],
    )


def validate_runtime_settings() -> None:
    """Valida credenciais no startup.

    Raises:
        RuntimeError: credenciais ausentes
    """
    errors = get_workers_kv_settings().validate_credentials()
    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok"},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "error_count": len(errors),
            "errors": errors,
        },
    )
    details = "\n".join(f"- {error}" for error in errors)
    raise RuntimeError(f"Configuração inválida:\n{details}")


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "SERVICE_NAME",
    "create_workers_kv_client",
    "initialize_app",
    "validate_runtime_settings",
]
