"""Helpers de logging do conector Workers KV (sem credenciais)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from .models import CommandRecord, Verdict

logger = logging.getLogger(__name__)


def _path_only(url: str) -> str:
    """Remove query string (pode conter valores de usuário)."""
    return urlsplit(url).path


def log_http_exchange(method: str, url: str, status_code: int) -> None:
    """Loga a troca HTTP em nível debug."""
    logger.debug(
        "kv_http_exchange",
        extra={
            "method": method,
            "endpoint": _path_only(url),
            "status_code": status_code,
        },
    )


def log_operation_result(
    command: CommandRecord,
    verdict: Verdict,
    status_code: int | None,
    error: Any = None,
) -> None:
    """Loga o resultado classificado de uma operação."""
    extra = {
        "command": command.command,
        "command_type": command.command_type,
        "verdict": str(verdict),
        "status_code": status_code,
    }
    if error is None:
        logger.info("kv_operation_completed", extra=extra)
        return
    extra["errors"] = error
    logger.warning("kv_operation_failed", extra=extra)


def log_transport_error(command: CommandRecord, exc: BaseException) -> None:
    """Loga exceção de transporte antes do re-raise."""
    logger.error(
        "kv_transport_error",
        extra={
            "command": command.command,
            "command_type": command.command_type,
            "error_type": type(exc).__name__,
        },
    )
