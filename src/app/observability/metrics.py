"""Registro de métricas via structured logging.

As métricas são emitidas como logs estruturados e podem ser agregadas
depois pelo sistema de logs.

Métricas suportadas:
- Latência: tempo de cada operação KV
- Resultado: contador por veredito (success/failure/indeterminate)

Uso:
    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("operation_bridge", "Write key-value pair", latency_ms)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "operation_bridge")
        operation: Nome da operação (ex: "Read key-value pair")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_outcome(
    operation: str,
    verdict: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o veredito de uma operação (counter).

    Args:
        operation: Nome da operação
        verdict: success, failure ou indeterminate
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_outcome",
        extra={
            "metric_type": "outcome",
            "component": "operation_bridge",
            "operation": operation,
            "verdict": verdict,
            "correlation_id": correlation_id,
        },
    )
