"""Observabilidade: logs estruturados, correlação, métricas e atividade.

Re-exporta funções de correlation_id, métricas e o monitor de atividade.

Uso:
    from app.observability import ActivityMonitor, get_correlation_id
    from app.observability import record_latency, record_outcome
"""

from app.observability.activity_monitor import (
    CHANNEL_BY_VERDICT,
    ActivityChannel,
    ActivityMessage,
    ActivityMonitor,
    ActivityStream,
)
from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import record_latency, record_outcome

__all__ = [
    "CHANNEL_BY_VERDICT",
    "ActivityChannel",
    "ActivityMessage",
    "ActivityMonitor",
    "ActivityStream",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
