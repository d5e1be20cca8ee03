"""Monitor de atividade das operações KV.

Republica o resultado de cada operação concluída para observers.

Fluxo:
    bridge --listen(outcome)--> ActivityMonitor --relay--> ActivityStream(s)

Regras:
- Cada `stream()` cria um ActivityStream novo, ligado ao relay no momento
  da chamada. Atividade anterior à inscrição não é reenviada (sem backlog).
- Cada chamada a `listen` dispara exatamente um canal por stream:
  success, err ou unknown.
- Entrega síncrona: todos os callbacks rodam antes de `listen` retornar.
- Falha em callback é logada e não chega ao chamador da operação.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from api.connectors.workers_kv.models import Verdict
from app.observability.correlation import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable

    from api.connectors.workers_kv.models import (
        CanonicalResponse,
        CommandRecord,
        OperationOutcome,
    )

logger = logging.getLogger(__name__)


class ActivityChannel(StrEnum):
    """Canais de atividade (conjunto fechado)."""

    SUCCESS = "success"
    ERR = "err"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


CHANNEL_BY_VERDICT: dict[Verdict, ActivityChannel] = {
    Verdict.SUCCESS: ActivityChannel.SUCCESS,
    Verdict.FAILURE: ActivityChannel.ERR,
    Verdict.INDETERMINATE: ActivityChannel.UNKNOWN,
}


@dataclass(frozen=True)
class ActivityMessage:
    """Mensagem entregue aos observers.

    Attributes:
        timestamp: Momento do dispatch (UTC)
        command: Operação lógica pedida
        response: Resposta canônica (None em exceção de transporte)
        error_detail: Erros do envelope ou causa serializada (None em success)
        correlation_id: ID de correlação da operação
    """

    timestamp: datetime
    command: CommandRecord
    response: CanonicalResponse | None
    error_detail: Any = None
    correlation_id: str = ""


class ActivityStream:
    """Handle de observação devolvido por `ActivityMonitor.stream()`."""

    def __init__(self, monitor: ActivityMonitor) -> None:
        self._monitor = monitor
        self._callbacks: dict[ActivityChannel, list[Callable[[ActivityMessage], None]]] = {
            channel: [] for channel in ActivityChannel
        }

    def on(
        self,
        channel: ActivityChannel | str,
        callback: Callable[[ActivityMessage], None],
    ) -> ActivityStream:
        """Registra callback em um canal.

        Raises:
            ValueError: canal fora de success/err/unknown
        """
        self._callbacks[ActivityChannel(channel)].append(callback)
        return self

    def on_success(self, callback: Callable[[ActivityMessage], None]) -> ActivityStream:
        return self.on(ActivityChannel.SUCCESS, callback)

    def on_err(self, callback: Callable[[ActivityMessage], None]) -> ActivityStream:
        return self.on(ActivityChannel.ERR, callback)

    def on_unknown(self, callback: Callable[[ActivityMessage], None]) -> ActivityStream:
        return self.on(ActivityChannel.UNKNOWN, callback)

    def close(self) -> None:
        """Desliga o stream do relay; callbacks deixam de ser chamados."""
        self._monitor.detach(self)

    def dispatch(self, channel: ActivityChannel, message: ActivityMessage) -> None:
        for callback in list(self._callbacks[channel]):
            try:
                callback(message)
            except Exception:
                logger.exception(
                    "kv_activity_observer_failed",
                    extra={
                        "channel": str(channel),
                        "command": message.command.command,
                        "correlation_id": message.correlation_id,
                    },
                )


class ActivityMonitor:
    """Relay único entre o bridge e os streams inscritos."""

    def __init__(self) -> None:
        self._streams: list[ActivityStream] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._streams)

    def stream(self) -> ActivityStream:
        """Cria um stream novo, inscrito a partir deste momento."""
        activity_stream = ActivityStream(self)
        self._streams.append(activity_stream)
        return activity_stream

    def detach(self, activity_stream: ActivityStream) -> None:
        if activity_stream in self._streams:
            self._streams.remove(activity_stream)

    def listen(self, outcome: OperationOutcome) -> None:
        """Sink chamado pelo bridge uma vez por operação concluída."""
        channel = CHANNEL_BY_VERDICT[outcome.verdict]
        message = ActivityMessage(
            timestamp=datetime.now(UTC),
            command=outcome.command,
            response=outcome.response,
            error_detail=None if channel == ActivityChannel.SUCCESS else outcome.error_detail,
            correlation_id=get_correlation_id(),
        )
        for activity_stream in list(self._streams):
            activity_stream.dispatch(channel, message)
