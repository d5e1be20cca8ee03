"""Protocolo de handlers de resultado de operação."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from api.connectors.workers_kv.models import OperationOutcome


class OutcomeHandlerProtocol(Protocol):
    """Função chamada após cada operação concluída.

    Handlers rodam em ordem de registro, de forma síncrona, depois do
    monitor de atividade. Exceções são logadas e não afetam o chamador.
    """

    def __call__(self, outcome: OperationOutcome) -> None: ...


class ActivitySinkProtocol(Protocol):
    """Sink de atividade injetado no bridge (ex: ActivityMonitor)."""

    def listen(self, outcome: OperationOutcome) -> None: ...
