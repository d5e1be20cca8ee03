"""Bridge de operações Workers KV.

Orquestra uma operação lógica:
    build request -> transporte -> normalização -> classificação -> broadcast

Regras:
- Erros de montagem da requisição são locais: sobem direto, sem broadcast
- Sucesso, falha de negócio e exceção de transporte são sempre
  publicados (monitor primeiro, depois handlers em ordem de registro)
- Falha de negócio NÃO vira exceção aqui; o veredito volta no OwnResponse
- Exceção de transporte é publicada como INDETERMINATE e relançada como
  TransportError com a causa serializada
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import TYPE_CHECKING

from api.connectors.workers_kv import (
    OperationOutcome,
    OwnResponse,
    Verdict,
    build_transport_request,
    classify,
    normalize_response,
)
from api.connectors.workers_kv.kv_logging import (
    log_operation_result,
    log_transport_error,
)
from app.observability import (
    get_correlation_id,
    record_latency,
    record_outcome,
    reset_correlation_id,
    set_correlation_id,
)
from utils.errors import TransportError, serialize_error

if TYPE_CHECKING:
    from collections.abc import Iterable

    from api.connectors.workers_kv import (
        CommandRecord,
        OperationDescriptor,
        ValidationMode,
    )
    from app.protocols import (
        ActivitySinkProtocol,
        KvTransportProtocol,
        OutcomeHandlerProtocol,
    )
    from config.settings import WorkersKvSettings

logger = logging.getLogger(__name__)

VALIDATION_MODES: tuple[ValidationMode, ...] = ("full", "withoutResult", "string", False)


class OperationBridge:
    """Executa operações e publica o resultado de cada uma.

    Args:
        settings: Credenciais e endpoint (somente leitura)
        transport: Implementação de KvTransportProtocol
        monitor: Sink de atividade (ex: ActivityMonitor); opcional
        handlers: Handlers de resultado, chamados em ordem de registro
    """

    def __init__(
        self,
        settings: WorkersKvSettings,
        transport: KvTransportProtocol,
        monitor: ActivitySinkProtocol | None = None,
        handlers: Iterable[OutcomeHandlerProtocol] = (),
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._monitor = monitor
        self._handlers: list[OutcomeHandlerProtocol] = list(handlers)

    @property
    def monitor(self) -> ActivitySinkProtocol | None:
        return self._monitor

    def add_handler(self, handler: OutcomeHandlerProtocol) -> None:
        """Registra handler ao final da lista."""
        self._handlers.append(handler)

    async def execute(
        self,
        command: CommandRecord,
        descriptor: OperationDescriptor,
        validation_mode: ValidationMode = "full",
    ) -> OwnResponse:
        """Executa uma operação e devolve a resposta classificada.

        Raises:
            ValueError: modo de validação desconhecido
            RequestBuildError: descriptor inválido (sem broadcast)
            TransportError: falha de rede, redirect, content type ou JSON
                inválido (publicada como INDETERMINATE antes do raise)
        """
        if validation_mode not in VALIDATION_MODES:
            msg = f"Modo de validação desconhecido: {validation_mode!r}"
            raise ValueError(msg)

        if not descriptor.params:
            descriptor = replace(descriptor, params=None)
        request = build_transport_request(descriptor, self._settings)

        token = set_correlation_id()
        start = time.perf_counter()
        try:
            try:
                raw_response = await self._transport.send(request)
                canonical = await normalize_response(raw_response)
            except Exception as exc:
                cause = serialize_error(exc)
                log_transport_error(command, exc)
                self._notify(
                    OperationOutcome(
                        verdict=Verdict.INDETERMINATE,
                        command=command,
                        response=None,
                        error_detail=cause,
                    )
                )
                record_outcome(command.command, str(Verdict.INDETERMINATE), get_correlation_id())
                raise TransportError(
                    "Http fetch error",
                    "Error occurred when sending a http request",
                    detail=cause,
                ) from exc

            verdict = classify(canonical, validation_mode)
            own = OwnResponse(
                response=canonical,
                success=verdict.verdict,
                well_formed=verdict.well_formed,
                error=verdict.error,
            )
            log_operation_result(command, verdict.verdict, canonical.status_code, verdict.error)
            self._notify(
                OperationOutcome(
                    verdict=verdict.verdict,
                    command=command,
                    response=canonical,
                    error_detail=verdict.error,
                )
            )
            record_outcome(command.command, str(verdict.verdict), get_correlation_id())
            return own
        finally:
            latency_ms = (time.perf_counter() - start) * 1000
            record_latency("operation_bridge", command.command, latency_ms, get_correlation_id())
            reset_correlation_id(token)

    def _notify(self, outcome: OperationOutcome) -> None:
        """Publica no monitor e depois em cada handler, em ordem."""
        sinks = [] if self._monitor is None else [self._monitor.listen]
        for sink in [*sinks, *self._handlers]:
            try:
                sink(outcome)
            except Exception:
                logger.exception(
                    "kv_outcome_handler_failed",
                    extra={
                        "command": outcome.command.command,
                        "verdict": str(outcome.verdict),
                    },
                )
