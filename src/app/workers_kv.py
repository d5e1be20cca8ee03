"""Cliente Workers KV: uma chamada de método por operação remota.

Cada método monta o CommandRecord e o OperationDescriptor da operação,
delega ao OperationBridge e converte o veredito em retorno tipado ou em
OperationFailedError.

Uso:
    monitor = ActivityMonitor()
    kv = WorkersKvClient(monitor=monitor)
    monitor.stream().on_err(print)
    await kv.write("namespace-id", "key", "value")
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Literal

from api.connectors.workers_kv import (
    CommandInput,
    CommandRecord,
    ContentType,
    HttpClientConfig,
    KvHttpClient,
    OperationDescriptor,
    Verdict,
)
from app.bridge import OperationBridge
from app.domain import KeyListPage, Namespace
from config.settings import get_workers_kv_settings
from utils.errors import MissingCredentialsError, OperationFailedError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from api.connectors.workers_kv import OwnResponse, ValidationMode
    from api.connectors.workers_kv.models import CommandType
    from app.protocols import (
        ActivitySinkProtocol,
        KvTransportProtocol,
        OutcomeHandlerProtocol,
    )
    from config.settings import WorkersKvSettings

logger = logging.getLogger(__name__)

ResultKind = Literal["boolean", "result", "string", "page"]

NO_ERROR_INFO_MESSAGE = "Cloudflare did not return the error information."


def _warn_if_both_expirations(command: str, url_param: Mapping[str, Any] | None) -> None:
    """Avisa quando expiration e expiration_ttl vêm juntos (só o TTL vale)."""
    if url_param and "expiration" in url_param and "expiration_ttl" in url_param:
        logger.warning(
            "kv_expiration_conflict",
            extra={
                "command": command,
                "detail": "Only expiration_ttl will be used; expiration is ignored",
            },
        )


class WorkersKvClient:
    """Cliente das operações de namespace e chave/valor do Workers KV.

    Args:
        settings: Credenciais e endpoint; default lido do ambiente.
        monitor: Sink de atividade (ex: ActivityMonitor).
        handlers: Handlers de resultado chamados após cada operação.
        transport: Transporte HTTP; default KvHttpClient com o timeout
            configurado.

    Raises:
        MissingCredentialsError: email, account id ou API key ausente.
    """

    def __init__(
        self,
        settings: WorkersKvSettings | None = None,
        *,
        monitor: ActivitySinkProtocol | None = None,
        handlers: Iterable[OutcomeHandlerProtocol] = (),
        transport: KvTransportProtocol | None = None,
    ) -> None:
        settings = settings or get_workers_kv_settings()
        problems = settings.validate_credentials()
        if problems:
            raise MissingCredentialsError(
                "Missing Critical Authentication Info",
                "Account Id, Global Api Key and Account Email must not be empty",
                problems,
            )
        if transport is None:
            transport = KvHttpClient(
                HttpClientConfig(timeout_seconds=settings.request_timeout_seconds)
            )
        self._bridge = OperationBridge(settings, transport, monitor, handlers)

    @property
    def bridge(self) -> OperationBridge:
        return self._bridge

    async def _run(
        self,
        command_type: CommandType,
        command: str,
        descriptor: OperationDescriptor,
        command_input: CommandInput,
        validation_mode: ValidationMode = "full",
    ) -> OwnResponse:
        record = CommandRecord(command_type=command_type, command=command, input=command_input)
        return await self._bridge.execute(record, descriptor, validation_mode)

    @staticmethod
    def _result_from(kind: ResultKind, own: OwnResponse, command: str) -> Any:
        """Converte OwnResponse no retorno do método.

        Raises:
            OperationFailedError: veredito diferente de SUCCESS
        """
        if own.success != Verdict.SUCCESS:
            payload = own.payload
            if isinstance(payload, dict) and "errors" in payload:
                raise OperationFailedError(f"Failed to {command}", "", payload["errors"])
            raise OperationFailedError(
                f"Failed to {command}",
                NO_ERROR_INFO_MESSAGE,
                {
                    "status_code": own.response.status_code,
                    "http_success": own.response.http_success,
                },
            )

        if kind == "boolean":
            return True
        if kind == "string":
            return own.payload
        if kind == "page":
            return {
                "result": own.payload.get("result"),
                "result_info": own.payload.get("result_info"),
            }
        return own.payload["result"]

    # ──────────────────────────────────────────────────────────────────
    # Namespaces
    # ──────────────────────────────────────────────────────────────────

    async def list_namespaces(self, url_param: Mapping[str, Any] | None = None) -> list[Namespace]:
        """Lista os namespaces da conta.

        Args:
            url_param: page, per_page, order, direction
        """
        params = dict(url_param or {})
        command = "List Namespaces"
        own = await self._run(
            "namespace",
            command,
            OperationDescriptor("GET", "namespaces", params=params),
            CommandInput(url_param=params),
        )
        result = self._result_from("result", own, command)
        return [Namespace.model_validate(item) for item in result or []]

    async def create_namespace(self, data: Mapping[str, Any]) -> Namespace:
        """Cria namespace (`data = {"title": ...}`).

        A API devolve 400 se a conta já tem namespace com o mesmo título.
        """
        command = "Create a namespace"
        own = await self._run(
            "namespace",
            command,
            OperationDescriptor("POST", "namespaces", body=dict(data), content_type=ContentType.JSON),
            CommandInput(data=dict(data)),
        )
        return Namespace.model_validate(self._result_from("result", own, command))

    async def remove_namespace(self, namespace_id: str) -> bool:
        command = "Remove a namespace"
        path_param = {"namespace_id": namespace_id}
        own = await self._run(
            "namespace",
            command,
            OperationDescriptor("DELETE", f"namespaces/{namespace_id}"),
            CommandInput(relative_path_param=path_param),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    async def rename_namespace(self, namespace_id: str, data: Mapping[str, Any]) -> bool:
        """Altera o título do namespace (`data = {"title": ...}`)."""
        command = "Rename a namespace"
        path_param = {"namespace_id": namespace_id}
        own = await self._run(
            "namespace",
            command,
            OperationDescriptor(
                "PUT",
                f"namespaces/{namespace_id}",
                body=dict(data),
                content_type=ContentType.JSON,
            ),
            CommandInput(relative_path_param=path_param, data=dict(data)),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    async def list_namespace_keys(
        self,
        namespace_id: str,
        url_param: Mapping[str, Any] | None = None,
    ) -> KeyListPage:
        """Lista chaves do namespace (uma página).

        Args:
            namespace_id: Namespace alvo
            url_param: limit, cursor, prefix
        """
        params = dict(url_param or {})
        command = "Lists a namespace's keys."
        path_param = {"namespace_id": namespace_id}
        own = await self._run(
            "namespace",
            command,
            OperationDescriptor("GET", f"namespaces/{namespace_id}/keys", params=params),
            CommandInput(relative_path_param=path_param, url_param=params),
        )
        return KeyListPage.model_validate(self._result_from("page", own, command))

    # ──────────────────────────────────────────────────────────────────
    # Chave/valor
    # ──────────────────────────────────────────────────────────────────

    async def read_key_value_pair(self, namespace_id: str, key_name: str) -> str:
        """Lê o valor de uma chave.

        Caracteres especiais no nome da chave devem vir URL-encoded.
        """
        command = "Read key-value pair"
        path_param = {"namespace_id": namespace_id, "key_name": key_name}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor("GET", f"namespaces/{namespace_id}/values/{key_name}"),
            CommandInput(relative_path_param=path_param),
            "string",
        )
        return self._result_from("string", own, command)

    async def read_key_meta(self, namespace_id: str, key_name: str) -> Any:
        """Lê os metadados associados à chave."""
        command = "Read the metadata for a key"
        path_param = {"namespace_id": namespace_id, "key_name": key_name}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor("GET", f"namespaces/{namespace_id}/metadata/{key_name}"),
            CommandInput(relative_path_param=path_param),
        )
        return self._result_from("result", own, command)

    async def write_key_value_pair(
        self,
        namespace_id: str,
        key_name: str,
        value: Any,
        url_param: Mapping[str, Any] | None = None,
    ) -> bool:
        """Grava valor na chave (sobrescreve valor e expiração).

        Args:
            namespace_id: Namespace alvo
            key_name: Nome da chave
            value: Valor; enviado como texto JSON
            url_param: expiration (epoch) e/ou expiration_ttl (segundos, >= 60)
        """
        command = "Write key-value pair"
        _warn_if_both_expirations(command, url_param)
        params = dict(url_param or {})
        path_param = {"namespace_id": namespace_id, "key_name": key_name}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor(
                "PUT",
                f"namespaces/{namespace_id}/values/{key_name}",
                params=params,
                body=value,
                content_type=ContentType.PLAIN_TEXT,
            ),
            CommandInput(relative_path_param=path_param, data={"value": value}, url_param=params),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    async def write_key_value_pair_meta(
        self,
        namespace_id: str,
        key_name: str,
        data: Mapping[str, Any],
        url_param: Mapping[str, Any] | None = None,
    ) -> bool:
        """Grava valor com metadados (multipart: campos value e metadata).

        Args:
            data: {"value": ..., "metadata": {...}}; metadata vai como JSON
        """
        command = "Write key-value pair with metadata"
        _warn_if_both_expirations(command, url_param)
        form = {"value": data.get("value"), "metadata": json.dumps(data.get("metadata"))}
        params = dict(url_param) if url_param else None
        path_param = {"namespace_id": namespace_id, "key_name": key_name}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor(
                "PUT",
                f"namespaces/{namespace_id}/values/{key_name}",
                params=params,
                body=form,
                content_type=ContentType.FORM_DATA,
            ),
            CommandInput(relative_path_param=path_param, data=form, url_param=params),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    async def write_multiple_key_value_pairs(
        self,
        namespace_id: str,
        data: list[Mapping[str, Any]],
    ) -> bool:
        """Grava até 10.000 pares de uma vez.

        Cada item: key, value, e opcionalmente expiration, expiration_ttl,
        metadata e base64.
        """
        command = "Write multiple key-value pairs"
        items = [dict(item) for item in data]
        path_param = {"namespace_id": namespace_id}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor(
                "PUT",
                f"namespaces/{namespace_id}/bulk",
                body=items,
                content_type=ContentType.JSON,
            ),
            CommandInput(relative_path_param=path_param, data=items),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    async def delete_key_value_pair(self, namespace_id: str, key_name: str) -> bool:
        command = "Delete key-value pair"
        path_param = {"namespace_id": namespace_id, "key_name": key_name}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor("DELETE", f"namespaces/{namespace_id}/values/{key_name}"),
            CommandInput(relative_path_param=path_param),
        )
        return self._result_from("boolean", own, command)

    async def delete_multiple_key_value_pairs(
        self,
        namespace_id: str,
        key_names: list[str],
    ) -> bool:
        """Remove até 10.000 chaves do namespace."""
        command = "Delete multiple key-value pairs"
        keys = list(key_names)
        path_param = {"namespace_id": namespace_id}
        own = await self._run(
            "CRUD",
            command,
            OperationDescriptor(
                "DELETE",
                f"namespaces/{namespace_id}/bulk",
                body=keys,
                content_type=ContentType.JSON,
            ),
            CommandInput(relative_path_param=path_param, data=keys),
            "withoutResult",
        )
        return self._result_from("boolean", own, command)

    read = read_key_value_pair
    write = write_key_value_pair
    delete = delete_key_value_pair
