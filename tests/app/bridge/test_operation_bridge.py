"""Testes do OperationBridge."""

from __future__ import annotations

import logging

import httpx
import pytest

from api.connectors.workers_kv import (
    CommandRecord,
    ContentType,
    OperationDescriptor,
    OperationOutcome,
    Verdict,
)
from app.bridge import OperationBridge
from app.observability import ActivityMonitor
from tests.fakes.fake_kv_api import FakeKvApi, envelope, json_response, string_response
from utils.errors import EmptyBodyError, TransportError

COMMAND = CommandRecord(command_type="namespace", command="List Namespaces")
LIST = OperationDescriptor("GET", "namespaces")


class _Channels:
    def __init__(self, monitor: ActivityMonitor) -> None:
        self.fired: list[str] = []
        self.details: list[object] = []
        stream = monitor.stream()
        stream.on_success(lambda m: self._record("success", m))
        stream.on_err(lambda m: self._record("err", m))
        stream.on_unknown(lambda m: self._record("unknown", m))

    def _record(self, name: str, message) -> None:
        self.fired.append(name)
        self.details.append(message.error_detail)


def _bridge(kv_settings, fake: FakeKvApi, **kwargs) -> tuple[OperationBridge, _Channels]:
    monitor = ActivityMonitor()
    channels = _Channels(monitor)
    return OperationBridge(kv_settings, fake.transport(), monitor, **kwargs), channels


class TestExecute:
    """Caminhos de execute."""

    @pytest.mark.asyncio
    async def test_success_path(self, kv_settings) -> None:
        fake = FakeKvApi(json_response(envelope(result=[])))
        bridge, channels = _bridge(kv_settings, fake)

        own = await bridge.execute(COMMAND, LIST)

        assert own.success == Verdict.SUCCESS
        assert own.well_formed is True
        assert own.error is None
        assert own.payload["result"] == []
        assert channels.fired == ["success"]

    @pytest.mark.asyncio
    async def test_business_failure_returned_not_raised(self, kv_settings) -> None:
        errors = [{"code": 10011, "message": "not found"}]
        fake = FakeKvApi(json_response(envelope(success=False, errors=errors), status_code=404))
        bridge, channels = _bridge(kv_settings, fake)

        own = await bridge.execute(COMMAND, LIST)

        assert own.success == Verdict.FAILURE
        assert own.error == errors
        assert channels.fired == ["err"]
        assert channels.details == [errors]

    @pytest.mark.asyncio
    async def test_validation_disabled_is_unknown(self, kv_settings) -> None:
        fake = FakeKvApi(json_response(envelope()))
        bridge, channels = _bridge(kv_settings, fake)

        own = await bridge.execute(COMMAND, LIST, validation_mode=False)

        assert own.success == Verdict.INDETERMINATE
        assert own.well_formed is None
        assert channels.fired == ["unknown"]

    @pytest.mark.asyncio
    async def test_string_payload(self, kv_settings) -> None:
        fake = FakeKvApi(string_response('"abc"'))
        bridge, channels = _bridge(kv_settings, fake)

        own = await bridge.execute(
            CommandRecord(command_type="CRUD", command="Read key-value pair"),
            OperationDescriptor("GET", "namespaces/n/values/k"),
            "string",
        )

        assert own.payload == "abc"
        assert own.success == Verdict.SUCCESS
        assert channels.fired == ["success"]

    @pytest.mark.asyncio
    async def test_empty_params_dropped(self, kv_settings) -> None:
        fake = FakeKvApi(json_response(envelope(result=[])))
        bridge, _ = _bridge(kv_settings, fake)

        await bridge.execute(COMMAND, OperationDescriptor("GET", "namespaces", params={}))

        assert fake.last_request.url.query == b""

    @pytest.mark.asyncio
    async def test_unknown_validation_mode(self, kv_settings) -> None:
        fake = FakeKvApi(json_response(envelope()))
        bridge, channels = _bridge(kv_settings, fake)

        with pytest.raises(ValueError):
            await bridge.execute(COMMAND, LIST, "partial")  # type: ignore[arg-type]
        assert fake.requests == []
        assert channels.fired == []


class TestTransportFailures:
    """Exceções de transporte: broadcast unknown e TransportError."""

    @pytest.mark.asyncio
    async def test_network_error(self, kv_settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        bridge, channels = _bridge(kv_settings, FakeKvApi(handler))

        with pytest.raises(TransportError) as exc_info:
            await bridge.execute(COMMAND, LIST)

        assert exc_info.value.title == "Http fetch error"
        assert exc_info.value.detail["name"] == "ConnectError"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert channels.fired == ["unknown"]
        assert channels.details[0]["name"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_unrecognized_content_type(self, kv_settings) -> None:
        fake = FakeKvApi(
            httpx.Response(502, content=b"<html>bad gateway</html>", headers={"content-type": "text/html"})
        )
        bridge, channels = _bridge(kv_settings, fake)

        with pytest.raises(TransportError) as exc_info:
            await bridge.execute(COMMAND, LIST)

        assert exc_info.value.detail["name"] == "Unrecognized content type"
        assert exc_info.value.detail["detail"] == {"content_type": "text/html"}
        assert channels.fired == ["unknown"]

    @pytest.mark.asyncio
    async def test_redirect(self, kv_settings) -> None:
        fake = FakeKvApi(httpx.Response(301, headers={"location": "https://moved.example/"}))
        bridge, channels = _bridge(kv_settings, fake)

        with pytest.raises(TransportError) as exc_info:
            await bridge.execute(COMMAND, LIST)

        assert exc_info.value.detail["name"] == "Redirect not followed"
        assert exc_info.value.detail["detail"]["status_code"] == 301
        assert len(fake.requests) == 1
        assert channels.fired == ["unknown"]

    @pytest.mark.asyncio
    async def test_request_build_error_not_broadcast(self, kv_settings) -> None:
        fake = FakeKvApi(json_response(envelope()))
        bridge, channels = _bridge(kv_settings, fake)

        with pytest.raises(EmptyBodyError):
            await bridge.execute(
                COMMAND,
                OperationDescriptor("POST", "namespaces", content_type=ContentType.JSON),
            )

        assert channels.fired == []
        assert fake.requests == []


class TestHandlers:
    """Handlers de resultado registrados."""

    @pytest.mark.asyncio
    async def test_handlers_called_in_order_after_monitor(self, kv_settings) -> None:
        order: list[str] = []
        monitor = ActivityMonitor()
        monitor.stream().on_success(lambda _: order.append("monitor"))

        def first(outcome: OperationOutcome) -> None:
            order.append("first")

        def second(outcome: OperationOutcome) -> None:
            order.append("second")

        fake = FakeKvApi(json_response(envelope(result=[])))
        bridge = OperationBridge(kv_settings, fake.transport(), monitor, [first])
        bridge.add_handler(second)

        await bridge.execute(COMMAND, LIST)

        assert order == ["monitor", "first", "second"]

    @pytest.mark.asyncio
    async def test_handler_receives_outcome_on_transport_error(self, kv_settings) -> None:
        outcomes: list[OperationOutcome] = []

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        bridge = OperationBridge(kv_settings, FakeKvApi(handler).transport(), handlers=[outcomes.append])

        with pytest.raises(TransportError):
            await bridge.execute(COMMAND, LIST)

        assert len(outcomes) == 1
        assert outcomes[0].verdict == Verdict.INDETERMINATE
        assert outcomes[0].response is None
        assert outcomes[0].command == COMMAND

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_affect_caller(
        self,
        kv_settings,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.ERROR)

        def boom(outcome: OperationOutcome) -> None:
            raise RuntimeError("handler failed")

        fake = FakeKvApi(json_response(envelope(result=[])))
        bridge = OperationBridge(kv_settings, fake.transport(), handlers=[boom])

        own = await bridge.execute(COMMAND, LIST)

        assert own.success == Verdict.SUCCESS
        assert any(r.message == "kv_outcome_handler_failed" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_secrets_not_logged(self, kv_settings, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG)
        fake = FakeKvApi(json_response(envelope(result=[])))
        bridge = OperationBridge(kv_settings, fake.transport())

        await bridge.execute(COMMAND, LIST)

        assert "secret-key" not in caplog.text
        for record in caplog.records:
            assert "secret-key" not in str(record.__dict__)
