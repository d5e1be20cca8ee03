"""Testes da hierarquia de erros e da serialização."""

from __future__ import annotations

import json

import pytest

from utils.errors import (
    EmptyBodyError,
    InvalidBodyShapeError,
    OperationFailedError,
    RedirectNotFollowedError,
    RequestBuildError,
    TransportError,
    UnrecognizedContentTypeError,
    WorkersKvError,
    serialize_error,
)


class TestWorkersKvError:
    """Formato das exceções de domínio."""

    def test_str_with_message(self) -> None:
        error = WorkersKvError("Failed to Remove a namespace", "Cloudflare did not return the error information.")
        assert str(error) == "Failed to Remove a namespace: Cloudflare did not return the error information."

    def test_str_without_message(self) -> None:
        error = OperationFailedError("Failed to Remove a namespace", "", [{"code": 1}])
        assert str(error) == "Failed to Remove a namespace"
        assert error.detail == [{"code": 1}]

    @pytest.mark.parametrize("cls", [EmptyBodyError, InvalidBodyShapeError])
    def test_build_errors_share_base(self, cls: type[WorkersKvError]) -> None:
        assert issubclass(cls, RequestBuildError)
        assert issubclass(cls, WorkersKvError)

    def test_unrecognized_content_type_detail(self) -> None:
        error = UnrecognizedContentTypeError("text/html")
        assert error.content_type == "text/html"
        assert error.detail == {"content_type": "text/html"}

    def test_redirect_detail(self) -> None:
        error = RedirectNotFollowedError(307, "https://x.example/")
        assert error.detail == {"status_code": 307, "location": "https://x.example/"}


class TestSerializeError:
    """serialize_error."""

    def test_plain_exception(self) -> None:
        data = serialize_error(ValueError("bad value"))
        assert data == {"name": "ValueError", "message": "bad value"}

    def test_domain_error_uses_title_and_detail(self) -> None:
        data = serialize_error(UnrecognizedContentTypeError(None))
        assert data["name"] == "Unrecognized content type"
        assert data["detail"] == {"content_type": None}

    def test_cause_chain(self) -> None:
        try:
            try:
                raise OSError("socket closed")
            except OSError as exc:
                raise TransportError("Http fetch error", "send failed") from exc
        except TransportError as error:
            data = serialize_error(error)

        assert data["name"] == "Http fetch error"
        assert data["cause"] == {"name": "OSError", "message": "socket closed"}

    def test_result_is_json_serializable(self) -> None:
        json.dumps(serialize_error(RedirectNotFollowedError(301, None)))

    def test_depth_is_bounded(self) -> None:
        error: BaseException = ValueError("root")
        for level in range(10):
            try:
                raise RuntimeError(f"level {level}") from error
            except RuntimeError as exc:
                error = exc

        data = serialize_error(error)
        depth = 0
        while "cause" in data:
            data = data["cause"]
            depth += 1
        assert depth == 5
