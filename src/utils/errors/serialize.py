"""Serialização de exceções para payloads estruturados (logs, observers)."""

from __future__ import annotations

from typing import Any

from .exceptions import WorkersKvError

# Limite de profundidade da cadeia de causas
_MAX_CAUSE_DEPTH = 5


def serialize_error(exc: BaseException, *, _depth: int = 0) -> dict[str, Any]:
    """Converte exceção em dict JSON-friendly.

    Campos:
        name: Nome da classe (ou `title` para WorkersKvError)
        message: Mensagem da exceção
        detail: Detalhe estruturado (apenas WorkersKvError)
        cause: Causa encadeada (`raise ... from ...`), recursiva
    """
    data: dict[str, Any] = {
        "name": type(exc).__name__,
        "message": str(exc),
    }
    if isinstance(exc, WorkersKvError):
        data["name"] = exc.title
        data["detail"] = exc.detail

    cause = exc.__cause__ or exc.__context__
    if cause is not None and _depth < _MAX_CAUSE_DEPTH:
        data["cause"] = serialize_error(cause, _depth=_depth + 1)
    return data
